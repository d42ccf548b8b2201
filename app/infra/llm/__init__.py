from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import ensure_configured, is_quota_error, request_completion
from app.infra.llm.factory import get_generator_client, reset_clients
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "VLLMClient",
    "GeminiClient",
    "get_generator_client",
    "reset_clients",
    "request_completion",
    "ensure_configured",
    "is_quota_error",
]
