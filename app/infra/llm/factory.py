from typing import Literal

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

logger = get_logger(__name__)

LLMProvider = Literal["openai", "vllm", "gemini"]

_PROVIDERS: dict[str, type[BaseLLMClient]] = {
    "openai": OpenAIClient,
    "vllm": VLLMClient,
    "gemini": GeminiClient,
}

_generator_client: BaseLLMClient | None = None


def get_generator_client() -> BaseLLMClient:
    """Return the LLM client used for resume generation and profile analysis"""
    global _generator_client

    if _generator_client is not None:
        return _generator_client

    provider = settings.llm_provider.lower()
    client_class = _PROVIDERS.get(provider)
    if client_class is None:
        raise ConfigurationError(f"Unsupported LLM provider: {provider}")

    _generator_client = client_class()
    logger.info("llm client initialised", provider=provider, model=_generator_client.get_model_name())

    return _generator_client


def reset_clients() -> None:
    """Drop the cached client, used by tests"""
    global _generator_client
    _generator_client = None
