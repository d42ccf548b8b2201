from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import BaseLLMClient


class VLLMClient(BaseLLMClient):
    """Self-hosted OpenAI-compatible endpoint (vLLM)"""

    def __init__(self):
        if not settings.vllm_api_url:
            raise ConfigurationError("VLLM_API_URL is not defined in environment variables")

        self._model = ChatOpenAI(
            model=settings.vllm_model,
            api_key=settings.vllm_api_key or "EMPTY",
            base_url=settings.vllm_api_url,
            timeout=settings.vllm_timeout,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            max_retries=0,
        )

    def get_chat_model(self) -> BaseChatModel:
        return self._model

    def get_model_name(self) -> str:
        return settings.vllm_model
