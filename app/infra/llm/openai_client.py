from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """OpenAI API client"""

    def __init__(self):
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is not defined in environment variables")

        self._model = ChatOpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            max_retries=0,
        )

    def get_chat_model(self) -> BaseChatModel:
        return self._model

    def get_model_name(self) -> str:
        return settings.openai_model
