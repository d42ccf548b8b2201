from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import BaseLLMClient


class GeminiClient(BaseLLMClient):
    """Gemini client"""

    def __init__(self):
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is not defined in environment variables")

        self._model = ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=settings.gemini_api_key,
            timeout=settings.gemini_timeout,
            temperature=settings.llm_temperature,
            max_output_tokens=settings.llm_max_tokens,
            response_mime_type="application/json",
            max_retries=0,
        )

    def get_chat_model(self) -> BaseChatModel:
        return self._model

    def get_model_name(self) -> str:
        return settings.gemini_model

    def get_json_model(self) -> Runnable:
        """JSON mode is configured on the model itself"""
        return self._model
