from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import Runnable


class BaseLLMClient(ABC):
    """Abstract LLM client"""

    @abstractmethod
    def get_chat_model(self) -> BaseChatModel:
        """Return the LangChain chat model"""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Return the configured model name"""
        pass

    def get_json_model(self) -> Runnable:
        """Return the chat model in JSON output mode"""
        return self.get_chat_model().bind(response_format={"type": "json_object"})
