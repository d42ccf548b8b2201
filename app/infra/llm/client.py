import os

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler

from app.core.config import settings
from app.core.exceptions import LLMError, QuotaExceeded
from app.core.logging import get_logger
from app.domain.resume.schemas import Completion, ParsedCompletion, RawCompletion
from app.infra.llm.factory import get_generator_client

logger = get_logger(__name__)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url

QUOTA_STATUS_CODES = frozenset({429})
QUOTA_ERROR_CODES = frozenset({"insufficient_quota", "rate_limit_exceeded", "resource_exhausted"})
QUOTA_MESSAGE_MARKERS = ("quota", "resource_exhausted")


def get_langfuse_handler() -> CallbackHandler | None:
    """Return the Langfuse callback handler when keys are configured"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def _error_chain(exc: BaseException):
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def is_quota_error(exc: BaseException) -> bool:
    """Classify a provider error as a quota / rate limit condition.

    Checks the HTTP status, the provider error code and, last, the message
    text of the error and of the errors it was raised from.
    """
    for error in _error_chain(exc):
        status = getattr(error, "status_code", None)
        code = getattr(error, "code", None)
        if status in QUOTA_STATUS_CODES or (isinstance(code, int) and code in QUOTA_STATUS_CODES):
            return True
        if isinstance(code, str) and code.lower() in QUOTA_ERROR_CODES:
            return True
        message = str(error).lower()
        if any(marker in message for marker in QUOTA_MESSAGE_MARKERS):
            return True
    return False


def ensure_configured() -> None:
    """Resolve the provider client so missing credentials fail before any outbound call

    Raises:
        ConfigurationError: provider credentials are missing
    """
    get_generator_client()


def to_completion(message: BaseMessage) -> Completion:
    """Wrap a chat model reply as raw text or already parsed data"""
    parsed = message.additional_kwargs.get("parsed") if message.additional_kwargs else None
    if isinstance(parsed, dict):
        return ParsedCompletion(data=parsed)

    content = message.content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        content = "".join(parts)

    return RawCompletion(text=content or "")


async def request_completion(
    system_prompt: str,
    human_prompt: str,
    tags: list[str] | None = None,
    session_id: str | None = None,
) -> Completion:
    """Send one prompt to the configured model in JSON output mode.

    Args:
        system_prompt: system message text
        human_prompt: user message text
        tags: Langfuse tags
        session_id: Langfuse session id

    Returns:
        the model reply, raw or parsed

    Raises:
        ConfigurationError: provider credentials are missing
        QuotaExceeded: provider reported a quota / rate limit condition
        LLMError: any other provider failure
    """
    client = get_generator_client()

    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": tags or [],
        },
    }

    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=human_prompt),
    ]

    logger.debug("llm request", model=client.get_model_name(), prompt_length=len(human_prompt))
    try:
        message = await client.get_json_model().ainvoke(messages, config=config)
    except Exception as e:
        if is_quota_error(e):
            logger.warning("llm quota exceeded", error_type=type(e).__name__)
            raise QuotaExceeded(detail=str(e)) from e
        logger.error("llm request failed", error_type=type(e).__name__, error=str(e))
        raise LLMError(detail=str(e) or type(e).__name__) from e

    logger.debug("llm response received", model=client.get_model_name())
    return to_completion(message)
