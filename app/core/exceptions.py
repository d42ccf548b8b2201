from enum import Enum

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """Error codes returned to API clients"""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    UPSTREAM_UNAUTHORIZED = "UPSTREAM_UNAUTHORIZED"
    UPSTREAM_FETCH_ERROR = "UPSTREAM_FETCH_ERROR"
    EMPTY_COMPLETION = "EMPTY_COMPLETION"
    UNPARSABLE_COMPLETION = "UNPARSABLE_COMPLETION"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    LLM_ERROR = "LLM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class ConfigurationError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            message="Service is not configured",
            detail=detail,
        )


class ValidationError(CustomException):
    def __init__(self, detail: str | None = None, issues: list[dict] | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message="Invalid request payload",
            detail=detail,
        )
        self.issues = issues or []


class UpstreamAuthError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=401,
            error_code=ErrorCode.UPSTREAM_UNAUTHORIZED,
            message="Missing or invalid GitHub access token",
            detail=detail,
        )


class UpstreamFetchError(CustomException):
    def __init__(self, status_code: int, detail: str | None = None):
        super().__init__(
            status_code=status_code,
            error_code=ErrorCode.UPSTREAM_FETCH_ERROR,
            message="Failed to fetch from GitHub",
            detail=detail,
        )


class EmptyCompletion(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.EMPTY_COMPLETION,
            message="No content received from the language model",
            detail=detail,
        )


class UnparsableCompletion(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.UNPARSABLE_COMPLETION,
            message="Failed to parse model output as JSON",
            detail=detail,
        )


class QuotaExceeded(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=429,
            error_code=ErrorCode.QUOTA_EXCEEDED,
            message="Language model quota or rate limit exceeded",
            detail=detail,
        )


class LLMError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.LLM_ERROR,
            message="Language model call failed",
            detail=detail,
        )


def _issues_from_request_validation(exc: RequestValidationError) -> list[dict]:
    issues = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        issues.append({"field": ".".join(loc) or "body", "message": error.get("msg", "")})
    return issues


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        content = {
            "error_code": exc.error_code,
            "message": exc.message,
        }
        if exc.detail and not settings.is_production:
            content["detail"] = exc.detail
        if isinstance(exc, ValidationError):
            content["issues"] = exc.issues

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "error_code": ErrorCode.INVALID_INPUT,
                "message": "Invalid request payload",
                "issues": _issues_from_request_validation(exc),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("unhandled error", path=request.url.path, error=str(exc), exc_info=True)
        content = {
            "error_code": ErrorCode.INTERNAL_ERROR,
            "message": "Internal server error",
        }
        if not settings.is_production:
            content["detail"] = str(exc) or type(exc).__name__
        return JSONResponse(status_code=500, content=content)
