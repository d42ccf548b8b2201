"""
structlog setup

Console rendering in development, JSON lines in production. Every event gets
the request id and endpoint of the request it was logged from, and GitHub
tokens, OAuth codes and provider API keys are masked before rendering.
"""

import logging
import re
import sys

import structlog

from app.core.config import settings
from app.core.context import get_endpoint, get_request_id

MASK = "***"

CREDENTIAL_PATTERNS = [
    (re.compile(r"\b(gh[opsu]_|github_pat_)[A-Za-z0-9_]+"), rf"\1{MASK}"),
    (re.compile(r"\b(sk-)[A-Za-z0-9_-]{8,}"), rf"\1{MASK}"),
    (re.compile(r"\b(AIza)[A-Za-z0-9_-]{8,}"), rf"\1{MASK}"),
    (re.compile(r"(Bearer\s+)\S+", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"\b((?:access_token|client_secret|code|state|api[_-]?key)=)[^&\s]+", re.IGNORECASE), rf"\1{MASK}"),
]

SENSITIVE_KEYS = frozenset({"token", "access_token", "client_secret", "authorization", "api_key"})

LIBRARY_LOGGERS = (
    "httpcore",
    "httpx",
    "langfuse",
    "langchain",
    "openai",
    "google_genai",
    "anyio",
)


def mask_credentials(value: str) -> str:
    for pattern, replacement in CREDENTIAL_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def _mask(key: str, value):
    if isinstance(key, str) and key.lower() in SENSITIVE_KEYS and value:
        return MASK
    if isinstance(value, str):
        return mask_credentials(value)
    if isinstance(value, dict):
        return {k: _mask(k, v) for k, v in value.items()}
    if isinstance(value, list):
        return [_mask("", v) for v in value]
    return value


def add_context_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    request_id = get_request_id()
    if request_id:
        event_dict.setdefault("request_id", request_id)
    endpoint = get_endpoint()
    if endpoint:
        event_dict.setdefault("endpoint", endpoint)
    return event_dict


def mask_credentials_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """Runs in every environment"""
    return {key: _mask(key, value) for key, value in event_dict.items()}


def _renderer():
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(level: str | None = None) -> None:
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    shared_processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        add_context_processor,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.is_production:
        shared_processors.append(structlog.processors.format_exc_info)
    shared_processors.extend([mask_credentials_processor, structlog.processors.UnicodeDecoder()])

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer()],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # uvicorn propagates to root so its lines share the same format
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
