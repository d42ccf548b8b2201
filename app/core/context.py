"""
Per-request context shared by the logging processors

The request id doubles as the Langfuse session id, so one trace groups every
model call made while serving a single HTTP request.
"""

import re
import uuid
from contextvars import ContextVar

REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
endpoint_var: ContextVar[str | None] = ContextVar("endpoint", default=None)


def get_request_id() -> str | None:
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Use the caller's X-Request-ID when it is well formed, else a fresh one"""
    if not request_id or not REQUEST_ID_PATTERN.fullmatch(request_id):
        request_id = uuid.uuid4().hex[:8]
    request_id_var.set(request_id)
    return request_id


def get_endpoint() -> str | None:
    return endpoint_var.get()


def set_endpoint(endpoint: str | None) -> None:
    endpoint_var.set(endpoint)


def clear_context() -> None:
    request_id_var.set(None)
    endpoint_var.set(None)
