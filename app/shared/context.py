"""Request-scoped context using contextvars.

Holds the request ID of the HTTP call (or CLI run) that started the current
scheduler tick so every log line of that tick can be correlated.

Usage:
    token = set_request_id("tick-123")
    try:
        ...
    finally:
        reset_request_id(token)
"""

from contextvars import ContextVar, Token

NO_REQUEST_ID = "-"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def set_request_id(request_id: str) -> Token[str]:
    """Bind request_id to the current async task. Returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)


def get_request_id() -> str:
    """Current request ID, or "-" outside a request."""
    return _request_id.get()
