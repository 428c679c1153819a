from __future__ import annotations

from contextvars import ContextVar


_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_USERNAME_CTX: ContextVar[str | None] = ContextVar("username", default=None)


def set_request_context(*, request_id: str | None = None, username: str | None = None) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if username is not None:
        _USERNAME_CTX.set(username)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_username() -> str | None:
    return _USERNAME_CTX.get()


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _USERNAME_CTX.set(None)
