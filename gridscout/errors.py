from __future__ import annotations

from typing import Optional, Type


AUTH_STATUSES = (401, 403)
AUTH_MARKERS = ("forbidden", "unauthorized")


class GridRequestError(RuntimeError):
    """Base class for failed GRID requests. ``status`` is the HTTP status when known."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class AuthFailure(GridRequestError):
    pass


class BadRequestFailure(GridRequestError):
    pass


class RequestFailure(GridRequestError):
    pass


def is_auth_failure(message: str, status: Optional[int] = None) -> bool:
    if status in AUTH_STATUSES:
        return True
    normalized = (message or "").lower()
    return any(marker in normalized for marker in AUTH_MARKERS)


def classify_failure(message: str, status: Optional[int] = None) -> Type[GridRequestError]:
    if is_auth_failure(message, status):
        return AuthFailure
    if status == 400:
        return BadRequestFailure
    return RequestFailure


def build_failure(message: str, status: Optional[int] = None) -> GridRequestError:
    return classify_failure(message, status)(message, status)
