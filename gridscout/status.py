"""Observable API status shared between the client and the presentation layer."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from .config import ClientConfig


class ApiStatus(str, Enum):
    """Live/mock state of the upstream connection."""

    AWAITING_CREDENTIAL = "awaiting-credential"
    MOCK = "mock"
    LIVE = "live"
    LIVE_FORBIDDEN = "live-forbidden"

    @property
    def live(self) -> bool:
        return self in (ApiStatus.LIVE, ApiStatus.LIVE_FORBIDDEN)


AWAITING_MESSAGE = "Awaiting API key"
MOCK_FORCED_MESSAGE = "API key detected (mock forced)"
LIVE_READY_MESSAGE = "Live API ready"
FORBIDDEN_MESSAGE = "Live API forbidden; check API key access"


class StatusSink(Protocol):
    def update(self, state: ApiStatus, message: Optional[str] = None) -> None:
        ...


@dataclass
class StatusIndicator:
    """Current upstream state. Written from executor threads, so state and message change together."""

    state: ApiStatus
    message: str
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def update(self, state: ApiStatus, message: Optional[str] = None) -> None:
        with self._lock:
            self.state = state
            if message is not None:
                self.message = message

    @property
    def live(self) -> bool:
        return self.state.live

    def as_dict(self) -> dict:
        with self._lock:
            state, message = self.state, self.message
        return {"state": state.value, "message": message, "live": state.live}


def initial_status(config: ClientConfig) -> StatusIndicator:
    if not config.api_key:
        return StatusIndicator(ApiStatus.AWAITING_CREDENTIAL, AWAITING_MESSAGE)
    if config.force_mock:
        return StatusIndicator(ApiStatus.MOCK, MOCK_FORCED_MESSAGE)
    return StatusIndicator(ApiStatus.LIVE, LIVE_READY_MESSAGE)
