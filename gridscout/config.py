from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional


CENTRAL_DATA_URL = "https://api-op.grid.gg/central-data/graphql"

DEFAULT_TITLE_IDS: Dict[str, str] = {
    "VAL": "6",
    "LOL": "1",
}

MIN_SERIES_COUNT = 1
MAX_SERIES_COUNT = 50
DEFAULT_SERIES_COUNT = 5
DEFAULT_TIMEOUT_S = 30
DEFAULT_MOCK_DELAY_S = 0.45


def clamp_series_count(value: int) -> int:
    return min(max(int(value), MIN_SERIES_COUNT), MAX_SERIES_COUNT)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "0").strip().lower() in {"1", "true", "yes"}


def _env_number(value: Optional[str], fallback: str) -> str:
    """Parse a positive numeric env value, keeping the default otherwise."""
    try:
        parsed = float(value) if value is not None else None
    except ValueError:
        parsed = None
    if parsed is None or parsed != parsed or parsed <= 0 or parsed == float("inf"):
        return fallback
    return str(int(parsed)) if parsed.is_integer() else str(parsed)


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.environ.get(name, fallback))
    except ValueError:
        return fallback


@dataclass(frozen=True)
class ClientConfig:
    api_key: Optional[str] = None
    force_mock: bool = False
    url: str = CENTRAL_DATA_URL
    title_ids: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TITLE_IDS))
    timeout_s: float = DEFAULT_TIMEOUT_S
    mock_delay_s: float = DEFAULT_MOCK_DELAY_S

    @property
    def use_mock(self) -> bool:
        return not self.api_key or self.force_mock

    def title_id(self, game: str) -> str:
        return self.title_ids.get(game) or DEFAULT_TITLE_IDS[game]


def client_config_from_env() -> ClientConfig:
    api_key = (os.environ.get("GRID_API_KEY") or "").strip() or None
    title_ids = {
        "VAL": _env_number(os.environ.get("GRID_VALORANT_TITLE_ID"), DEFAULT_TITLE_IDS["VAL"]),
        "LOL": _env_number(os.environ.get("GRID_LOL_TITLE_ID"), DEFAULT_TITLE_IDS["LOL"]),
    }
    return ClientConfig(
        api_key=api_key,
        force_mock=_env_flag("GRID_MOCK"),
        url=os.environ.get("GRID_GRAPHQL_URL", CENTRAL_DATA_URL),
        title_ids=title_ids,
        timeout_s=_env_float("GRID_TIMEOUT_S", DEFAULT_TIMEOUT_S),
        mock_delay_s=_env_float("GRID_MOCK_DELAY_S", DEFAULT_MOCK_DELAY_S),
    )
