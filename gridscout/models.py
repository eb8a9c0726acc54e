from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from .config import DEFAULT_SERIES_COUNT, clamp_series_count


class Game(str, Enum):
    VAL = "VAL"
    LOL = "LOL"

    @property
    def label(self) -> str:
        return GAME_LABELS[self]


GAME_LABELS = {
    Game.VAL: "Valorant",
    Game.LOL: "League of Legends",
}


@dataclass(frozen=True)
class QueryInput:
    game: Game
    opponent: str
    region: str
    series_count: int

    @classmethod
    def build(
        cls,
        game: Any,
        opponent: Optional[str] = "",
        region: Optional[str] = "",
        series_count: Any = DEFAULT_SERIES_COUNT,
    ) -> "QueryInput":
        """Strip text fields, coerce the game code and clamp the series count."""
        try:
            count = int(series_count or DEFAULT_SERIES_COUNT)
        except (TypeError, ValueError):
            count = DEFAULT_SERIES_COUNT
        return cls(
            game=Game(str(getattr(game, "value", game)).upper()),
            opponent=(opponent or "").strip(),
            region=(region or "").strip(),
            series_count=clamp_series_count(count),
        )


@dataclass(frozen=True)
class TeamSummary:
    id: str
    name: str
    logo_url: Optional[str] = None


@dataclass(frozen=True)
class TournamentSummary:
    id: str
    name: str


@dataclass(frozen=True)
class SeriesSummary:
    id: str
    date: str
    opponent: str
    result: str
    map_or_game: str
    tournament: Optional[TournamentSummary] = None
    teams: Tuple[TeamSummary, ...] = ()


@dataclass(frozen=True)
class ReportSection:
    title: str
    bullets: Tuple[str, ...]


@dataclass(frozen=True)
class ScoutingReport:
    heading: str
    confidence: int
    generated_at: str
    notes: Tuple[str, ...]
    tendencies: ReportSection
    strategies: ReportSection
    defaults: ReportSection
    comps: ReportSection
    series: Tuple[SeriesSummary, ...] = ()

    @property
    def sections(self) -> List[ReportSection]:
        return [self.tendencies, self.strategies, self.defaults, self.comps]


@dataclass(frozen=True)
class ChartMetric:
    label: str
    value: int


@dataclass(frozen=True)
class QuerySnapshot:
    game: str
    opponent: str
    region: str


@dataclass(frozen=True)
class AvailabilityRow:
    game: str
    opponent: str
    region: str
    series_id: str
    date: str


@dataclass
class AvailabilitySummary:
    rows: List[AvailabilityRow] = field(default_factory=list)
    opponent_count: int = 0
    region_count: int = 0
