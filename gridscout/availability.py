from __future__ import annotations

from typing import List, Sequence

from .models import AvailabilityRow, AvailabilitySummary, Game, SeriesSummary
from .normalize import UNKNOWN_TEAM


def extract_region_label(map_or_game: str) -> str:
    if not map_or_game:
        return "Global feed"
    parts = [part.strip() for part in map_or_game.split("|") if part.strip()]
    if len(parts) >= 2:
        return parts[-1]
    return map_or_game


def series_opponent_label(series: SeriesSummary) -> str:
    names = [t.name for t in series.teams if t.name and t.name != UNKNOWN_TEAM]
    if len(names) >= 2:
        return f"{names[0]} vs {names[1]}"
    if names:
        return names[0]
    return series.opponent or "Unknown opponent"


def build_availability_rows(series: Sequence[SeriesSummary], game: Game) -> List[AvailabilityRow]:
    return [
        AvailabilityRow(
            game=game.label,
            opponent=series_opponent_label(s),
            region=extract_region_label(s.map_or_game),
            series_id=s.id,
            date=s.date,
        )
        for s in series
    ]


def summarize_availability(rows: Sequence[AvailabilityRow]) -> AvailabilitySummary:
    return AvailabilitySummary(
        rows=list(rows),
        opponent_count=len({r.opponent.lower() for r in rows}),
        region_count=len({r.region.lower() for r in rows}),
    )
