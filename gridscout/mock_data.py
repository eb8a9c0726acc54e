"""Fixed sample series served when no live GRID credential is configured."""

from __future__ import annotations

from typing import List

from .models import SeriesSummary, TeamSummary, TournamentSummary


def _series(
    series_id: str,
    date: str,
    tournament_id: str,
    tournament_name: str,
    result: str,
    feed: str,
    teams: List[tuple],
) -> SeriesSummary:
    return SeriesSummary(
        id=series_id,
        date=date,
        opponent=tournament_name,
        result=result,
        map_or_game=f"VAL (6) | {feed}",
        tournament=TournamentSummary(id=tournament_id, name=tournament_name),
        teams=tuple(TeamSummary(id=team_id, name=name) for team_id, name in teams),
    )


MOCK_SERIES: List[SeriesSummary] = [
    _series(
        "SR-1145", "2026-01-18", "T-556", "Solar Invitational", "2-1", "EMEA feed",
        [("TM-120", "Nova Prime"), ("TM-217", "Violet Crest")],
    ),
    _series(
        "SR-1138", "2026-01-12", "T-542", "Crimson Circuit", "2-0", "EMEA feed",
        [("TM-241", "Crimson Tide"), ("TM-135", "Solaris")],
    ),
    _series(
        "SR-1129", "2026-01-09", "T-518", "Aurora Open", "1-2", "Global feed",
        [("TM-332", "Aurora"), ("TM-404", "Drift")],
    ),
    _series(
        "SR-1122", "2026-01-04", "T-507", "Glass Wolves Showdown", "2-0", "NA feed",
        [("TM-119", "Glass Wolves"), ("TM-210", "Ironclad")],
    ),
    _series(
        "SR-1118", "2025-12-29", "T-488", "Vector Clash", "2-1", "APAC feed",
        [("TM-376", "Vector"), ("TM-164", "Nightfall")],
    ),
]
