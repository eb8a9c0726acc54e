from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .models import SeriesSummary, TeamSummary, TournamentSummary


UNKNOWN_TEAM = "Unknown team"
UNKNOWN_TOURNAMENT = "Unknown tournament"
TBD = "TBD"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _safe_id(value: Any) -> str:
    return str(value) if value else ""


def _safe_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _parse_time(ts: Any) -> Optional[datetime]:
    if not ts or not isinstance(ts, str):
        return None
    try:
        return datetime.fromisoformat(ts.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_series_date(ts: Any) -> str:
    parsed = _parse_time(ts)
    if parsed is None:
        return TBD
    return parsed.date().isoformat()


def region_label(region: Optional[str]) -> str:
    region = (region or "").strip()
    return f"{region} feed" if region else "Global feed"


def _title_label(title: Dict[str, Any]) -> str:
    title_id = _safe_id(title.get("id"))
    short = _safe_text(title.get("nameShortened"))
    if short and title_id:
        return f"{short} ({title_id})"
    return short or title_id


def build_tournament_summary(tournament: Any) -> Optional[TournamentSummary]:
    tournament = _as_dict(tournament)
    tournament_id = _safe_id(tournament.get("id"))
    name = _safe_text(tournament.get("name"))
    if not tournament_id and not name:
        return None
    return TournamentSummary(id=tournament_id, name=name or UNKNOWN_TOURNAMENT)


def _normalize_teams(teams: Any) -> List[TeamSummary]:
    out: List[TeamSummary] = []
    for entry in _as_list(teams):
        base = _as_dict(_as_dict(entry).get("baseInfo"))
        team_id = _safe_id(base.get("id"))
        if not team_id:
            continue
        out.append(
            TeamSummary(
                id=team_id,
                name=_safe_text(base.get("name")) or UNKNOWN_TEAM,
                logo_url=_safe_text(base.get("logoUrl")) or None,
            )
        )
    return out


def normalize_node(node: Dict[str, Any], region: Optional[str] = None) -> SeriesSummary:
    tournament = build_tournament_summary(node.get("tournament"))
    title = _title_label(_as_dict(node.get("title")))
    feed = region_label(region)
    scheduled = node.get("startTimeScheduled")
    return SeriesSummary(
        id=str(node["id"]),
        date=format_series_date(scheduled),
        opponent=tournament.name if tournament else UNKNOWN_TOURNAMENT,
        result="Scheduled" if scheduled else TBD,
        map_or_game=f"{title} | {feed}" if title else feed,
        tournament=tournament,
        teams=tuple(_normalize_teams(node.get("teams"))),
    )


def normalize_series(edges: Optional[Iterable[Any]], region: Optional[str] = None) -> List[SeriesSummary]:
    """
    Map raw ``allSeries`` edges onto SeriesSummary values.

    Edges without a node, or nodes without an id, are dropped. Every other
    level of the payload may be null; documented defaults fill the gaps.
    """
    series: List[SeriesSummary] = []
    for edge in _as_list(edges):
        node = _as_dict(_as_dict(edge).get("node"))
        if not node.get("id"):
            continue
        series.append(normalize_node(node, region))
    return series


def edges_from_payload(payload: Any) -> List[Any]:
    data = _as_dict(_as_dict(payload).get("data"))
    connection = _as_dict(data.get("allSeries"))
    return _as_list(connection.get("edges"))
