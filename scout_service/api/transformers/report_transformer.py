"""Transform report bundles to the frontend's camelCase JSON shape."""

import logging
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, List, Sequence

from gridscout.analytics import ChartBundle
from gridscout.models import AvailabilitySummary, QueryInput, QuerySnapshot, SeriesSummary
from gridscout.pipeline import ReportBundle

logger = logging.getLogger(__name__)


def _to_camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _camelize(value: Any) -> Any:
    """Recursively camelCase dict keys; tuples become lists."""
    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, dict):
        return {_to_camel_case(str(k)): _camelize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_camelize(v) for v in value]
    return value


def _transform_query(query: QueryInput) -> Dict[str, Any]:
    return {
        "game": query.game.value,
        "gameLabel": query.game.label,
        "opponent": query.opponent,
        "region": query.region,
        "seriesCount": query.series_count,
    }


def _transform_series(series: SeriesSummary) -> Dict[str, Any]:
    return {
        "id": series.id,
        "date": series.date,
        "opponent": series.opponent,
        "result": series.result,
        "mapOrGame": series.map_or_game,
        "tournament": _camelize(series.tournament) if series.tournament else None,
        "teams": [
            {"id": t.id, "name": t.name, "logoUrl": t.logo_url} for t in series.teams
        ],
    }


def transform_charts(charts: ChartBundle) -> Dict[str, Any]:
    radar_layout = charts.radar_layout
    return {
        "reportId": charts.report_id,
        "comparison": _camelize(charts.comparison),
        "radar": {
            "metrics": _camelize(charts.radar),
            "width": radar_layout.width,
            "height": radar_layout.height,
            "center": list(radar_layout.center),
            "radius": radar_layout.radius,
            "rings": radar_layout.rings,
            "axes": _camelize(radar_layout.axes),
            "polygon": [list(p) for p in radar_layout.polygon],
        },
        "heatmap": _camelize(charts.heatmap),
        "lineGraph": {
            "width": charts.line_graph.width,
            "height": charts.line_graph.height,
            "padding": charts.line_graph.padding,
            "points": _camelize(charts.line_graph.points),
            "area": [list(p) for p in charts.line_graph.area],
        },
        "tags": list(charts.tags),
        "pulse": _camelize(charts.pulse),
    }


def transform_history(history: Sequence[QuerySnapshot]) -> List[Dict[str, Any]]:
    return [_camelize(entry) for entry in history]


def transform_availability(summary: AvailabilitySummary) -> Dict[str, Any]:
    return {
        "rows": _camelize(summary.rows),
        "seriesCount": len(summary.rows),
        "opponentCount": summary.opponent_count,
        "regionCount": summary.region_count,
    }


def transform_report_to_frontend(
    bundle: ReportBundle,
    history: Sequence[QuerySnapshot] = (),
    status: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """Transform a report bundle to the frontend expected format.

    Args:
        bundle: Report, query and derived charts
        history: Recent queries, most recent first
        status: Upstream status as returned by the scouting adapter

    Returns:
        Frontend-compatible report payload
    """
    report = bundle.report
    logger.info(f"Transforming report '{report.heading}' ({len(report.series)} series)")

    return {
        "query": _transform_query(bundle.query),
        "report": {
            "heading": report.heading,
            "confidence": report.confidence,
            "generatedAt": report.generated_at,
            "notes": list(report.notes),
            "sections": {
                "tendencies": _camelize(report.tendencies),
                "strategies": _camelize(report.strategies),
                "defaults": _camelize(report.defaults),
                "comps": _camelize(report.comps),
            },
            "series": [_transform_series(s) for s in report.series],
        },
        "charts": transform_charts(bundle.charts),
        "history": transform_history(history),
        "status": status or {},
    }
