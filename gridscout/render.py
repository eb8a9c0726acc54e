from __future__ import annotations

from typing import List, Sequence

from .models import AvailabilitySummary, QuerySnapshot
from .pipeline import ReportBundle


def _bar(value: int, width: int = 20) -> str:
    filled = round(width * value / 100)
    return "#" * filled + "." * (width - filled)


def render_text(bundle: ReportBundle, history: Sequence[QuerySnapshot] = ()) -> str:
    report = bundle.report
    charts = bundle.charts

    lines: List[str] = []
    lines.append("SCOUTING REPORT")
    lines.append(f"{report.heading} | Report ID {charts.report_id}")
    lines.append(f"Generated {report.generated_at}")
    lines.append(" · ".join(report.notes))
    lines.append(f"Confidence: {report.confidence}% [{_bar(report.confidence)}]")
    lines.append("")

    if history:
        lines.append("Recent queries")
        for entry in history:
            lines.append(f"- {entry.game} | {entry.opponent} | {entry.region}")
        lines.append("")

    lines.append("Top themes: " + (", ".join(charts.tags) or "no tags yet"))
    lines.append("")

    lines.append("Rankings")
    for metric in charts.comparison:
        lines.append(f"  {metric.label:<11} {_bar(metric.value)} {metric.value}")
    lines.append("")

    lines.append("Multi-metric")
    for metric in charts.radar:
        lines.append(f"  {metric.label:<11} {metric.value}")
    lines.append("")

    heatmap = charts.heatmap
    lines.append("Spatial patterns")
    lines.append("  " + " " * 8 + "".join(f"{c:>9}" for c in heatmap.col_labels))
    for label, row in zip(heatmap.row_labels, heatmap.values):
        lines.append(f"  {label:<8}" + "".join(f"{v:>9}" for v in row))
    lines.append("")

    trend = charts.line_graph.values
    if trend:
        lines.append(f"Trend (latest {len(trend)} series): " + " ".join(str(v) for v in trend))
        lines.append("")

    for section in report.sections:
        lines.append(section.title)
        for bullet in section.bullets:
            lines.append(f"- {bullet}")
        lines.append("")

    lines.append("Recent series")
    for s in report.series[: bundle.query.series_count]:
        lines.append(f"- {s.id} | {s.date} | {s.opponent} | {s.result} | {s.map_or_game}")
        if s.tournament and s.tournament.id:
            lines.append(f"  Tournament ID: {s.tournament.id}")
        if s.teams:
            lines.append("  " + ", ".join(f"{t.name} ({t.id})" for t in s.teams))

    return "\n".join(lines)


def render_availability_text(summary: AvailabilitySummary) -> str:
    if not summary.rows:
        return "No series found. Try increasing the series count or adjusting the game selection."
    lines = [
        "Games, opponents & regions",
        f"{len(summary.rows)} series | {summary.opponent_count} opponents | {summary.region_count} regions",
    ]
    for row in summary.rows:
        lines.append(f"- {row.game} | {row.opponent} | {row.region} | {row.series_id} | {row.date}")
    return "\n".join(lines)
