from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from .models import ChartMetric, Game, QueryInput, ReportSection, ScoutingReport, SeriesSummary
from .randomness import seeded_values


METRIC_MIN = 30
METRIC_MAX = 95
LINE_MIN = 25
LINE_MAX = 95
LINE_MAX_POINTS = 8
PULSE_MAX_BARS = 6
TAG_LIMIT = 8

HEATMAP_ROWS = {
    Game.VAL: ("A site", "Mid", "B site"),
    Game.LOL: ("Top", "Mid", "Bot"),
}
HEATMAP_COLS = ("Entry", "Trade", "Control", "Late")

TAG_STOP_WORDS = frozenset(
    {
        "and", "the", "to", "with", "into", "on", "of", "a", "an", "for",
        "from", "then", "after", "before", "at", "in", "by", "as", "is",
        "are", "be", "or", "that", "this", "these", "those", "over", "under",
        "early", "late", "mid", "round", "site", "sites", "lane", "lanes", "off",
    }
)

_WORD_RE = re.compile(r"[a-z]+")


def clamp_value(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _metric(label: str, value: float) -> ChartMetric:
    return ChartMetric(label=label, value=int(clamp_value(value, METRIC_MIN, METRIC_MAX)))


def build_comparison_metrics(report: ScoutingReport, query: QueryInput) -> List[ChartMetric]:
    base = report.confidence
    series_boost = min(len(report.series) * 6, 30)
    request_bias = min(query.series_count * 4, 20)
    return [
        _metric("Tempo", base + 6),
        _metric("Utility", 55 + series_boost),
        _metric("Adaptation", 45 + round_half_up(base * 0.45)),
        _metric("Discipline", 50 + request_bias),
    ]


def build_radar_metrics(report: ScoutingReport, query: QueryInput) -> List[ChartMetric]:
    base = report.confidence
    return [
        _metric("Pace", base + 4),
        _metric("Setup", 52 + query.series_count * 3),
        _metric("Adapt", 48 + round_half_up(base * 0.35)),
        _metric("Discipline", 50 + round_half_up(base * 0.25)),
        _metric("Depth", 40 + len(report.series) * 7),
    ]


@dataclass(frozen=True)
class RadarAxis:
    label: str
    value: int
    angle: float
    axis_end: Tuple[float, float]
    point: Tuple[float, float]
    label_pos: Tuple[float, float]
    anchor: str


@dataclass
class RadarLayout:
    width: int
    height: int
    center: Tuple[float, float]
    radius: float
    rings: List[float]
    axes: List[RadarAxis] = field(default_factory=list)

    @property
    def polygon(self) -> List[Tuple[float, float]]:
        return [axis.point for axis in self.axes]


def _label_anchor(angle: float) -> str:
    cos = math.cos(angle)
    if cos > 0.2:
        return "start"
    if cos < -0.2:
        return "end"
    return "middle"


def layout_radar(
    metrics: Sequence[ChartMetric],
    width: int = 180,
    height: int = 180,
    radius: float = 60,
    label_gap: float = 16,
) -> RadarLayout:
    """Place axes clockwise from 12 o'clock; vertices sit at value/100 of the radius."""
    cx, cy = width / 2, height / 2
    layout = RadarLayout(
        width=width,
        height=height,
        center=(cx, cy),
        radius=radius,
        rings=[radius * 0.35, radius * 0.65, radius],
    )
    count = len(metrics)
    for index, metric in enumerate(metrics):
        angle = (math.pi * 2 * index) / count - math.pi / 2
        cos, sin = math.cos(angle), math.sin(angle)
        ratio = metric.value / 100
        layout.axes.append(
            RadarAxis(
                label=metric.label,
                value=metric.value,
                angle=angle,
                axis_end=(cx + cos * radius, cy + sin * radius),
                point=(cx + cos * radius * ratio, cy + sin * radius * ratio),
                label_pos=(cx + cos * (radius + label_gap), cy + sin * (radius + label_gap)),
                anchor=_label_anchor(angle),
            )
        )
    return layout


@dataclass(frozen=True)
class Heatmap:
    seed: str
    row_labels: Tuple[str, ...]
    col_labels: Tuple[str, ...]
    values: Tuple[Tuple[int, ...], ...]

    def cell(self, row: int, col: int) -> int:
        return self.values[row][col]


def build_heatmap_values(seed: str, rows: int, cols: int) -> List[int]:
    return seeded_values(seed, rows * cols)


def heatmap_seed(report: ScoutingReport) -> str:
    return f"{report.heading}-{report.confidence}"


def build_heatmap(report: ScoutingReport, query: QueryInput) -> Heatmap:
    row_labels = HEATMAP_ROWS[query.game]
    cols = len(HEATMAP_COLS)
    seed = heatmap_seed(report)
    flat = build_heatmap_values(seed, len(row_labels), cols)
    return Heatmap(
        seed=seed,
        row_labels=row_labels,
        col_labels=HEATMAP_COLS,
        values=tuple(tuple(flat[r * cols:(r + 1) * cols]) for r in range(len(row_labels))),
    )


@dataclass(frozen=True)
class LinePoint:
    value: int
    x: float
    y: float


@dataclass
class LineGraph:
    width: int
    height: int
    padding: int
    points: List[LinePoint] = field(default_factory=list)

    @property
    def values(self) -> List[int]:
        return [p.value for p in self.points]

    @property
    def area(self) -> List[Tuple[float, float]]:
        if not self.points:
            return []
        base_y = self.height - self.padding
        return [(p.x, p.y) for p in self.points] + [
            (self.width - self.padding, base_y),
            (self.padding, base_y),
        ]


def line_graph_values(confidence: int, series_count: int) -> List[int]:
    n = min(series_count, LINE_MAX_POINTS)
    return [
        int(clamp_value(confidence - 10 + (n - i) * 4 + (i % 2) * 3, LINE_MIN, LINE_MAX))
        for i in range(n)
    ]


def scale_line_points(
    values: Sequence[int],
    width: int = 240,
    height: int = 120,
    padding: int = 16,
) -> List[LinePoint]:
    if not values:
        return []
    lo, hi = min(values), max(values)
    span = max(hi - lo, 1)
    step = (width - padding * 2) / (len(values) - 1) if len(values) > 1 else 0
    plot_h = height - padding * 2
    return [
        LinePoint(value=v, x=padding + i * step, y=height - padding - ((v - lo) / span) * plot_h)
        for i, v in enumerate(values)
    ]


def build_line_graph(report: ScoutingReport, width: int = 240, height: int = 120, padding: int = 16) -> LineGraph:
    values = line_graph_values(report.confidence, len(report.series))
    return LineGraph(
        width=width,
        height=height,
        padding=padding,
        points=scale_line_points(values, width, height, padding),
    )


def tokenize(text: str) -> List[str]:
    return _WORD_RE.findall(text.lower())


def build_tag_cloud(sections: Iterable[ReportSection], limit: int = TAG_LIMIT) -> List[str]:
    counts: Counter = Counter()
    for section in sections:
        for bullet in section.bullets:
            for word in tokenize(bullet):
                if len(word) < 3 or word in TAG_STOP_WORDS:
                    continue
                counts[word] += 1
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [word for word, _ in ranked[:limit]]


@dataclass(frozen=True)
class PulseBar:
    series_id: str
    label: str
    height: int


def build_series_pulse(series: Sequence[SeriesSummary], limit: int = PULSE_MAX_BARS) -> List[PulseBar]:
    items = list(series)[:limit]
    return [
        PulseBar(series_id=s.id, label=s.opponent, height=22 + (len(items) - index) * 6)
        for index, s in enumerate(items)
    ]


def report_id(heading: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "", heading)[:10] or "SCOUT"


@dataclass
class ChartBundle:
    report_id: str
    comparison: List[ChartMetric]
    radar: List[ChartMetric]
    radar_layout: RadarLayout
    heatmap: Heatmap
    line_graph: LineGraph
    tags: List[str]
    pulse: List[PulseBar]


def build_chart_bundle(report: ScoutingReport, query: QueryInput) -> ChartBundle:
    radar = build_radar_metrics(report, query)
    return ChartBundle(
        report_id=report_id(report.heading),
        comparison=build_comparison_metrics(report, query),
        radar=radar,
        radar_layout=layout_radar(radar),
        heatmap=build_heatmap(report, query),
        line_graph=build_line_graph(report),
        tags=build_tag_cloud(report.sections),
        pulse=build_series_pulse(report.series),
    )
