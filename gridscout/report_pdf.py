from __future__ import annotations

import math
import os
import tempfile
from typing import Callable, List, Optional, Tuple
from xml.sax.saxutils import escape

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from reportlab.lib import colors  # noqa: E402
from reportlab.lib.pagesizes import letter  # noqa: E402
from reportlab.lib.styles import getSampleStyleSheet  # noqa: E402
from reportlab.lib.units import inch  # noqa: E402
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle  # noqa: E402

from .analytics import ChartBundle  # noqa: E402
from .pipeline import ReportBundle  # noqa: E402


# figure sizes in inches; images keep this aspect ratio in the PDF
COMPARISON_SIZE = (6.5, 3.0)
RADAR_SIZE = (4.5, 4.5)
HEATMAP_SIZE = (5.5, 3.0)
LINE_SIZE = (6.0, 3.0)
MAX_IMAGE_WIDTH = 6.0


def _image_size(size: Tuple[float, float]) -> Tuple[float, float]:
    """Page size in points for a figure size, scaled down to fit the text width."""
    width, height = size
    scale = min(1.0, MAX_IMAGE_WIDTH / width)
    return width * scale * inch, height * scale * inch


def _save_plot(fig, path: str) -> str:
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)
    return path


def plot_comparison_bars(charts: ChartBundle, out_path: str) -> Optional[str]:
    metrics = charts.comparison
    if not metrics:
        return None
    labels = [m.label for m in metrics]
    values = [m.value for m in metrics]

    fig, ax = plt.subplots(figsize=COMPARISON_SIZE)
    ax.barh(labels[::-1], values[::-1], color="#4a7ebb")
    ax.set_xlim(0, 100)
    for idx, v in enumerate(values[::-1]):
        ax.text(v + 1, idx, str(v), va="center", fontsize=8)
    ax.set_title("Rankings")
    return _save_plot(fig, out_path)


def plot_radar(charts: ChartBundle, out_path: str) -> Optional[str]:
    metrics = charts.radar
    if not metrics:
        return None
    # clockwise from the top, same orientation as the radar layout
    angles = [math.pi / 2 - (2 * math.pi * n) / len(metrics) for n in range(len(metrics))]
    angles += angles[:1]
    vals = [m.value / 100 for m in metrics]
    vals += vals[:1]

    fig = plt.figure(figsize=RADAR_SIZE)
    ax = fig.add_subplot(111, polar=True)
    ax.plot(angles, vals, linewidth=1.5, color="#2a6fdb")
    ax.fill(angles, vals, alpha=0.2, color="#2a6fdb")
    ax.set_xticks(angles[:-1])
    ax.set_xticklabels([m.label for m in metrics], fontsize=8)
    ax.set_ylim(0, 1)
    ax.set_yticks([0.35, 0.65, 1.0])
    ax.set_yticklabels([])
    ax.set_title("Multi-metric")
    return _save_plot(fig, out_path)


def plot_heatmap(charts: ChartBundle, out_path: str) -> Optional[str]:
    heatmap = charts.heatmap
    if not heatmap.values:
        return None

    fig, ax = plt.subplots(figsize=HEATMAP_SIZE)
    im = ax.imshow([list(row) for row in heatmap.values], vmin=0, vmax=100, cmap="Oranges")
    ax.set_xticks(range(len(heatmap.col_labels)))
    ax.set_xticklabels(heatmap.col_labels, fontsize=8)
    ax.set_yticks(range(len(heatmap.row_labels)))
    ax.set_yticklabels(heatmap.row_labels, fontsize=8)
    ax.set_title("Spatial Patterns")
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    return _save_plot(fig, out_path)


def plot_line_graph(charts: ChartBundle, out_path: str) -> Optional[str]:
    points = charts.line_graph.points
    if not points:
        return None
    xs = [p.x for p in points]
    # canvas y grows downward
    ys = [charts.line_graph.height - p.y for p in points]

    fig, ax = plt.subplots(figsize=LINE_SIZE)
    ax.plot(xs, ys, marker="o", color="#db5a2a", linewidth=1.5)
    ax.fill_between(xs, ys, charts.line_graph.padding, alpha=0.15, color="#db5a2a")
    for x, y, p in zip(xs, ys, points):
        ax.annotate(str(p.value), (x, y), textcoords="offset points", xytext=(0, 6), ha="center", fontsize=7)
    ax.set_xlim(0, charts.line_graph.width)
    ax.set_ylim(0, charts.line_graph.height)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(f"Latest {len(points)} series trend")
    return _save_plot(fig, out_path)


PLOTS: List[Tuple[str, Callable[[ChartBundle, str], Optional[str]], str, Tuple[float, float]]] = [
    ("comparison.png", plot_comparison_bars, "Bar chart: rankings derived from confidence and sample depth.", COMPARISON_SIZE),
    ("heatmap.png", plot_heatmap, "Heatmap: spatial patterns by zone and round phase.", HEATMAP_SIZE),
    ("line.png", plot_line_graph, "Line graph: trend across the most recent series.", LINE_SIZE),
    ("radar.png", plot_radar, "Radar chart: multi-metric profile.", RADAR_SIZE),
]


def _series_table(bundle: ReportBundle) -> Table:
    rows = [["Series", "Date", "Tournament", "Result", "Feed"]]
    for s in bundle.report.series[: bundle.query.series_count]:
        rows.append([s.id, s.date, s.opponent, s.result, s.map_or_game])
    table = Table(rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#dfe7f5")),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def build_pdf(bundle: ReportBundle, output_path: str) -> str:
    report = bundle.report
    charts = bundle.charts
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph(escape(report.heading), styles["Title"]))
    story.append(Paragraph(f"Generated {escape(report.generated_at)} | Report ID {escape(charts.report_id)}", styles["BodyText"]))
    story.append(Paragraph(escape(" · ".join(report.notes)), styles["BodyText"]))
    story.append(Paragraph(f"Confidence: <b>{report.confidence}%</b>", styles["BodyText"]))
    story.append(
        Paragraph(f"Top themes: <b>{escape(', '.join(charts.tags)) or 'no tags yet'}</b>", styles["BodyText"])
    )
    story.append(Spacer(1, 0.2 * inch))

    for section in report.sections:
        story.append(Paragraph(escape(section.title), styles["Heading3"]))
        for bullet in section.bullets:
            story.append(Paragraph(f"• {escape(bullet)}", styles["BodyText"]))
        story.append(Spacer(1, 0.15 * inch))

    with tempfile.TemporaryDirectory() as tmp:
        for name, fn, caption, size in PLOTS:
            path = os.path.join(tmp, name)
            img = fn(charts, path)
            if img and os.path.exists(img):
                story.append(Paragraph(caption, styles["BodyText"]))
                width, height = _image_size(size)
                story.append(Image(img, width=width, height=height))
                story.append(Spacer(1, 0.2 * inch))

        if report.series:
            story.append(Paragraph("Recent series", styles["Heading3"]))
            story.append(_series_table(bundle))

        doc = SimpleDocTemplate(output_path, pagesize=letter)
        doc.build(story)
    return output_path
