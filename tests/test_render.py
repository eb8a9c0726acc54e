from datetime import datetime

import matplotlib.image as mpimg
import pytest

from gridscout.availability import build_availability_rows, summarize_availability
from gridscout.grid_client import MockSeriesClient
from gridscout.mock_data import MOCK_SERIES
from gridscout.models import Game, QueryInput
from gridscout.pipeline import ScoutingPipeline
from gridscout.render import render_availability_text, render_text
from gridscout.report_pdf import PLOTS, RADAR_SIZE, _image_size, build_pdf


def _bundle(series_count: int = 5):
    pipeline = ScoutingPipeline(client=MockSeriesClient(delay_s=0))
    query = QueryInput.build("VAL", "Nightfall Esports", "EMEA", series_count)
    return pipeline, pipeline.generate(query, now=datetime(2026, 1, 20, 12, 0, 0))


def test_render_text_includes_report_parts() -> None:
    pipeline, bundle = _bundle()
    text = render_text(bundle, pipeline.history.snapshots())

    assert text.startswith("SCOUTING REPORT")
    assert "Nightfall Esports | Valorant | EMEA | Report ID NightfallE" in text
    assert "Confidence: 82%" in text
    assert "- Valorant | Nightfall Esports | EMEA" in text
    assert "Default site setups" in text
    assert "Tournament ID: T-556" in text
    assert "Nova Prime (TM-120), Violet Crest (TM-217)" in text


def test_render_text_limits_series_to_requested_count() -> None:
    _, bundle = _bundle(series_count=2)
    text = render_text(bundle)
    assert "SR-1138" in text
    assert "SR-1129" not in text
    assert "Recent queries" not in text


def test_render_availability_text() -> None:
    summary = summarize_availability(build_availability_rows(MOCK_SERIES, Game.VAL))
    text = render_availability_text(summary)
    assert "5 series | 5 opponents | 4 regions" in text
    assert "- Valorant | Vector vs Nightfall | APAC feed | SR-1118 | 2025-12-29" in text

    empty = render_availability_text(summarize_availability([]))
    assert empty.startswith("No series found")


def test_build_pdf_writes_document(tmp_path) -> None:
    _, bundle = _bundle()
    out = tmp_path / "report.pdf"
    assert build_pdf(bundle, str(out)) == str(out)
    assert out.read_bytes().startswith(b"%PDF")


def test_pdf_images_keep_figure_aspect_ratio(tmp_path) -> None:
    _, bundle = _bundle()
    for name, plot, _, size in PLOTS:
        path = plot(bundle.charts, str(tmp_path / name))
        pixels_h, pixels_w = mpimg.imread(path).shape[:2]
        width, height = _image_size(size)
        assert height / width == pytest.approx(pixels_h / pixels_w, rel=0.01)
        assert width <= 6.0 * 72 + 1e-6

    width, height = _image_size(RADAR_SIZE)
    assert width == height
