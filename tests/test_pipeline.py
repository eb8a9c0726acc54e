from datetime import datetime

import pytest

from gridscout.grid_client import MockSeriesClient
from gridscout.history import QueryHistory
from gridscout.models import QueryInput
from gridscout.pipeline import ScoutingPipeline


def _pipeline() -> ScoutingPipeline:
    return ScoutingPipeline(client=MockSeriesClient(delay_s=0), history=QueryHistory())


def test_mock_end_to_end_report() -> None:
    pipeline = _pipeline()
    query = QueryInput.build("VAL", "Nightfall Esports", "EMEA", 5)
    bundle = pipeline.generate(query, now=datetime(2026, 1, 20, 12, 0, 0))

    report = bundle.report
    assert len(report.series) == 5
    assert report.confidence == 82
    assert "Analyzed 5 recent series" in report.notes
    assert report.notes[0] == "Source: Sample data"
    assert bundle.charts.report_id == "NightfallE"
    assert [e.opponent for e in pipeline.history] == ["Nightfall Esports"]


def test_blank_opponent_is_rejected_before_fetch() -> None:
    class ExplodingClient:
        source_label = "never"

        def fetch_series(self, query):
            raise AssertionError("fetch should not run")

    pipeline = ScoutingPipeline(client=ExplodingClient())
    with pytest.raises(ValueError):
        pipeline.generate(QueryInput.build("VAL", "  "))
    assert len(pipeline.history) == 0


def test_preview_does_not_record_history() -> None:
    pipeline = _pipeline()
    summary = pipeline.preview(QueryInput.build("LOL", "", "", 5))
    assert len(summary.rows) == 5
    assert summary.rows[0].game == "League of Legends"
    assert len(pipeline.history) == 0
