from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .analytics import ChartBundle, build_chart_bundle
from .availability import build_availability_rows, summarize_availability
from .grid_client import SeriesClient
from .history import QueryHistory
from .models import AvailabilitySummary, QueryInput, ScoutingReport
from .report import build_report

logger = logging.getLogger(__name__)


@dataclass
class ReportBundle:
    query: QueryInput
    report: ScoutingReport
    charts: ChartBundle


@dataclass
class ScoutingPipeline:
    """Fetch -> normalize -> synthesize -> chart, recording each successful query."""

    client: SeriesClient
    history: QueryHistory = field(default_factory=QueryHistory)

    def generate(self, query: QueryInput, now: Optional[datetime] = None) -> ReportBundle:
        if not query.opponent:
            raise ValueError("Opponent name is required to build a scouting report.")
        series = self.client.fetch_series(query)
        report = build_report(query, series, self.client.source_label, now=now)
        self.history.record(query)
        logger.info(f"Built report '{report.heading}' from {len(series)} series (confidence {report.confidence})")
        return ReportBundle(query=query, report=report, charts=build_chart_bundle(report, query))

    def preview(self, query: QueryInput) -> AvailabilitySummary:
        series = self.client.fetch_series(query)
        return summarize_availability(build_availability_rows(series, query.game))
