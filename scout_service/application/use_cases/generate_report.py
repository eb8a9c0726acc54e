"""Use case for generating scouting reports."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any

from gridscout.errors import AuthFailure, GridRequestError
from gridscout.models import QueryInput
from gridscout.pipeline import ReportBundle

from ..ports.scouting_service import ProgressCallbackPort, ScoutingDataPort

logger = logging.getLogger(__name__)

# Thread pool for running blocking I/O operations
_executor = ThreadPoolExecutor(max_workers=4)


@dataclass
class GenerateReportRequest:
    """Request to generate a report."""

    game: Any
    opponent: str
    region: str = ""
    series_count: Any = 5

    def to_query(self) -> QueryInput:
        return QueryInput.build(self.game, self.opponent, self.region, self.series_count)


@dataclass
class GenerateReportResult:
    """Result of report generation."""

    success: bool
    bundle: ReportBundle | None = None
    error: str | None = None
    error_code: str | None = None


def error_code_for(exc: Exception) -> str:
    if isinstance(exc, AuthFailure):
        return "LIVE_FORBIDDEN"
    if isinstance(exc, GridRequestError):
        return "UPSTREAM_ERROR"
    return "INVALID_REQUEST"


class GenerateReportUseCase:
    """Turns a report request into a ReportBundle.

    Steps:
    1. Validating and clamping the query
    2. Fetching recent series (live GRID or sample data)
    3. Building the report and its chart datasets
    """

    def __init__(self, scouting_service: ScoutingDataPort):
        self._scouting_service = scouting_service

    async def execute(
        self,
        request: GenerateReportRequest,
        progress_callback: ProgressCallbackPort | None = None,
    ) -> GenerateReportResult:
        """Build a report for ``request``, pushing progress at 10% and 80%.

        GRID failures and invalid input come back as an unsuccessful result
        with an error code (INVALID_REQUEST, UPSTREAM_ERROR, LIVE_FORBIDDEN)
        instead of raising.
        """
        loop = asyncio.get_running_loop()

        try:
            query = request.to_query()
            if not query.opponent:
                raise ValueError("Opponent name is required to build a scouting report.")

            if progress_callback:
                await progress_callback.report_progress(
                    10, "Collecting recent series...", "processing"
                )

            # requests is blocking; keep it off the event loop
            generate_func = partial(self._scouting_service.generate_report, query)
            bundle = await loop.run_in_executor(_executor, generate_func)

            if progress_callback:
                await progress_callback.report_progress(
                    80, f"Compiled report from {len(bundle.report.series)} series...", "processing"
                )

            return GenerateReportResult(success=True, bundle=bundle)

        except (GridRequestError, ValueError) as e:
            logger.warning(f"Report generation failed: {e}")
            if progress_callback:
                await progress_callback.report_progress(
                    0, f"Error: {str(e)}", "error"
                )
            return GenerateReportResult(
                success=False,
                error=str(e),
                error_code=error_code_for(e),
            )
