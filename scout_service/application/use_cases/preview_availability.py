"""Use case for listing the series available for a game and region."""

import asyncio
from dataclasses import dataclass
from functools import partial
from typing import Any

from gridscout.errors import GridRequestError
from gridscout.models import AvailabilitySummary, QueryInput

from ..ports.scouting_service import ScoutingDataPort
from .generate_report import _executor, error_code_for


@dataclass
class PreviewAvailabilityResult:
    success: bool
    summary: AvailabilitySummary | None = None
    error: str | None = None
    error_code: str | None = None


class PreviewAvailabilityUseCase:
    """Fetch recent series without building a report; opponent may be blank."""

    def __init__(self, scouting_service: ScoutingDataPort):
        self._scouting_service = scouting_service

    async def execute(self, game: Any, region: str = "", series_count: Any = 5) -> PreviewAvailabilityResult:
        loop = asyncio.get_running_loop()
        try:
            query = QueryInput.build(game, "", region, series_count)
            preview_func = partial(self._scouting_service.preview_availability, query)
            summary = await loop.run_in_executor(_executor, preview_func)
            return PreviewAvailabilityResult(success=True, summary=summary)
        except (GridRequestError, ValueError) as e:
            return PreviewAvailabilityResult(success=False, error=str(e), error_code=error_code_for(e))
