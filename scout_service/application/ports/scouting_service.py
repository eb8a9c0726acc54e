"""Port (interface) for scouting data service."""

from abc import ABC, abstractmethod
from typing import List

from gridscout.models import AvailabilitySummary, QueryInput, QuerySnapshot
from gridscout.pipeline import ReportBundle


class ScoutingDataPort(ABC):
    """Port for fetching series data and turning it into scouting reports."""

    @abstractmethod
    def generate_report(self, query: QueryInput) -> ReportBundle:
        """Fetch recent series and build a report with its chart datasets.

        Args:
            query: Normalized query (series count already clamped)

        Returns:
            Report bundle (query, report, charts)

        Raises:
            ValueError: If the query has no opponent
            GridRequestError: If the upstream request fails
        """
        ...

    @abstractmethod
    def preview_availability(self, query: QueryInput) -> AvailabilitySummary:
        """List available series for a game/region without building a report."""
        ...

    @abstractmethod
    def history(self) -> List[QuerySnapshot]:
        """Recent report queries, most recent first."""
        ...

    @abstractmethod
    def status(self) -> dict:
        """Current upstream status: state, message and live flag."""
        ...


class ProgressCallbackPort(ABC):
    """Port for reporting progress during long operations."""

    @abstractmethod
    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Report progress update.

        Args:
            progress: Progress percentage (0-100)
            message: Human-readable status message
            status: Status type (connecting, processing, completed, error)
        """
        ...
