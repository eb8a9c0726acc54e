"""Adapter wrapping the gridscout pipeline."""

from typing import List

from gridscout.config import ClientConfig, client_config_from_env
from gridscout.grid_client import SeriesClient, build_series_client
from gridscout.history import QueryHistory
from gridscout.models import AvailabilitySummary, QueryInput, QuerySnapshot
from gridscout.pipeline import ReportBundle, ScoutingPipeline
from gridscout.status import StatusIndicator, initial_status

from ...application.ports.scouting_service import ScoutingDataPort


class GridScoutingAdapter(ScoutingDataPort):
    """Adapter serving scouting reports from GRID (or the sample dataset)."""

    def __init__(
        self,
        client: SeriesClient,
        status: StatusIndicator,
        history: QueryHistory | None = None,
    ):
        """Initialize with a series client and the status it reports into.

        Args:
            client: Live or mock series client
            status: Status indicator the client writes after each call
            history: Query history; a fresh one is created if omitted
        """
        self._status = status
        self._pipeline = ScoutingPipeline(client=client, history=history or QueryHistory())

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> "GridScoutingAdapter":
        config = config or client_config_from_env()
        status = initial_status(config)
        return cls(client=build_series_client(config, status=status), status=status)

    @property
    def source_label(self) -> str:
        return self._pipeline.client.source_label

    def generate_report(self, query: QueryInput) -> ReportBundle:
        return self._pipeline.generate(query)

    def preview_availability(self, query: QueryInput) -> AvailabilitySummary:
        return self._pipeline.preview(query)

    def history(self) -> List[QuerySnapshot]:
        return self._pipeline.history.snapshots()

    def status(self) -> dict:
        return self._status.as_dict()
