from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Protocol

import requests

from .config import (
    CENTRAL_DATA_URL,
    DEFAULT_MOCK_DELAY_S,
    DEFAULT_TIMEOUT_S,
    DEFAULT_TITLE_IDS,
    ClientConfig,
    clamp_series_count,
)
from .errors import AuthFailure, BadRequestFailure, RequestFailure, build_failure
from .grid_queries import SERIES_FALLBACK_QUERY, SERIES_QUERY
from .mock_data import MOCK_SERIES
from .models import QueryInput, SeriesSummary
from .normalize import edges_from_payload, normalize_series
from .status import FORBIDDEN_MESSAGE, LIVE_READY_MESSAGE, ApiStatus, StatusSink

logger = logging.getLogger(__name__)

SAMPLE_SOURCE_LABEL = "Sample data"
LIVE_SOURCE_LABEL = "GRID Live API"


class SeriesClient(Protocol):
    source_label: str

    def fetch_series(self, query: QueryInput) -> List[SeriesSummary]:
        ...


def _parse_body(raw: str) -> Optional[Dict[str, Any]]:
    if not raw:
        return None
    try:
        body = json.loads(raw)
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _first_error_message(body: Optional[Dict[str, Any]]) -> Optional[str]:
    errors = (body or {}).get("errors") or []
    if not isinstance(errors, list) or not errors:
        return None
    first = errors[0]
    if isinstance(first, dict) and isinstance(first.get("message"), str):
        return first["message"]
    return None


@dataclass
class GridGraphQLClient:
    api_key: str
    url: str = CENTRAL_DATA_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    session: Optional[requests.Session] = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
        self.session.headers.update(
            {
                "x-api-key": self.api_key,
                "content-type": "application/json",
                "accept": "application/json",
            }
        )

    def query(self, gql: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        POST one GraphQL document and return the decoded response body.

        Raises a GridRequestError subclass picked by classify_failure for
        non-2xx statuses and embedded ``errors`` lists, and RequestFailure
        for transport errors or an empty/undecodable 2xx body.
        """
        assert self.session is not None
        payload = {"query": gql, "variables": variables or {}}
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise RequestFailure(f"GRID API request failed: {exc}") from exc

        raw = resp.text or ""
        body = _parse_body(raw)
        if not 200 <= resp.status_code < 300:
            details = _first_error_message(body) or raw.strip()
            message = details or f"GRID API request failed ({resp.status_code})"
            raise build_failure(message, resp.status_code)

        if body is None:
            raise RequestFailure("GRID API returned empty response.", resp.status_code)

        if body.get("errors"):
            raise build_failure(_first_error_message(body) or "GRID API error", resp.status_code)
        return body


@dataclass
class GridSeriesClient:
    graphql: GridGraphQLClient
    title_ids: Dict[str, str] = field(default_factory=dict)
    status: Optional[StatusSink] = None

    source_label: ClassVar[str] = LIVE_SOURCE_LABEL

    def variables_for(self, query: QueryInput) -> Dict[str, Any]:
        game = query.game.value
        return {
            "first": clamp_series_count(query.series_count),
            "titleId": self.title_ids.get(game) or DEFAULT_TITLE_IDS[game],
        }

    def _request(self, gql: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self.graphql.query(gql, variables)
        except AuthFailure as exc:
            logger.error(f"GRID rejected the API key (status={exc.status}): {exc}")
            if self.status is not None:
                self.status.update(ApiStatus.LIVE_FORBIDDEN, FORBIDDEN_MESSAGE)
            raise

    def fetch_payload(self, query: QueryInput) -> Dict[str, Any]:
        variables = self.variables_for(query)
        try:
            payload = self._request(SERIES_QUERY, variables)
        except BadRequestFailure as exc:
            # one substitution only; whatever the reduced query raises is final
            logger.warning(f"Series query rejected ({exc}); retrying with reduced query")
            payload = self._request(SERIES_FALLBACK_QUERY, variables)

        if self.status is not None:
            self.status.update(ApiStatus.LIVE, LIVE_READY_MESSAGE)
        return payload

    def fetch_series(self, query: QueryInput) -> List[SeriesSummary]:
        payload = self.fetch_payload(query)
        series = normalize_series(edges_from_payload(payload), query.region)
        logger.info(f"Fetched {len(series)} series for {query.game.value} (requested {query.series_count})")
        return series


@dataclass
class MockSeriesClient:
    delay_s: float = DEFAULT_MOCK_DELAY_S

    source_label: ClassVar[str] = SAMPLE_SOURCE_LABEL

    def fetch_series(self, query: QueryInput) -> List[SeriesSummary]:
        if self.delay_s > 0:
            time.sleep(self.delay_s)
        return list(MOCK_SERIES)


def build_series_client(
    config: ClientConfig,
    status: Optional[StatusSink] = None,
    session: Optional[requests.Session] = None,
) -> SeriesClient:
    if config.use_mock:
        logger.info("Using sample series data (GRID_API_KEY missing or GRID_MOCK set)")
        return MockSeriesClient(delay_s=config.mock_delay_s)

    assert config.api_key is not None
    graphql = GridGraphQLClient(
        api_key=config.api_key,
        url=config.url,
        timeout_s=config.timeout_s,
        session=session,
    )
    return GridSeriesClient(graphql=graphql, title_ids=dict(config.title_ids), status=status)
