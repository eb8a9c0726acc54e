import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
import requests

from gridscout.config import ClientConfig
from gridscout.errors import AuthFailure, BadRequestFailure, RequestFailure
from gridscout.grid_client import (
    GridGraphQLClient,
    GridSeriesClient,
    MockSeriesClient,
    build_series_client,
)
from gridscout.grid_queries import SERIES_FALLBACK_QUERY, SERIES_QUERY
from gridscout.models import QueryInput
from gridscout.status import ApiStatus, StatusIndicator, initial_status

FIXTURE = Path(__file__).parent / "fixtures" / "all_series_sample.json"


class FakeResponse:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Replays canned responses and records every POST."""

    def __init__(self, responses: List[Any]) -> None:
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self._responses = list(responses)

    def post(self, url: str, json: Dict[str, Any], timeout: float) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _client(session: FakeSession, status: StatusIndicator = None) -> GridSeriesClient:
    config = ClientConfig(api_key="test-key")
    status = status or initial_status(config)
    client = build_series_client(config, status=status, session=session)
    assert isinstance(client, GridSeriesClient)
    return client


def _query(series_count: int = 5) -> QueryInput:
    return QueryInput.build("VAL", "Nightfall Esports", "EMEA", series_count)


def test_session_carries_api_key_headers() -> None:
    session = FakeSession([])
    GridGraphQLClient(api_key="test-key", session=session)
    assert session.headers["x-api-key"] == "test-key"
    assert session.headers["content-type"] == "application/json"


def test_primary_query_success_sets_live_status() -> None:
    session = FakeSession([FakeResponse(200, FIXTURE.read_text(encoding="utf-8"))])
    status = StatusIndicator(ApiStatus.LIVE_FORBIDDEN, "stale")
    series = _client(session, status).fetch_series(_query())

    assert len(series) == 2
    assert len(session.calls) == 1
    assert session.calls[0]["json"]["query"] == SERIES_QUERY
    assert session.calls[0]["json"]["variables"] == {"first": 5, "titleId": "6"}
    assert status.state is ApiStatus.LIVE


def test_bad_request_falls_back_once_with_same_variables() -> None:
    session = FakeSession(
        [
            FakeResponse(400, json.dumps({"errors": [{"message": "Unknown argument orderBy"}]})),
            FakeResponse(200, FIXTURE.read_text(encoding="utf-8")),
        ]
    )
    series = _client(session).fetch_series(_query())

    assert len(session.calls) == 2
    assert session.calls[0]["json"]["query"] == SERIES_QUERY
    assert session.calls[1]["json"]["query"] == SERIES_FALLBACK_QUERY
    assert session.calls[0]["json"]["variables"] == session.calls[1]["json"]["variables"]
    assert [s.id for s in series] == ["2819704", "2819688"]


def test_fallback_failure_propagates() -> None:
    session = FakeSession([FakeResponse(400, "bad"), FakeResponse(400, "still bad")])
    with pytest.raises(BadRequestFailure, match="still bad"):
        _client(session).fetch_series(_query())
    assert len(session.calls) == 2


def test_forbidden_is_auth_failure_without_fallback() -> None:
    session = FakeSession([FakeResponse(403, "Forbidden")])
    config = ClientConfig(api_key="test-key")
    status = initial_status(config)
    with pytest.raises(AuthFailure):
        _client(session, status).fetch_series(_query())

    assert len(session.calls) == 1
    assert status.state is ApiStatus.LIVE_FORBIDDEN
    assert status.live


def test_forbidden_during_fallback_updates_status() -> None:
    session = FakeSession([FakeResponse(400, "bad"), FakeResponse(401, "")])
    status = initial_status(ClientConfig(api_key="test-key"))
    with pytest.raises(AuthFailure):
        _client(session, status).fetch_series(_query())
    assert status.state is ApiStatus.LIVE_FORBIDDEN


def test_server_error_is_generic_failure_with_status_message() -> None:
    session = FakeSession([FakeResponse(500, "")])
    with pytest.raises(RequestFailure, match=r"GRID API request failed \(500\)"):
        _client(session).fetch_series(_query())
    assert len(session.calls) == 1


def test_embedded_errors_fail_the_request() -> None:
    body = {"data": None, "errors": [{"message": "Query too complex"}]}
    session = FakeSession([FakeResponse(200, json.dumps(body))])
    with pytest.raises(RequestFailure, match="Query too complex"):
        _client(session).fetch_series(_query())


def test_embedded_unauthorized_error_is_auth_failure() -> None:
    body = {"errors": [{"message": "Unauthorized: invalid API key"}]}
    session = FakeSession([FakeResponse(200, json.dumps(body))])
    with pytest.raises(AuthFailure):
        _client(session).fetch_series(_query())


def test_empty_body_fails() -> None:
    session = FakeSession([FakeResponse(200, "")])
    with pytest.raises(RequestFailure, match="empty response"):
        _client(session).fetch_series(_query())


def test_transport_error_is_wrapped() -> None:
    session = FakeSession([requests.ConnectionError("connection reset")])
    with pytest.raises(RequestFailure, match="connection reset"):
        _client(session).fetch_series(_query())


def test_series_count_is_clamped_in_variables() -> None:
    client = _client(FakeSession([]))
    assert client.variables_for(_query(0))["first"] == 5
    assert client.variables_for(_query(-4))["first"] == 1
    assert client.variables_for(_query(500))["first"] == 50


def test_title_id_comes_from_config() -> None:
    config = ClientConfig(api_key="k", title_ids={"VAL": "26", "LOL": "3"})
    client = build_series_client(config, session=FakeSession([]))
    assert client.variables_for(QueryInput.build("LOL", "x"))["titleId"] == "3"


def test_mock_client_selected_without_key_or_when_forced() -> None:
    assert isinstance(build_series_client(ClientConfig()), MockSeriesClient)
    assert isinstance(build_series_client(ClientConfig(api_key="k", force_mock=True)), MockSeriesClient)


def test_mock_client_returns_fixed_series() -> None:
    series = MockSeriesClient(delay_s=0).fetch_series(_query())
    assert [s.id for s in series] == ["SR-1145", "SR-1138", "SR-1129", "SR-1122", "SR-1118"]


def test_malformed_edges_yield_no_series() -> None:
    body = {"data": {"allSeries": {"edges": 7}}}
    session = FakeSession([FakeResponse(200, json.dumps(body))])
    assert _client(session).fetch_series(_query()) == []
