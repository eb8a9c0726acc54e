from concurrent.futures import ThreadPoolExecutor

import pytest

from gridscout.config import ClientConfig, clamp_series_count, client_config_from_env
from gridscout.errors import (
    AuthFailure,
    BadRequestFailure,
    RequestFailure,
    build_failure,
    classify_failure,
)
from gridscout.models import Game, QueryInput
from gridscout.status import (
    FORBIDDEN_MESSAGE,
    LIVE_READY_MESSAGE,
    ApiStatus,
    StatusIndicator,
    initial_status,
)

GRID_ENV = (
    "GRID_API_KEY",
    "GRID_MOCK",
    "GRID_GRAPHQL_URL",
    "GRID_VALORANT_TITLE_ID",
    "GRID_LOL_TITLE_ID",
    "GRID_TIMEOUT_S",
    "GRID_MOCK_DELAY_S",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in GRID_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_without_env(clean_env) -> None:
    config = client_config_from_env()
    assert config.api_key is None
    assert config.use_mock
    assert config.title_id("VAL") == "6"
    assert config.title_id("LOL") == "1"
    assert initial_status(config).state is ApiStatus.AWAITING_CREDENTIAL


def test_env_overrides(clean_env) -> None:
    clean_env.setenv("GRID_API_KEY", "  secret ")
    clean_env.setenv("GRID_VALORANT_TITLE_ID", "26")
    clean_env.setenv("GRID_LOL_TITLE_ID", "abc")
    clean_env.setenv("GRID_TIMEOUT_S", "12.5")
    config = client_config_from_env()

    assert config.api_key == "secret"
    assert not config.use_mock
    assert config.title_id("VAL") == "26"
    assert config.title_id("LOL") == "1"
    assert config.timeout_s == 12.5
    assert initial_status(config).state is ApiStatus.LIVE


def test_title_id_rejects_non_positive(clean_env) -> None:
    clean_env.setenv("GRID_VALORANT_TITLE_ID", "-3")
    assert client_config_from_env().title_id("VAL") == "6"


def test_mock_flag_forces_sample_data(clean_env) -> None:
    clean_env.setenv("GRID_API_KEY", "secret")
    clean_env.setenv("GRID_MOCK", "true")
    config = client_config_from_env()
    assert config.use_mock
    status = initial_status(config)
    assert status.state is ApiStatus.MOCK
    assert status.as_dict() == {
        "state": "mock",
        "message": "API key detected (mock forced)",
        "live": False,
    }


def test_clamp_series_count() -> None:
    assert clamp_series_count(0) == 1
    assert clamp_series_count(51) == 50
    assert clamp_series_count(17) == 17


def test_query_input_build_normalizes_fields() -> None:
    query = QueryInput.build("val", "  Nightfall Esports ", " EMEA ", "7")
    assert query.game is Game.VAL
    assert query.opponent == "Nightfall Esports"
    assert query.region == "EMEA"
    assert query.series_count == 7
    assert QueryInput.build(Game.LOL, "x", series_count=None).series_count == 5
    assert QueryInput.build("LOL", "x", series_count="many").series_count == 5


def test_query_input_rejects_unknown_game() -> None:
    with pytest.raises(ValueError):
        QueryInput.build("CS2", "x")


def test_failure_classification() -> None:
    assert classify_failure("nope", 401) is AuthFailure
    assert classify_failure("nope", 403) is AuthFailure
    assert classify_failure("Access Forbidden", 500) is AuthFailure
    assert classify_failure("bad query", 400) is BadRequestFailure
    assert classify_failure("boom", 502) is RequestFailure
    assert classify_failure("boom") is RequestFailure

    exc = build_failure("bad query", 400)
    assert isinstance(exc, BadRequestFailure)
    assert exc.status == 400
    assert str(exc) == "bad query"


def test_client_config_is_immutable() -> None:
    config = ClientConfig()
    with pytest.raises(AttributeError):
        config.api_key = "x"


def test_status_updates_keep_state_and_message_paired() -> None:
    status = StatusIndicator(ApiStatus.LIVE, LIVE_READY_MESSAGE)
    pairs = {
        "live": LIVE_READY_MESSAGE,
        "live-forbidden": FORBIDDEN_MESSAGE,
    }

    def flip(i: int) -> dict:
        if i % 2:
            status.update(ApiStatus.LIVE_FORBIDDEN, FORBIDDEN_MESSAGE)
        else:
            status.update(ApiStatus.LIVE, LIVE_READY_MESSAGE)
        return status.as_dict()

    with ThreadPoolExecutor(max_workers=4) as pool:
        snapshots = list(pool.map(flip, range(400)))

    for snap in snapshots + [status.as_dict()]:
        assert pairs[snap["state"]] == snap["message"]
        assert snap["live"] is True


def test_status_equality_ignores_lock() -> None:
    assert StatusIndicator(ApiStatus.MOCK, "m") == StatusIndicator(ApiStatus.MOCK, "m")
