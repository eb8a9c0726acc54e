from gridscout.availability import (
    build_availability_rows,
    extract_region_label,
    series_opponent_label,
    summarize_availability,
)
from gridscout.mock_data import MOCK_SERIES
from gridscout.models import Game, SeriesSummary, TeamSummary


def test_extract_region_label() -> None:
    assert extract_region_label("VAL (6) | EMEA feed") == "EMEA feed"
    assert extract_region_label("Global feed") == "Global feed"
    assert extract_region_label("") == "Global feed"


def test_opponent_label_prefers_team_names() -> None:
    both = SeriesSummary(
        id="1", date="TBD", opponent="Cup", result="TBD", map_or_game="Global feed",
        teams=(TeamSummary("a", "Fnatic"), TeamSummary("b", "Unknown team")),
    )
    assert series_opponent_label(both) == "Fnatic"
    assert series_opponent_label(MOCK_SERIES[0]) == "Nova Prime vs Violet Crest"

    bare = SeriesSummary(id="2", date="TBD", opponent="", result="TBD", map_or_game="")
    assert series_opponent_label(bare) == "Unknown opponent"


def test_summarize_counts_distinct_opponents_and_regions() -> None:
    rows = build_availability_rows(MOCK_SERIES, Game.VAL)
    summary = summarize_availability(rows)

    assert len(summary.rows) == 5
    assert summary.rows[0].game == "Valorant"
    assert summary.rows[0].series_id == "SR-1145"
    assert summary.opponent_count == 5
    assert summary.region_count == 4


def test_empty_summary() -> None:
    summary = summarize_availability([])
    assert summary.rows == []
    assert summary.opponent_count == 0
    assert summary.region_count == 0
