from __future__ import annotations

import math

import pytest

from futsal_stats.ingestion.providers.base.errors import ProviderMappingError
from futsal_stats.ingestion.providers.uefa.payloads import TeamStatisticsEntry
from futsal_stats.ingestion.providers.uefa.transform import (
    STATISTIC_FIELDS,
    parse_stat_value,
    transform_match_statistics,
)


def _entry(team_id: str, **stats: object) -> dict[str, object]:
    return {
        "teamId": team_id,
        "statistics": [{"name": name, "value": value} for name, value in stats.items()],
    }


HOME = _entry(
    "50051",
    goals="5",
    attempts="31",
    attempts_on_target="14",
    attempts_accuracy="45.16",
    fouls_committed="6",
    yellow_cards="1",
    attempts_on_woodwork="2",
    own_goals_for="0",
    played_time="40",
)
AWAY = _entry("2600", goals="3", attempts="22", fouls_committed="9", yellow_cards="2")
SHOOTOUT = _entry("2600", goals="4")


def test_transform_maps_provider_names_to_canonical_fields() -> None:
    record = transform_match_statistics("2040001", [HOME, AWAY])

    assert record.match_id == "2040001"
    assert record.home_team.team_id == "50051"
    assert record.home_team.team_name == "50051"
    assert record.home_team.goals == 5.0
    assert record.home_team.attempts == 31.0
    assert record.home_team.shot_accuracy == pytest.approx(45.16)
    assert record.home_team.woodwork_hits == 2.0
    assert record.home_team.played_time_minutes == 40.0
    assert record.away_team.team_id == "2600"
    assert record.away_team.fouls_committed == 9.0


def test_transform_ignores_shootout_entry() -> None:
    assert transform_match_statistics("m", [HOME, AWAY, SHOOTOUT]) == transform_match_statistics(
        "m", [HOME, AWAY]
    )


def test_transform_accepts_validated_entries() -> None:
    entries = [TeamStatisticsEntry.model_validate(HOME), TeamStatisticsEntry.model_validate(AWAY)]

    assert transform_match_statistics("m", entries) == transform_match_statistics("m", [HOME, AWAY])


def test_transform_defaults_missing_and_unparsable_fields_to_zero() -> None:
    home = _entry("1", goals="n/a", corners=None, red_cards="")
    away = {"teamId": "2", "statistics": []}

    record = transform_match_statistics("m", [home, away])

    for field in STATISTIC_FIELDS:
        assert getattr(record.home_team, field) == 0.0
        assert getattr(record.away_team, field) == 0.0


def test_transform_last_duplicate_statistic_wins() -> None:
    home = {
        "teamId": "1",
        "statistics": [{"name": "goals", "value": "1"}, {"name": "goals", "value": "3"}],
    }

    record = transform_match_statistics("m", [home, AWAY])

    assert record.home_team.goals == 3.0


@pytest.mark.parametrize("entries", [[], [HOME]])
def test_transform_requires_two_teams(entries: list[dict[str, object]]) -> None:
    with pytest.raises(ProviderMappingError) as excinfo:
        transform_match_statistics("m2", entries)

    assert "2" in str(excinfo.value)
    assert excinfo.value.message == f"Expected at least 2 teams, got {len(entries)}"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("7", 7.0),
        ("45.5", 45.5),
        ("54%", 54.0),
        ("  12 ", 12.0),
        ("-1", -1.0),
        (".5", 0.5),
        (3, 3.0),
        (2.25, 2.25),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        (True, 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        ({"value": 1}, 0.0),
    ],
)
def test_parse_stat_value(value: object, expected: float) -> None:
    assert parse_stat_value(value) == expected
