from __future__ import annotations

import pytest

from futsal_stats.ingestion.providers.base.errors import ProviderResponseError
from futsal_stats.ingestion.providers.uefa.payloads import (
    parse_fixtures_page,
    parse_team_statistics,
)


def test_parse_fixtures_page_accepts_bare_list_and_envelope() -> None:
    matches = [{"id": "2040001", "status": "FINISHED"}, {"id": 2040002, "status": "UPCOMING"}]

    assert parse_fixtures_page(matches) == matches
    assert parse_fixtures_page({"matches": matches, "total": 2}) == matches


def test_parse_fixtures_page_keeps_raw_objects() -> None:
    item = {"id": "1", "homeTeam": {"internationalName": "Sporting CP"}, "round": {"phase": "TOURNAMENT"}}

    assert parse_fixtures_page([item])[0]["homeTeam"]["internationalName"] == "Sporting CP"


@pytest.mark.parametrize(
    "payload",
    [
        "not a listing",
        {"data": []},
        [1, 2, 3],
    ],
)
def test_parse_fixtures_page_rejects_unknown_shapes(payload: object) -> None:
    with pytest.raises(ProviderResponseError):
        parse_fixtures_page(payload)


def test_parse_team_statistics_validates_entries() -> None:
    entries = parse_team_statistics(
        [
            {
                "teamId": 50051,
                "statistics": [
                    {"name": "goals", "value": "4"},
                    {"name": "attempts_accuracy", "value": "54", "unit": "PERCENTAGE"},
                ],
            },
            {"teamId": "2600", "statistics": []},
        ],
        match_id="2040001",
    )

    assert [e.team_id for e in entries] == ["50051", "2600"]
    assert entries[0].values_by_name() == {"goals": "4", "attempts_accuracy": "54"}
    assert entries[0].statistics[1].unit == "PERCENTAGE"


def test_parse_team_statistics_rejects_non_list() -> None:
    with pytest.raises(ProviderResponseError, match="2040001"):
        parse_team_statistics({"teamId": "1"}, match_id="2040001")


def test_parse_team_statistics_tolerates_malformed_items() -> None:
    entries = parse_team_statistics(
        [
            {
                "teamId": "1",
                "statistics": [
                    {"value": "3"},
                    {"name": None, "value": "5"},
                    {"name": 7, "value": "2"},
                    "goals",
                    {"name": "fouls_committed", "value": "6", "attributes": "n/a"},
                    {"name": "attempts", "value": "9", "unit": 12},
                    {"name": "goals", "value": "4"},
                ],
            }
        ],
        match_id="9",
    )

    assert entries[0].values_by_name() == {"fouls_committed": "6", "attempts": "9", "goals": "4"}
    assert entries[0].statistics[0].attributes == "n/a"
    assert entries[0].statistics[1].unit == 12


def test_parse_fixtures_page_accepts_match_without_id() -> None:
    matches = [{"status": "FINISHED"}, {"id": "2040001", "status": "FINISHED"}]

    assert parse_fixtures_page(matches) == matches
