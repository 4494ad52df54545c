"""Boundary validation for UEFA payloads.

Decoded JSON is checked against one of two known shapes before anything
downstream touches it:

- fixtures listing: a JSON array of match objects, or `{"matches": [...]}`
- team statistics: a JSON array of per-team entries, each with a list of
  `{name, value, unit?, attributes?}` items

Field-level drift (unknown extra keys, missing statistics, odd values) is
tolerated here and handled by the transformer; structural mismatches raise
`ProviderResponseError`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from futsal_stats.ingestion.providers.base.errors import ProviderResponseError

from .types import ApiItem


class StatisticItem(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str
    value: Any = None
    unit: Any = None
    attributes: Any = None


class TeamStatisticsEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    team_id: str = Field(default="", alias="teamId")
    statistics: list[StatisticItem] = Field(default_factory=list)

    @field_validator("statistics", mode="before")
    @classmethod
    def _drop_unnamed_items(cls, value: Any) -> Any:
        # Items without a string name cannot be looked up; the rest of the entry still counts.
        if not isinstance(value, list):
            return value
        return [
            item
            for item in value
            if isinstance(item, dict) and isinstance(item.get("name"), str) and item["name"]
        ]

    def values_by_name(self) -> dict[str, Any]:
        # Later duplicates win.
        return {item.name: item.value for item in self.statistics}


class FixtureMatch(BaseModel):
    """Minimal view of one fixture; the raw object is kept alongside it."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str | None = None
    status: Any = None
    seasonYear: Any = None
    lineupStatus: Any = None


class FixturesEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    matches: list[ApiItem]
    total: int | None = None


_team_statistics_adapter = TypeAdapter(list[TeamStatisticsEntry])
_fixture_list_adapter = TypeAdapter(list[ApiItem])


def parse_team_statistics(value: Any, *, match_id: str) -> list[TeamStatisticsEntry]:
    if not isinstance(value, list):
        raise ProviderResponseError(
            f"Expected list of team statistics for match {match_id}, got {type(value).__name__}"
        )
    try:
        return _team_statistics_adapter.validate_python(value)
    except ValidationError as e:
        raise ProviderResponseError(
            f"Unrecognized team statistics payload for match {match_id}: "
            f"{e.error_count()} validation error(s)"
        ) from e


def parse_fixtures_page(value: Any) -> list[ApiItem]:
    """Return the raw match objects of one listing page, validated."""

    try:
        if isinstance(value, dict):
            items = FixturesEnvelope.model_validate(value).matches
        else:
            items = _fixture_list_adapter.validate_python(value)
        for item in items:
            FixtureMatch.model_validate(item)
    except ValidationError as e:
        raise ProviderResponseError(
            f"Unrecognized fixtures payload: {e.error_count()} validation error(s)"
        ) from e

    return items
