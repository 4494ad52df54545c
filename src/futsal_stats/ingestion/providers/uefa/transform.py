from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from futsal_stats.core.logging import get_logger
from futsal_stats.ingestion.providers.base.errors import ProviderMappingError

from .payloads import TeamStatisticsEntry
from .types import MatchStatistics, TeamStatistics

logger = get_logger(__name__)

_leading_number_re = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

# canonical field -> provider statistic name
STATISTIC_FIELDS: dict[str, str] = {
    "goals": "goals",
    "attempts": "attempts",
    "attempts_on_target": "attempts_on_target",
    "attempts_off_target": "attempts_off_target",
    "attempts_blocked": "attempts_blocked",
    "attempts_saved": "attempts_saved",
    "shot_accuracy": "attempts_accuracy",
    "fouls_committed": "fouls_committed",
    "fouls_suffered": "fouls_suffered",
    "yellow_cards": "yellow_cards",
    "red_cards": "red_cards",
    "corners": "corners",
    "woodwork_hits": "attempts_on_woodwork",
    "assists": "assists",
    "free_kicks_on_goal": "free_kicks_on_goal",
    "own_goals": "own_goals_for",
    "played_time_minutes": "played_time",
}


def parse_stat_value(value: Any) -> float:
    """Best-effort numeric parse; anything unusable becomes 0.0.

    Strings are read by their leading numeric prefix, so "54%" -> 54.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, int | float):
        parsed = float(value)
    elif isinstance(value, str):
        m = _leading_number_re.match(value)
        if m is None:
            return 0.0
        parsed = float(m.group(0))
    else:
        return 0.0

    return parsed if math.isfinite(parsed) else 0.0


def _as_entry(entry: TeamStatisticsEntry | Mapping[str, Any]) -> TeamStatisticsEntry:
    if isinstance(entry, TeamStatisticsEntry):
        return entry
    return TeamStatisticsEntry.model_validate(entry)


def transform_team_statistics(entry: TeamStatisticsEntry | Mapping[str, Any]) -> TeamStatistics:
    entry = _as_entry(entry)
    raw = entry.values_by_name()
    numeric = {field: parse_stat_value(raw.get(name)) for field, name in STATISTIC_FIELDS.items()}
    return TeamStatistics(team_id=entry.team_id, team_name=entry.team_id, **numeric)


def transform_match_statistics(
    match_id: str,
    entries: Sequence[TeamStatisticsEntry | Mapping[str, Any]],
) -> MatchStatistics:
    """Build the canonical home/away record for one match.

    Matches decided on penalties come back with a third entry for the
    shootout; only the first two (home, away) are used.
    """

    if len(entries) < 2:
        raise ProviderMappingError(
            f"Expected at least 2 teams, got {len(entries)}",
            context={"match_id": match_id},
        )

    if len(entries) > 2:
        logger.debug(
            "extra_team_statistics_entries",
            match_id=match_id,
            entries=len(entries),
            note="likely penalty shootout, using first 2 teams",
        )

    home, away = entries[0], entries[1]
    return MatchStatistics(
        match_id=match_id,
        home_team=transform_team_statistics(home),
        away_team=transform_team_statistics(away),
    )
