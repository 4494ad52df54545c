from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .types import ApiItem

FINISHED = "FINISHED"
LINEUP_AVAILABLE = {"AVAILABLE", "TACTICAL_AVAILABLE"}


@dataclass(frozen=True)
class MatchIdSelection:
    all_finished: list[str]
    with_complete_data: list[str]

    def to_json(self) -> dict[str, list[str]]:
        return {"allFinished": self.all_finished, "withCompleteData": self.with_complete_data}


@dataclass(frozen=True)
class FixtureSummary:
    total_matches: int
    finished_matches: int
    seasons: dict[str, int] = field(default_factory=dict)
    phases: dict[str, int] = field(default_factory=dict)


def _phase(match: ApiItem) -> str:
    round_obj: Any = match.get("round")
    if isinstance(round_obj, dict) and isinstance(round_obj.get("phase"), str):
        return round_obj["phase"]
    return "UNKNOWN"


def select_match_ids(matches: Iterable[ApiItem]) -> MatchIdSelection:
    """Pick the ids worth scraping statistics for.

    Finished matches with a published lineup are the ones the statistics
    endpoint reliably has data for.
    """

    all_finished: list[str] = []
    with_complete_data: list[str] = []

    for match in matches:
        if match.get("status") != FINISHED or match.get("id") is None:
            continue
        match_id = str(match["id"])
        all_finished.append(match_id)
        if match.get("lineupStatus") in LINEUP_AVAILABLE:
            with_complete_data.append(match_id)

    return MatchIdSelection(all_finished=all_finished, with_complete_data=with_complete_data)


def summarize_fixtures(matches: Iterable[ApiItem]) -> FixtureSummary:
    items = list(matches)
    seasons = Counter(str(m.get("seasonYear", "UNKNOWN")) for m in items)
    phases = Counter(_phase(m) for m in items)
    return FixtureSummary(
        total_matches=len(items),
        finished_matches=sum(1 for m in items if m.get("status") == FINISHED),
        seasons=dict(seasons),
        phases=dict(phases),
    )
