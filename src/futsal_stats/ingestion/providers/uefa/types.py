from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

ApiItem = dict[str, Any]

ProgressSink = Callable[[int, int | None], None]


@dataclass(frozen=True)
class SeasonQuery:
    """One season's fixture listing window."""

    season_year: int
    from_date: date
    to_date: date
    label: str

    def __post_init__(self) -> None:
        if self.from_date > self.to_date:
            raise ValueError(f"from_date {self.from_date} is after to_date {self.to_date}")

    @classmethod
    def for_season_year(cls, season_year: int) -> SeasonQuery:
        """UEFA seasons run September to July; season 2025 is the 2024/25 campaign."""
        start = season_year - 1
        return cls(
            season_year=season_year,
            from_date=date(start, 9, 1),
            to_date=date(season_year, 7, 30),
            label=f"{start}/{season_year % 100:02d}",
        )


@dataclass(frozen=True)
class TeamStatistics:
    team_id: str
    team_name: str
    goals: float = 0.0
    attempts: float = 0.0
    attempts_on_target: float = 0.0
    attempts_off_target: float = 0.0
    attempts_blocked: float = 0.0
    attempts_saved: float = 0.0
    shot_accuracy: float = 0.0
    fouls_committed: float = 0.0
    fouls_suffered: float = 0.0
    yellow_cards: float = 0.0
    red_cards: float = 0.0
    corners: float = 0.0
    woodwork_hits: float = 0.0
    assists: float = 0.0
    free_kicks_on_goal: float = 0.0
    own_goals: float = 0.0
    played_time_minutes: float = 0.0


@dataclass(frozen=True)
class MatchStatistics:
    match_id: str
    home_team: TeamStatistics
    away_team: TeamStatistics


@dataclass(frozen=True)
class MatchScrapeFailure:
    match_id: str
    message: str


@dataclass(frozen=True)
class MatchScrapeOutcome:
    """Result for one match id: exactly one of `statistics` / `error` is set."""

    match_id: str
    statistics: MatchStatistics | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.statistics is None) == (self.error is None):
            raise ValueError("MatchScrapeOutcome needs exactly one of statistics or error")

    @property
    def ok(self) -> bool:
        return self.statistics is not None


@dataclass(frozen=True)
class ScrapeSummary:
    total_goals: float
    avg_goals_per_match: float
    total_attempts: float
    avg_attempts_per_team: float
    total_fouls: float
    avg_fouls_per_team: float
    total_yellow_cards: float
    avg_yellow_cards_per_team: float


@dataclass(frozen=True)
class ScrapeReport:
    total_matches: int
    successful: int
    failed: int
    duration_s: float
    statistics: list[MatchStatistics] = field(default_factory=list)
    errors: list[MatchScrapeFailure] = field(default_factory=list)
    summary: ScrapeSummary | None = None

    @property
    def success_rate(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return self.successful / self.total_matches

    @property
    def avg_duration_per_match_s(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return self.duration_s / self.total_matches


@dataclass(frozen=True)
class SeasonFetchResult:
    query: SeasonQuery
    matches: list[ApiItem]
    total_fetched: int
    duration_s: float
    request_count: int
