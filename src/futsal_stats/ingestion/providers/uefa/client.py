from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from futsal_stats.core.config import Settings, settings
from futsal_stats.core.logging import get_logger
from futsal_stats.ingestion.providers.base.resilient import ResilientClient
from futsal_stats.ingestion.providers.base.throttle import Throttle, ThrottleStats

from .payloads import TeamStatisticsEntry, parse_fixtures_page, parse_team_statistics
from .types import ApiItem, SeasonQuery

logger = get_logger(__name__)


def build_fixtures_params(
    query: SeasonQuery, *, competition_id: str, offset: int, limit: int
) -> dict[str, str]:
    return {
        "competitionId": competition_id,
        "fromDate": query.from_date.isoformat(),
        "toDate": query.to_date.isoformat(),
        "seasonYear": str(query.season_year),
        "phase": "ALL",
        "order": "ASC",
        "limit": str(limit),
        "offset": str(offset),
        "utcOffset": "0",
    }


@dataclass
class UefaClient:
    resilient: ResilientClient
    fixtures_url: str = settings.uefa_fixtures_url
    statistics_url: str = settings.uefa_statistics_url
    competition_id: str = settings.competition_id

    _closed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_settings(
        cls,
        cfg: Settings = settings,
        *,
        throttle: Throttle | None = None,
        transport: Any | None = None,
    ) -> UefaClient:
        return cls(
            resilient=ResilientClient.from_settings(cfg, throttle=throttle, transport=transport),
            fixtures_url=cfg.uefa_fixtures_url,
            statistics_url=cfg.uefa_statistics_url,
            competition_id=cfg.competition_id,
        )

    def close(self) -> None:
        if not self._closed:
            self.resilient.close()
            self._closed = True

    def __enter__(self) -> UefaClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_fixtures_page(self, query: SeasonQuery, *, offset: int, limit: int) -> list[ApiItem]:
        params = build_fixtures_params(
            query, competition_id=self.competition_id, offset=offset, limit=limit
        )

        def log_retry(attempt: int, exc: BaseException) -> None:
            logger.warning(
                "fixtures_retry", attempt=attempt, season=query.label, offset=offset, error=str(exc)
            )

        value = self.resilient.request(self.fixtures_url, params=params, on_retry=log_retry)
        return parse_fixtures_page(value)

    def get_team_statistics(self, match_id: str) -> list[TeamStatisticsEntry]:
        url = f"{self.statistics_url.rstrip('/')}/{match_id}"

        def log_retry(attempt: int, exc: BaseException) -> None:
            logger.warning("statistics_retry", attempt=attempt, match_id=match_id, error=str(exc))

        value = self.resilient.request(url, on_retry=log_retry)
        return parse_team_statistics(value, match_id=match_id)

    def stats(self) -> ThrottleStats:
        return self.resilient.stats()
