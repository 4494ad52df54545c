from __future__ import annotations

import time
from collections.abc import Sequence

from futsal_stats.core.logging import get_logger
from futsal_stats.ingestion.providers.uefa.client import UefaClient
from futsal_stats.ingestion.providers.uefa.progress import notify_progress
from futsal_stats.ingestion.providers.uefa.transform import transform_match_statistics
from futsal_stats.ingestion.providers.uefa.types import (
    MatchScrapeFailure,
    MatchScrapeOutcome,
    MatchStatistics,
    ProgressSink,
    ScrapeReport,
    ScrapeSummary,
)

logger = get_logger(__name__)


def _format_failure_reason(exc: BaseException, *, max_len: int = 300) -> str:
    msg = str(exc).strip() or exc.__class__.__name__
    if len(msg) > max_len:
        return f"{msg[: max_len - 1]}…"
    return msg


def scrape_match_statistics_outcome(match_id: str, client: UefaClient) -> MatchScrapeOutcome:
    """Fetch and normalize one match; any failure becomes a failed outcome."""

    try:
        entries = client.get_team_statistics(match_id)
        statistics = transform_match_statistics(match_id, entries)
    except Exception as exc:
        reason = _format_failure_reason(exc)
        logger.error(
            "match_statistics_failed",
            match_id=match_id,
            error_type=exc.__class__.__name__,
            error=reason,
        )
        return MatchScrapeOutcome(match_id=match_id, error=reason)

    return MatchScrapeOutcome(match_id=match_id, statistics=statistics)


def summarize_statistics(statistics: Sequence[MatchStatistics]) -> ScrapeSummary:
    """Totals and averages over successful matches only."""

    matches = len(statistics)
    teams = matches * 2

    def total(field: str) -> float:
        return sum(
            getattr(m.home_team, field) + getattr(m.away_team, field) for m in statistics
        )

    goals = total("goals")
    attempts = total("attempts")
    fouls = total("fouls_committed")
    yellow_cards = total("yellow_cards")

    return ScrapeSummary(
        total_goals=goals,
        avg_goals_per_match=goals / matches if matches else 0.0,
        total_attempts=attempts,
        avg_attempts_per_team=attempts / teams if teams else 0.0,
        total_fouls=fouls,
        avg_fouls_per_team=fouls / teams if teams else 0.0,
        total_yellow_cards=yellow_cards,
        avg_yellow_cards_per_team=yellow_cards / teams if teams else 0.0,
    )


def scrape_match_statistics(
    match_ids: Sequence[str],
    *,
    client: UefaClient | None = None,
    on_progress: ProgressSink | None = None,
) -> ScrapeReport:
    """Fetch team statistics for every match id, in order.

    A failing match is recorded and the batch moves on; the report always
    accounts for every input id exactly once.
    """

    created_client: UefaClient | None = None
    if client is None:
        created_client = client = UefaClient.from_settings()

    started = time.monotonic()
    statistics: list[MatchStatistics] = []
    errors: list[MatchScrapeFailure] = []
    total = len(match_ids)

    logger.info("match_statistics_start", matches=total)

    try:
        for idx, match_id in enumerate(match_ids, start=1):
            outcome = scrape_match_statistics_outcome(str(match_id), client)
            if outcome.statistics is not None:
                statistics.append(outcome.statistics)
            else:
                errors.append(
                    MatchScrapeFailure(match_id=outcome.match_id, message=outcome.error or "")
                )

            notify_progress(on_progress, idx, total)
    finally:
        throttle_stats = client.stats()
        if created_client is not None:
            created_client.close()

    duration_s = time.monotonic() - started

    logger.info(
        "match_statistics_complete",
        matches=total,
        successful=len(statistics),
        failed=len(errors),
        requests=throttle_stats.total_requests,
        duration_s=round(duration_s, 2),
    )

    return ScrapeReport(
        total_matches=total,
        successful=len(statistics),
        failed=len(errors),
        duration_s=duration_s,
        statistics=statistics,
        errors=errors,
        summary=summarize_statistics(statistics),
    )
