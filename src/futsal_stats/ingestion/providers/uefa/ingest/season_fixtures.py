from __future__ import annotations

import time

from futsal_stats.core.config import settings
from futsal_stats.core.logging import get_logger
from futsal_stats.ingestion.providers.uefa.client import UefaClient
from futsal_stats.ingestion.providers.uefa.progress import notify_progress
from futsal_stats.ingestion.providers.uefa.types import (
    ApiItem,
    ProgressSink,
    SeasonFetchResult,
    SeasonQuery,
)

logger = get_logger(__name__)


def fetch_season_fixtures(
    query: SeasonQuery,
    *,
    client: UefaClient | None = None,
    page_size: int | None = None,
    on_progress: ProgressSink | None = None,
) -> SeasonFetchResult:
    """Fetch every fixture of one season, page by page.

    Pages are requested at offsets 0, page_size, 2*page_size, ... and the first
    page shorter than `page_size` ends the run. Any page that fails after
    retries aborts the whole season; no partial result is returned.
    """

    limit = page_size if page_size is not None else settings.page_size
    if limit < 1:
        raise ValueError(f"page_size must be >= 1, got {limit}")

    created_client: UefaClient | None = None
    if client is None:
        created_client = client = UefaClient.from_settings()

    started = time.monotonic()
    matches: list[ApiItem] = []
    offset = 0
    requests = 0

    logger.info("season_fixtures_start", season=query.label, season_year=query.season_year)

    try:
        while True:
            try:
                page = client.get_fixtures_page(query, offset=offset, limit=limit)
            except Exception as exc:
                logger.error(
                    "season_fixtures_failed", season=query.label, offset=offset, error=str(exc)
                )
                raise
            requests += 1
            matches.extend(page)

            logger.info("season_fixtures_page", offset=offset, fetched=len(page), total=len(matches))
            notify_progress(on_progress, requests, None)

            if len(page) < limit:
                break
            offset += limit
    finally:
        if created_client is not None:
            created_client.close()

    return SeasonFetchResult(
        query=query,
        matches=matches,
        total_fetched=len(matches),
        duration_s=time.monotonic() - started,
        request_count=requests,
    )


def fetch_seasons_fixtures(
    queries: list[SeasonQuery],
    *,
    client: UefaClient | None = None,
    page_size: int | None = None,
) -> list[SeasonFetchResult]:
    """Fetch several seasons sequentially over one client (one shared rate ceiling)."""

    created_client: UefaClient | None = None
    if client is None:
        created_client = client = UefaClient.from_settings()

    try:
        return [
            fetch_season_fixtures(query, client=client, page_size=page_size) for query in queries
        ]
    finally:
        if created_client is not None:
            created_client.close()
