from __future__ import annotations

import dataclasses
from pathlib import Path

import typer

from futsal_stats.cli.common import client_scope, read_json, utc_now_iso, write_json
from futsal_stats.core.config import settings
from futsal_stats.ingestion.providers.base.errors import ProviderError
from futsal_stats.ingestion.providers.uefa.fixtures import select_match_ids, summarize_fixtures
from futsal_stats.ingestion.providers.uefa.ingest.match_statistics import scrape_match_statistics
from futsal_stats.ingestion.providers.uefa.ingest.season_fixtures import fetch_season_fixtures
from futsal_stats.ingestion.providers.uefa.types import ScrapeReport, SeasonFetchResult, SeasonQuery

app = typer.Typer(help="Fetch UEFA futsal data and write JSON snapshots.")


def _output_dir(value: Path | None) -> Path:
    return value if value is not None else settings.output_dir


def _load_match_ids(path: Path) -> list[str]:
    data = read_json(path)
    if isinstance(data, list):
        return [str(v) for v in data]
    if isinstance(data, dict):
        ids = data.get("withCompleteData") or data.get("allFinished") or []
        return [str(v) for v in ids]
    raise typer.BadParameter(f"Unrecognized match ids file: {path}")


def _save_fixtures(results: list[SeasonFetchResult], output_dir: Path) -> None:
    raw_dir = output_dir / "raw"
    fetched_at = utc_now_iso()

    for result in results:
        write_json(
            raw_dir / f"fixtures-{result.query.season_year}.json",
            {
                "season": result.query.label,
                "seasonYear": result.query.season_year,
                "fetchedAt": fetched_at,
                "totalMatches": result.total_fetched,
                "matches": result.matches,
            },
        )

    all_matches = [m for r in results for m in r.matches]
    write_json(
        raw_dir / "fixtures-all.json",
        {
            "seasons": [
                {
                    "label": r.query.label,
                    "seasonYear": r.query.season_year,
                    "matchCount": r.total_fetched,
                }
                for r in results
            ],
            "fetchedAt": fetched_at,
            "totalMatches": len(all_matches),
            "matches": all_matches,
        },
    )
    write_json(output_dir / "analysis" / "match-ids.json", select_match_ids(all_matches).to_json())


def _save_report(report: ScrapeReport, output_dir: Path) -> None:
    processed = output_dir / "processed"
    for statistics in report.statistics:
        write_json(processed / "individual" / f"{statistics.match_id}.json", statistics)
    write_json(processed / "all-statistics.json", report.statistics)
    write_json(
        processed / "scraping-report.json",
        {
            "timestamp": utc_now_iso(),
            "totalMatches": report.total_matches,
            "successful": report.successful,
            "failed": report.failed,
            "duration": report.duration_s,
            "summary": report.summary,
            "errors": [dataclasses.asdict(e) for e in report.errors],
        },
    )


def _echo_report(report: ScrapeReport) -> None:
    typer.echo(
        " ".join(
            [
                "Scraped match statistics:",
                f"total={report.total_matches}",
                f"successful={report.successful}",
                f"failed={report.failed}",
                f"success_rate={report.success_rate:.1%}",
                f"duration_s={report.duration_s:.2f}",
                f"avg_per_match_s={report.avg_duration_per_match_s:.2f}",
            ]
        )
    )

    s = report.summary
    if s is not None and report.successful:
        typer.echo(
            " ".join(
                [
                    "Quick stats:",
                    f"goals={s.total_goals:g}",
                    f"goals_per_match={s.avg_goals_per_match:.2f}",
                    f"attempts_per_team={s.avg_attempts_per_team:.2f}",
                    f"fouls_per_team={s.avg_fouls_per_team:.2f}",
                    f"yellow_cards_per_team={s.avg_yellow_cards_per_team:.2f}",
                ]
            )
        )

    if report.errors:
        typer.echo("Failures:")
        for idx, failure in enumerate(report.errors, start=1):
            typer.echo(f"  {idx}. match {failure.match_id}: {failure.message}")


@app.command("season-fixtures")
def ingest_season_fixtures_cmd(
    season_years: list[int] = typer.Option(
        ..., "--season-year", help="Season year (e.g. 2025 for 2024/25). Repeatable."
    ),
    page_size: int | None = typer.Option(
        None, "--page-size", min=1, help="Listing page size (defaults to PAGE_SIZE)."
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", help="Root directory for JSON output."
    ),
) -> None:
    """Fetch all fixtures for one or more seasons and write raw snapshots + match ids."""

    results: list[SeasonFetchResult] = []
    with client_scope() as client:
        for year in season_years:
            query = SeasonQuery.for_season_year(year)
            try:
                result = fetch_season_fixtures(query, client=client, page_size=page_size)
            except ProviderError as exc:
                typer.echo(f"Season {query.label} fetch failed: {exc}", err=True)
                raise typer.Exit(code=1) from exc
            results.append(result)

            summary = summarize_fixtures(result.matches)
            typer.echo(
                " ".join(
                    [
                        f"Fetched season {query.label}:",
                        f"matches={result.total_fetched}",
                        f"finished={summary.finished_matches}",
                        f"requests={result.request_count}",
                        f"duration_s={result.duration_s:.2f}",
                    ]
                )
            )
        total_requests = client.stats().total_requests

    _save_fixtures(results, _output_dir(output_dir))
    typer.echo(
        f"Total matches={sum(r.total_fetched for r in results)} api_requests={total_requests}"
    )


@app.command("match-statistics")
def ingest_match_statistics_cmd(
    match_ids: list[str] = typer.Option(
        [], "--match-id", help="Match id to scrape. Repeatable."
    ),
    match_ids_file: Path | None = typer.Option(
        None,
        "--match-ids-file",
        help="JSON file of ids (list, or object with withCompleteData/allFinished).",
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", help="Root directory for JSON output."
    ),
) -> None:
    """Fetch team statistics for a batch of matches and write the run report."""

    out = _output_dir(output_dir)
    ids = list(match_ids)
    if not ids:
        path = match_ids_file or out / "analysis" / "match-ids.json"
        if not path.exists():
            typer.echo(f"No match ids given and {path} does not exist.", err=True)
            raise typer.Exit(code=1)
        ids = _load_match_ids(path)

    if not ids:
        typer.echo("No match ids to scrape.", err=True)
        raise typer.Exit(code=1)

    with client_scope() as client:
        report = scrape_match_statistics(ids, client=client)

    _save_report(report, out)
    _echo_report(report)

    if report.failed:
        raise typer.Exit(code=1)
