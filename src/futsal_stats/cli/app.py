from __future__ import annotations

import typer

from futsal_stats.cli.ingest import app as ingest_app
from futsal_stats.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(ingest_app, name="ingest")


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Overrides LOG_LEVEL."),
) -> None:
    """UEFA futsal fixtures and match statistics ingestion."""
    configure_logging(log_level)
