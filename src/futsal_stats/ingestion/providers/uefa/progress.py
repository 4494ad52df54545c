from __future__ import annotations

from futsal_stats.core.logging import get_logger

from .types import ProgressSink

logger = get_logger(__name__)


def notify_progress(sink: ProgressSink | None, completed: int, total: int | None) -> None:
    """Report progress; a failing sink is logged and never interrupts the run."""
    if sink is None:
        return
    try:
        sink(completed, total)
    except Exception:
        logger.warning("progress_sink_failed", completed=completed, total=total, exc_info=True)
