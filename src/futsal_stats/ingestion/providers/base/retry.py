from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

T = TypeVar("T")

RetryObserver = Callable[[int, BaseException], None]
RetryPredicate = Callable[[BaseException], bool]


def _retry_everything(exc: BaseException) -> bool:
    return True


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retries with exponential backoff.

    Delay after failed attempt `n` (0-indexed) is `min(max_delay_s, base_delay_s * 2**n)`.
    No delay follows the final attempt; its exception is re-raised unchanged.
    """

    base_delay_s: float = 1.0
    max_delay_s: float = 30.0
    max_attempts: int = 3

    _sleep: Any = field(default=time.sleep, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay_s < 0 or self.max_delay_s < 0:
            raise ValueError("retry delays must be >= 0")

    def delay_for(self, attempt: int) -> float:
        return min(self.max_delay_s, self.base_delay_s * (2**attempt))

    def run(
        self,
        operation: Callable[[], T],
        on_retry: RetryObserver | None = None,
        *,
        should_retry: RetryPredicate = _retry_everything,
    ) -> T:
        """
        Call `operation` until it succeeds or `max_attempts` is reached.

        `on_retry(attempt_number, exc)` fires before each backoff sleep, with
        attempt_number counting from 1. Exceptions rejected by `should_retry`
        are raised immediately.
        """
        for attempt in range(self.max_attempts):
            try:
                return operation()
            except Exception as exc:
                is_last = attempt >= self.max_attempts - 1
                if is_last or not should_retry(exc):
                    raise
                if on_retry is not None:
                    on_retry(attempt + 1, exc)
                self._sleep(self.delay_for(attempt))

        # max_attempts >= 1 guarantees the loop either returns or raises.
        raise AssertionError("unreachable")
