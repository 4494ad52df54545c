from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ThrottleStats:
    total_requests: int
    requests_per_second: float
    min_interval_s: float


@dataclass
class Throttle:
    """Minimum-spacing throttle for outbound requests.

    Guarantees at least `1 / requests_per_second` seconds between consecutive
    dispatches. One instance is owned by one client; pass the same instance to
    several clients only when they should share a single combined ceiling.
    """

    requests_per_second: float = 2.0
    last_request_monotonic: float | None = None
    total_requests: int = 0

    _sleep: Any = field(default=time.sleep, repr=False)
    _monotonic: Any = field(default=time.monotonic, repr=False)

    def __post_init__(self) -> None:
        if self.requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be > 0, got {self.requests_per_second}")

    @property
    def min_interval_s(self) -> float:
        return 1.0 / self.requests_per_second

    def await_ready(self) -> None:
        if self.last_request_monotonic is not None:
            elapsed = float(self._monotonic()) - self.last_request_monotonic
            remaining = self.min_interval_s - elapsed
            if remaining > 0:
                self._sleep(remaining)

        self.last_request_monotonic = float(self._monotonic())
        self.total_requests += 1

    def stats(self) -> ThrottleStats:
        return ThrottleStats(
            total_requests=self.total_requests,
            requests_per_second=self.requests_per_second,
            min_interval_s=self.min_interval_s,
        )

    def reset(self) -> None:
        self.total_requests = 0
        self.last_request_monotonic = None
