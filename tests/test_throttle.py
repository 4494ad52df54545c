from __future__ import annotations

import pytest

from futsal_stats.ingestion.providers.base.throttle import Throttle


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_throttle_first_dispatch_does_not_wait() -> None:
    clock = FakeClock()
    throttle = Throttle(requests_per_second=2.0, _sleep=clock.sleep, _monotonic=clock.monotonic)

    throttle.await_ready()

    assert clock.sleeps == []
    assert throttle.total_requests == 1
    assert throttle.last_request_monotonic == 0.0


def test_throttle_waits_only_for_remaining_interval() -> None:
    clock = FakeClock()
    throttle = Throttle(requests_per_second=2.0, _sleep=clock.sleep, _monotonic=clock.monotonic)

    throttle.await_ready()
    clock.now = 0.2
    throttle.await_ready()

    assert clock.sleeps == [pytest.approx(0.3)]
    assert throttle.last_request_monotonic == pytest.approx(0.5)


def test_throttle_does_not_wait_when_interval_already_elapsed() -> None:
    clock = FakeClock()
    throttle = Throttle(requests_per_second=2.0, _sleep=clock.sleep, _monotonic=clock.monotonic)

    throttle.await_ready()
    clock.now = 5.0
    throttle.await_ready()

    assert clock.sleeps == []


@pytest.mark.parametrize("rate", [0.5, 1.0, 2.0, 10.0])
def test_throttle_spaces_consecutive_dispatches(rate: float) -> None:
    clock = FakeClock()
    throttle = Throttle(requests_per_second=rate, _sleep=clock.sleep, _monotonic=clock.monotonic)

    dispatch_times: list[float] = []
    for _ in range(6):
        throttle.await_ready()
        dispatch_times.append(clock.now)

    assert dispatch_times[-1] - dispatch_times[0] >= 5 * (1.0 / rate) - 1e-9
    for earlier, later in zip(dispatch_times, dispatch_times[1:]):
        assert later - earlier >= (1.0 / rate) - 1e-9


def test_throttle_stats_and_reset() -> None:
    clock = FakeClock()
    throttle = Throttle(requests_per_second=4.0, _sleep=clock.sleep, _monotonic=clock.monotonic)

    throttle.await_ready()
    throttle.await_ready()

    stats = throttle.stats()
    assert stats.total_requests == 2
    assert stats.requests_per_second == 4.0
    assert stats.min_interval_s == pytest.approx(0.25)

    throttle.reset()
    assert throttle.stats().total_requests == 0
    assert throttle.last_request_monotonic is None

    clock.sleeps.clear()
    throttle.await_ready()
    assert clock.sleeps == []


def test_throttle_rejects_non_positive_rate() -> None:
    with pytest.raises(ValueError):
        Throttle(requests_per_second=0)
