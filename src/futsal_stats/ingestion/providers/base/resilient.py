from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from futsal_stats.core.config import Settings, settings
from futsal_stats.core.logging import get_logger

from .client import BaseHttpClient
from .errors import ProviderRequestError
from .retry import RetryObserver, RetryPolicy
from .throttle import Throttle, ThrottleStats

logger = get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, ProviderRequestError):
        return exc.retryable
    return True


@dataclass
class ResilientClient:
    """Throttle + retry around one HTTP GET.

    The throttle is applied once per logical request, before the first attempt.
    With `retry_permanent=False`, errors classified as non-retryable (HTTP 404)
    fail on the first attempt.
    """

    http: BaseHttpClient
    throttle: Throttle = field(default_factory=Throttle)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    retry_permanent: bool = True

    @classmethod
    def from_settings(
        cls,
        cfg: Settings = settings,
        *,
        throttle: Throttle | None = None,
        transport: Any | None = None,
    ) -> ResilientClient:
        http = BaseHttpClient(
            timeout_s=cfg.http_timeout_s,
            connect_timeout_s=cfg.http_connect_timeout_s,
            headers={"User-Agent": cfg.user_agent, "Accept": "application/json"},
            transport=transport,
        )
        return cls(
            http=http,
            throttle=throttle or Throttle(requests_per_second=cfg.requests_per_second),
            retry_policy=RetryPolicy(
                base_delay_s=cfg.retry_base_delay_s,
                max_delay_s=cfg.retry_max_delay_s,
                max_attempts=cfg.retry_attempts,
            ),
            retry_permanent=cfg.retry_not_found,
        )

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> ResilientClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        on_retry: RetryObserver | None = None,
    ) -> Any:
        """GET `url` and return the decoded JSON value, raising the last error once retries run out."""

        self.throttle.await_ready()
        logger.debug("provider_request", url=url, params=dict(params or {}))

        if self.retry_permanent:
            return self.retry_policy.run(
                lambda: self.http.get_json_value(url, params=params), on_retry
            )
        return self.retry_policy.run(
            lambda: self.http.get_json_value(url, params=params),
            on_retry,
            should_retry=_is_retryable,
        )

    def stats(self) -> ThrottleStats:
        return self.throttle.stats()

    def reset(self) -> None:
        self.throttle.reset()
