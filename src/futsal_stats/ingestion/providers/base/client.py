from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import (
    ProviderHttpError,
    ProviderNotFound,
    ProviderRateLimited,
    ProviderRequestError,
    ProviderResponseError,
)


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling.
    - Classifies non-2xx responses into the provider error taxonomy.
    - Accepts absolute URLs; `base_url` is optional for providers spread over several hosts.
    """

    base_url: str = ""
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        base_url = self.base_url.rstrip("/") + "/" if self.base_url else ""
        self._client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request_json(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """
        Perform one HTTP request and return the decoded JSON value (object, array or scalar).

        Raises:
            ProviderNotFound: HTTP 404.
            ProviderRateLimited: HTTP 429.
            ProviderHttpError: any other non-2xx status.
            ProviderRequestError: timeouts, connection and protocol failures.
            ProviderResponseError: body is not valid JSON.
        """
        target = url if self._is_absolute(url) else url.lstrip("/")
        try:
            resp = self._client.request(
                method=method,
                url=target,
                params=params,
                headers=headers,
            )
        except (httpx.TransportError, httpx.DecodingError) as e:
            raise ProviderRequestError(f"{e.__class__.__name__}: {e}", url=url) from e

        shown_url = str(resp.request.url)
        status = resp.status_code

        if status == 404:
            raise ProviderNotFound(f"Not found: {shown_url}", url=shown_url, status_code=status)
        if status == 429:
            raise ProviderRateLimited(
                f"Rate limited: {shown_url}", url=shown_url, status_code=status
            )
        if not resp.is_success:
            raise ProviderHttpError(f"HTTP {status}: {shown_url}", url=shown_url, status_code=status)

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderResponseError(f"Response was not valid JSON: {shown_url}") from e

    def get_json_value(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self.request_json("GET", url, params=params, headers=headers)

    @staticmethod
    def _is_absolute(url: str) -> bool:
        return url.startswith(("http://", "https://"))
