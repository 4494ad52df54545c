from __future__ import annotations


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, etc.)."""

    # Decided once at the client boundary; the retry policy may consult it.
    retryable: bool = True

    def __init__(
        self, message: str, *, url: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ProviderHttpError(ProviderRequestError):
    """Any non-2xx response without a more specific classification."""


class ProviderRateLimited(ProviderRequestError):
    """Provider throttled the request (HTTP 429)."""


class ProviderNotFound(ProviderRequestError):
    """Requested resource does not exist (HTTP 404)."""

    retryable = False


class ProviderResponseError(ProviderError):
    """Provider returned a response body we could not decode or did not recognize."""


class ProviderMappingError(ProviderError):
    """Mapping/extraction failed due to unexpected schema or values."""

    def __init__(self, message: str, context: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} | context={self.context}"
