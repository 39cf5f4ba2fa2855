# ABOUTME: Async HTTP client abstraction for the remote book collection.
# ABOUTME: Maps HTTP statuses onto the store error taxonomy, with one optional bounded retry.

import asyncio
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from shelfsync import __version__
from shelfsync.errors import NotFoundError, StoreError, TransportError, ValidationError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_VALIDATION_STATUS_CODES = {400, 409, 422}
_MAX_ALLOWED_RETRIES = 1


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for JSON requests against the collection resource."""

    async def request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> Any: ...

    async def aclose(self) -> None: ...


def _error_for_status(method: str, url: str, response: httpx.Response) -> StoreError:
    status = response.status_code
    message = f"HTTP {status} from {method} {url}"
    detail = response.text.strip()
    if detail:
        message = f"{message}: {detail[:200]}"
    if status == 404:
        return NotFoundError(message, status_code=status)
    if status in _VALIDATION_STATUS_CODES:
        return ValidationError(message, status_code=status)
    return TransportError(message, status_code=status)


class ShelfsyncHttpClient:
    """Async HTTP client for the remote collection.

    Wraps httpx.AsyncClient with a base URL, JSON headers, and at most one
    retry for transient failures (connection errors, 429, 5xx). Retrying is
    off unless max_retries is set to 1.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not 0 <= max_retries <= _MAX_ALLOWED_RETRIES:
            msg = f"max_retries must be 0 or {_MAX_ALLOWED_RETRIES}, got {max_retries}"
            raise ValueError(msg)
        client_kwargs: dict[str, Any] = {
            "base_url": base_url.rstrip("/"),
            "headers": {
                "User-Agent": f"shelfsync/{__version__}",
                "Content-Type": "application/json",
            },
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            json: Optional JSON request body.

        Returns:
            Parsed JSON response body, or None for an empty body.

        Raises:
            TransportError: On connection failures, server errors, or
                exhausted retries.
            NotFoundError: On 404.
            ValidationError: On 400/409/422 or an undecodable body.
        """
        attempts = 1 + self._max_retries
        last_error: StoreError = TransportError(f"No response from {method} {path}")
        for attempt in range(attempts):
            try:
                response = await self._client.request(method, path, json=json)
            except httpx.HTTPError as exc:
                last_error = TransportError(f"Request failed: {method} {path}: {exc}")
                last_error.__cause__ = exc
            else:
                if response.is_success:
                    return self._decode(method, path, response)
                last_error = _error_for_status(method, path, response)
                if response.status_code not in _RETRYABLE_STATUS_CODES:
                    raise last_error

            if attempt < attempts - 1:
                logger.warning(
                    "%s from %s %s, retrying in %.1fs (attempt %d/%d)",
                    last_error.reason,
                    method,
                    path,
                    self._retry_delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(self._retry_delay)

        raise last_error

    @staticmethod
    def _decode(method: str, path: str, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ValidationError(
                f"Invalid JSON from {method} {path}", status_code=response.status_code
            ) from exc

    async def aclose(self) -> None:
        await self._client.aclose()
