"""Remote blob-service store over HTTP."""

import logging
from types import TracebackType
from urllib.parse import quote

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from coa_engine.exceptions import CoaRateLimitError, CoaStoreError
from coa_engine.store.base import KeyValueStore

logger = logging.getLogger(__name__)


def _wait_for_rate_limit(retry_state: RetryCallState) -> float:
    """Custom wait strategy that respects Retry-After header.

    If the exception has a retry_after value, use it.
    Otherwise, fall back to exponential backoff.
    """
    exception = retry_state.outcome.exception() if retry_state.outcome else None

    if isinstance(exception, CoaRateLimitError) and exception.retry_after:
        wait_time = float(exception.retry_after)
        logger.info("Rate limited, waiting %s seconds (from Retry-After header)", wait_time)
        return wait_time

    # Exponential backoff: 2, 4, 8, 16... capped at 60 seconds
    exp_wait = wait_exponential(multiplier=1, min=2, max=60)
    wait_time = exp_wait(retry_state)
    logger.info("Rate limited, waiting %.1f seconds (exponential backoff)", wait_time)
    return wait_time


class HttpStore(KeyValueStore):
    """Key-value store backed by a remote blob service.

    Keys map to ``GET/PUT {base_url}/kv/{key}`` with the raw bytes as body.
    A 404 on GET means the key is unset.

    Only 429 responses are retried: the server rejected the request before
    applying it. Every other failure raises CoaStoreError immediately.

    Usage (context manager - recommended for connection pooling):
        with HttpStore("http://localhost:8080") as store:
            repo = CoaRepository(store)

    Usage (external HTTP client):
        store = HttpStore(base_url, http_client=httpx.Client(timeout=60.0))
        # Store uses the given client and doesn't close it
    """

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client
        self._owns_http_client = http_client is None

    def open(self) -> None:
        """Open a pooled HTTP client if none was provided."""
        if self._http_client is None and self._owns_http_client:
            self._http_client = httpx.Client(timeout=self.timeout)

    def close(self) -> None:
        """Close the pooled client, unless it is external."""
        if self._owns_http_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __enter__(self) -> "HttpStore":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/kv/{quote(key, safe='/')}"

    def get(self, key: str) -> bytes | None:
        response = self._request("GET", key)
        if response.status_code == 404:
            return None
        return response.content

    def put(self, key: str, data: bytes) -> None:
        self._request("PUT", key, content=data)

    @retry(
        retry=retry_if_exception_type(CoaRateLimitError),
        wait=_wait_for_rate_limit,
        stop=stop_after_attempt(5),
        reraise=True,
    )
    def _request(self, method: str, key: str, *, content: bytes | None = None) -> httpx.Response:
        """Send one request, raising CoaStoreError on failure.

        Retries on rate limit (429) with exponential backoff,
        respecting Retry-After header when provided.
        """
        url = self.url_for(key)
        operation = method.lower()
        headers = {"Content-Type": "application/octet-stream"} if content is not None else None

        logger.debug("Request: %s %s", method, url)

        try:
            if self._http_client is not None:
                response = self._http_client.request(method, url, content=content, headers=headers)
            else:
                # Fallback: per-request client (no pooling)
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.request(method, url, content=content, headers=headers)
        except httpx.HTTPError as e:
            raise CoaStoreError(
                f"Store request failed: {method} {url}: {e}", key=key, operation=operation
            ) from e

        return self._handle_response(response, key, operation)

    def _handle_response(self, response: httpx.Response, key: str, operation: str) -> httpx.Response:
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise CoaRateLimitError(
                "Rate limit exceeded",
                key=key,
                operation=operation,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        if response.status_code == 404 and operation == "get":
            return response

        if response.status_code >= 400:
            raise CoaStoreError(
                f"Store error: {response.status_code} for {key}",
                key=key,
                operation=operation,
            )

        return response
