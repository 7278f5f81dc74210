"""
Generic async HTTP client wrapper using httpx.
Provides retry with exponential backoff for transport errors and 5xx replies.
"""

import asyncio
from typing import Optional, Any
import httpx
import logging

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Async HTTP client wrapper using httpx.
    Provides a request method with retry/backoff support.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Optional base URL for all requests
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts per request
            retry_delay: Initial delay between retries in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self.timeout = httpx.Timeout(timeout)
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        return endpoint

    async def request(
        self,
        method: str,
        endpoint: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request with retry logic.

        4xx replies are returned to the caller as-is; transport errors and
        5xx replies are retried, and the last failure is raised.

        Args:
            method: HTTP method
            endpoint: API endpoint (joined onto base_url)
            **kwargs: Additional arguments for httpx request

        Returns:
            httpx Response

        Raises:
            httpx.HTTPError: If every attempt failed
        """
        client = self._get_client()
        url = self._build_url(endpoint)
        last_exception: Optional[httpx.HTTPError] = None

        for attempt in range(self.max_retries):
            try:
                response = await client.request(method, url, **kwargs)
                if response.status_code >= 500:
                    response.raise_for_status()
                return response
            except httpx.HTTPError as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    delay = self.retry_delay * (2 ** attempt)  # Exponential backoff
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}. Retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"Request failed after {self.max_retries} attempts: {e}")

        raise last_exception
