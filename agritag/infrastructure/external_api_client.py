"""
Infrastructure layer: shared HTTP client with retry logic.
"""
import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from agritag.config import settings
from agritag.infrastructure.api_constants import APIConstants

logger = logging.getLogger(__name__)


class ExternalAPIError(Exception):
    """Raised when an external API call fails."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class ExternalAPIClient:
    """
    Base client for the external JSON APIs.

    Implements retry logic with exponential backoff: server errors (5xx)
    and transport errors are retried, client errors (4xx) fail at once.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = APIConstants.DEFAULT_TIMEOUT,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Root URL all endpoint paths are relative to
            headers: Extra headers sent with every request
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "accept": APIConstants.CONTENT_TYPE_JSON,
                **(headers or {}),
            },
            timeout=timeout,
        )

    async def __aenter__(self) -> "ExternalAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _send(self, method: str, endpoint: str, **kwargs) -> Any:
        response = await self.client.request(method, endpoint, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Retry on server errors (5xx)
            if e.response.status_code >= 500:
                logger.warning(f"{method} {endpoint} returned {e.response.status_code}, retrying")
                raise
            # Don't retry on client errors (4xx)
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Decoded JSON body ({} for empty responses)

        Raises:
            ExternalAPIError: On a client error, or once retries are exhausted
        """
        try:
            return await self._send(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            raise ExternalAPIError(
                f"API request failed after retries: {e.response.status_code} - {e.response.text}"
            )
        except httpx.RequestError as e:
            raise ExternalAPIError(f"API request error: {str(e)}")
