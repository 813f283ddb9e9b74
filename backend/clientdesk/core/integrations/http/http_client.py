"""
Async HTTP client wrapper using aiohttp.
Provides retry/backoff for idempotent requests and maps failures to UpstreamError.
"""

import asyncio
from typing import Optional, Dict, Any
import aiohttp
import logging

from clientdesk.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

# Only these are safe to send twice
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def _error_message(payload: Any, default: Optional[str]) -> str:
    """Pull the backend's ``{message}`` out of an error body."""
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error")
        if isinstance(message, str) and message:
            return message
    return default or "Backend request failed"


class HttpClient:
    """
    Async HTTP client wrapper using aiohttp.
    Provides get/post/patch/delete methods returning decoded JSON.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Optional base URL for all requests
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts for idempotent requests
            retry_delay: Initial delay between retries in seconds
        """
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        return endpoint

    @staticmethod
    async def _read_payload(response: aiohttp.ClientResponse) -> Any:
        """
        Decode the response body; non-JSON bodies become ``{"message": text}``.

        Raises:
            UpstreamError: if a body labelled as JSON does not parse
        """
        if response.content_type == "application/json":
            try:
                return await response.json()
            except ValueError as e:
                raise UpstreamError(
                    "Malformed JSON response from backend",
                    details={"status": response.status, "error": str(e)},
                ) from e
        text = await response.text()
        return {"message": text} if text else None

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        retries: Optional[int] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Make HTTP request with retry logic.

        Connection errors, timeouts and 5xx responses are retried with
        exponential backoff, but only for idempotent methods. 4xx responses
        are raised immediately.

        Args:
            method: HTTP method
            url: Request URL
            retries: Override for the number of attempts
            **kwargs: Additional arguments for aiohttp request

        Returns:
            Decoded JSON payload

        Raises:
            UpstreamError: If the request ultimately fails
        """
        session = await self._get_session()
        if method in IDEMPOTENT_METHODS:
            attempts = max(1, retries if retries is not None else self.max_retries)
        else:
            attempts = 1
        last_error: Optional[UpstreamError] = None

        for attempt in range(attempts):
            try:
                async with session.request(method, url, **kwargs) as response:
                    payload = await self._read_payload(response)
                    if response.status < 400:
                        return payload
                    error = UpstreamError(
                        _error_message(payload, response.reason),
                        upstream_status=response.status,
                        details=payload,
                    )
                    if response.status < 500:
                        raise error
                    last_error = error
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = UpstreamError(f"Backend request failed: {str(e) or type(e).__name__}")

            if attempt < attempts - 1:
                delay = self.retry_delay * (2 ** attempt)  # Exponential backoff
                logger.warning(
                    f"{method} {url} failed (attempt {attempt + 1}/{attempts}): {last_error}. Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)

        logger.error(f"{method} {url} failed after {attempts} attempt(s): {last_error}")
        raise last_error

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        retries: Optional[int] = None,
    ) -> Any:
        """
        Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters
            headers: Request headers
            retries: Override for the number of attempts

        Returns:
            Decoded JSON payload
        """
        url = self._build_url(endpoint)
        return await self._request_with_retry("GET", url, retries=retries, params=params, headers=headers)

    async def post(
        self,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make POST request."""
        url = self._build_url(endpoint)
        return await self._request_with_retry("POST", url, json=json, headers=headers)

    async def patch(
        self,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make PATCH request."""
        url = self._build_url(endpoint)
        return await self._request_with_retry("PATCH", url, json=json, headers=headers)

    async def delete(
        self,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make DELETE request (the backend accepts a JSON body on some deletes)."""
        url = self._build_url(endpoint)
        return await self._request_with_retry("DELETE", url, json=json, headers=headers)
