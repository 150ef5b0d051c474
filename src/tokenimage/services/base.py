"""Base API client for single-attempt HTTP requests.

This module provides BaseAPIClient, a thin wrapper over a lazily created
httpx.AsyncClient that converts every failure into ExternalServiceError.
Requests are never retried.
"""

from typing import Any

import httpx
import structlog

from tokenimage.core.exceptions import ExternalServiceError

log = structlog.get_logger(__name__)


class BaseAPIClient:
    """Base API client.

    Provides HTTP requests with:
    - Lazy client initialization (created on first request)
    - Uniform ExternalServiceError on non-success status or transport error
    - Proper resource cleanup

    Attributes:
        base_url: Base URL for all requests (empty for absolute URLs).
        timeout: Request timeout in seconds.
        headers: Default headers for all requests.
        service_name: Name reported in ExternalServiceError.

    Example:
        client = BaseAPIClient(
            base_url="https://api.example.com",
            headers={"Authorization": "Bearer token"}
        )
        response = await client.get("/endpoint")
        await client.close()
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        service_name: str | None = None,
    ) -> None:
        """Initialize BaseAPIClient.

        Args:
            base_url: Base URL for all requests.
            timeout: Request timeout in seconds (default: 30).
            headers: Default headers for all requests.
            service_name: Name used in errors (default: base_url).
        """
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self.service_name = service_name or base_url or "http"
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization).

        Returns:
            The httpx AsyncClient instance.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make a single HTTP request.

        Args:
            method: HTTP method.
            path: Request path (appended to base_url) or absolute URL.
            **kwargs: Additional arguments passed to httpx.request.

        Returns:
            httpx.Response on success.

        Raises:
            ExternalServiceError: On non-success status, transport error or
                malformed URL.
        """
        client = await self._get_client()
        log.debug("request_attempt", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            log.warning(
                "request_status_error",
                method=method,
                path=path,
                status_code=status_code,
            )
            raise ExternalServiceError(
                service=self.service_name,
                message=f"{status_code} {e.response.reason_phrase} for {path}",
                status_code=status_code,
            ) from e
        except httpx.RequestError as e:
            log.warning(
                "request_connection_error",
                method=method,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(
                service=self.service_name,
                message=f"{type(e).__name__} for {path}: {e}",
            ) from e
        except httpx.InvalidURL as e:
            # Raised while building the request, not a RequestError subclass
            log.warning("request_invalid_url", method=method, path=path, error=str(e))
            raise ExternalServiceError(
                service=self.service_name,
                message=f"InvalidURL for {path}: {e}",
            ) from e

        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request.

        Args:
            path: Request path or absolute URL.
            **kwargs: Additional arguments passed to httpx.

        Returns:
            httpx.Response on success.
        """
        return await self._request("GET", path, **kwargs)
