"""Tests for BaseAPIClient implementation."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tokenimage.core.exceptions import ExternalServiceError
from tokenimage.services.base import BaseAPIClient


def _status_response(status_code: int, reason: str) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = reason
    response.raise_for_status = MagicMock(
        side_effect=httpx.HTTPStatusError(reason, request=MagicMock(), response=response)
    )
    return response


class TestBaseAPIClientInit:
    """Tests for BaseAPIClient initialization."""

    def test_base_api_client_init_with_base_url(self) -> None:
        """
        Given: BaseAPIClient class
        When: Created with base_url
        Then: Stores base_url and uses it as service name
        """
        client = BaseAPIClient(base_url="https://api.example.com")

        assert client.base_url == "https://api.example.com"
        assert client.service_name == "https://api.example.com"

    def test_base_api_client_default_timeout(self) -> None:
        """
        Given: BaseAPIClient without explicit timeout
        When: Created
        Then: Uses default timeout of 30 seconds
        """
        client = BaseAPIClient(base_url="https://api.example.com")
        assert client.timeout == 30.0

    def test_base_api_client_without_base_url(self) -> None:
        """
        Given: BaseAPIClient for absolute URLs
        When: Created without base_url but with a service name
        Then: The service name is kept for errors
        """
        client = BaseAPIClient(service_name="coingecko-images")

        assert client.base_url == ""
        assert client.service_name == "coingecko-images"

    def test_base_api_client_lazy_initialization(self) -> None:
        """
        Given: BaseAPIClient created
        When: Before first request
        Then: Internal httpx client is None (lazy)
        """
        client = BaseAPIClient(base_url="https://api.example.com")
        assert client._client is None


class TestBaseAPIClientClose:
    """Tests for BaseAPIClient close method."""

    @pytest.mark.asyncio
    async def test_close_cleans_up_client(self) -> None:
        """
        Given: BaseAPIClient with active httpx client
        When: close() is called
        Then: Client is closed and set to None
        """
        client = BaseAPIClient(base_url="https://api.example.com")
        mock_httpx_client = AsyncMock()
        client._client = mock_httpx_client

        await client.close()

        mock_httpx_client.aclose.assert_called_once()
        assert client._client is None

    @pytest.mark.asyncio
    async def test_close_does_nothing_if_no_client(self) -> None:
        """
        Given: BaseAPIClient without active client
        When: close() is called
        Then: No error occurs
        """
        client = BaseAPIClient(base_url="https://api.example.com")

        await client.close()

        assert client._client is None


class TestBaseAPIClientRequests:
    """Tests for single-attempt request handling."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        """
        Given: BaseAPIClient
        When: Request succeeds
        Then: Returns the response after one call
        """
        client = BaseAPIClient(base_url="https://api.example.com")

        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.raise_for_status = MagicMock()

        mock_httpx_client = AsyncMock()
        mock_httpx_client.request = AsyncMock(return_value=mock_response)
        client._client = mock_httpx_client

        response = await client.get("/endpoint", params={"a": "1"})

        assert response.status_code == 200
        mock_httpx_client.request.assert_awaited_once_with(
            "GET", "/endpoint", params={"a": "1"}
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "reason"),
        [(404, "Not Found"), (429, "Too Many Requests"), (500, "Internal Server Error")],
    )
    async def test_error_status_fails_without_retry(
        self, status_code: int, reason: str
    ) -> None:
        """
        Given: BaseAPIClient
        When: Request returns an error status (client, rate limit or server)
        Then: ExternalServiceError is raised after exactly one call
        """
        client = BaseAPIClient(base_url="https://api.example.com", service_name="example")

        mock_httpx_client = AsyncMock()
        mock_httpx_client.request = AsyncMock(
            return_value=_status_response(status_code, reason)
        )
        client._client = mock_httpx_client

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.get("/endpoint")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.service == "example"
        assert reason in str(exc_info.value)
        assert mock_httpx_client.request.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [httpx.ConnectTimeout("timeout"), httpx.ConnectError("refused")],
    )
    async def test_transport_error_fails_without_retry(self, error: Exception) -> None:
        """
        Given: BaseAPIClient
        When: The transport raises (timeout or connection error)
        Then: ExternalServiceError without status code is raised after one call
        """
        client = BaseAPIClient(base_url="https://api.example.com")

        mock_httpx_client = AsyncMock()
        mock_httpx_client.request = AsyncMock(side_effect=error)
        client._client = mock_httpx_client

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.get("/endpoint")

        assert exc_info.value.status_code is None
        assert mock_httpx_client.request.call_count == 1

    @pytest.mark.asyncio
    async def test_mock_transport_round_trip(self) -> None:
        """
        Given: A real httpx client over a mock transport
        When: GET is made on the base URL
        Then: The path is resolved against base_url and headers are sent
        """
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        client = BaseAPIClient(
            base_url="https://api.example.com/v3", headers={"X-Test": "1"}
        )
        client._client = httpx.AsyncClient(
            base_url=client.base_url,
            headers=client.headers,
            transport=httpx.MockTransport(handler),
        )
        try:
            response = await client.get("/coins/list")
        finally:
            await client.close()

        assert response.json() == {"ok": True}
        assert str(seen[0].url) == "https://api.example.com/v3/coins/list"
        assert seen[0].headers["X-Test"] == "1"

    @pytest.mark.asyncio
    async def test_malformed_url_raises_external_service_error(self) -> None:
        """
        Given: An image client without base_url
        When: GET is made on a URL httpx cannot parse
        Then: ExternalServiceError is raised and nothing is sent
        """
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        client = BaseAPIClient(service_name="coingecko-images")
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(ExternalServiceError) as exc_info:
                await client.get("https://[::1")
        finally:
            await client.close()

        assert exc_info.value.service == "coingecko-images"
        assert exc_info.value.status_code is None
        assert "InvalidURL for https://[::1" in str(exc_info.value)
        assert seen == []
