"""Tests for destination lookup."""

import httpx
import pytest

from adapters.destination_resolver import destination_url, fetch_destination
from core.domain.errors import DestinationCallError, ErrorKind


class TestFetchDestination:
    @pytest.mark.asyncio
    async def test_request_shape(self, credentials, settings, make_transport, destination_handler) -> None:
        transport = make_transport(destination_handler())

        await fetch_destination("tok123", credentials, "backend", settings=settings, transport=transport)

        request = transport.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://destination.example.com/destination-configuration/v1/destinations/backend"
        assert request.headers["Authorization"] == "Bearer tok123"

    @pytest.mark.asyncio
    async def test_parses_destination(self, credentials, settings, make_transport, destination_handler) -> None:
        transport = make_transport(destination_handler())

        destination = await fetch_destination("tok123", credentials, "backend", settings=settings, transport=transport)

        assert destination.destination_configuration.url == "https://api.example.com"
        assert destination.destination_configuration.name == "backend"
        assert destination.auth_tokens[0].type == "Bearer"
        assert destination.auth_tokens[0].value == "abc"

    @pytest.mark.asyncio
    async def test_missing_auth_tokens_defaults_to_empty(self, credentials, settings, make_transport, destination_handler) -> None:
        handler = destination_handler(destination_json={"destinationConfiguration": {"URL": "https://plain.example.com"}})

        destination = await fetch_destination(
            "tok123", credentials, "plain", settings=settings, transport=make_transport(handler)
        )

        assert destination.auth_tokens == []

    @pytest.mark.asyncio
    async def test_non_200_raises_upstream_status(self, credentials, settings, make_transport, destination_handler) -> None:
        transport = make_transport(destination_handler(destination_status=404))

        with pytest.raises(DestinationCallError) as exc_info:
            await fetch_destination("tok123", credentials, "backend", settings=settings, transport=transport)

        assert exc_info.value.kind is ErrorKind.UPSTREAM_STATUS
        assert "404" in exc_info.value.message
        assert "destination service" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_transport_error(self, credentials, settings, make_transport) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("dns failure", request=request)

        with pytest.raises(DestinationCallError) as exc_info:
            await fetch_destination("tok123", credentials, "backend", settings=settings, transport=make_transport(handler))

        assert exc_info.value.kind is ErrorKind.TRANSPORT
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_unparseable_body(self, credentials, settings, make_transport) -> None:
        transport = make_transport(lambda request: httpx.Response(200, json={"unexpected": True}))

        with pytest.raises(DestinationCallError) as exc_info:
            await fetch_destination("tok123", credentials, "backend", settings=settings, transport=transport)

        assert exc_info.value.kind is ErrorKind.INVALID_RESPONSE


def test_destination_url(credentials) -> None:
    assert destination_url(credentials, "x") == "https://destination.example.com/destination-configuration/v1/destinations/x"


class TestTolerantAuthTokens:
    @pytest.mark.asyncio
    async def test_null_auth_tokens_is_empty(self, credentials, settings, make_transport, destination_handler) -> None:
        handler = destination_handler(
            destination_json={"destinationConfiguration": {"URL": "https://api.example.com"}, "authTokens": None}
        )

        destination = await fetch_destination(
            "tok123", credentials, "backend", settings=settings, transport=make_transport(handler)
        )

        assert destination.auth_tokens == []

    @pytest.mark.asyncio
    async def test_error_token_entry_is_accepted(self, credentials, settings, make_transport, destination_handler) -> None:
        handler = destination_handler(
            destination_json={
                "destinationConfiguration": {"URL": "https://api.example.com"},
                "authTokens": [{"type": "Bearer", "error": "Retrieval of OAuth token failed"}],
            }
        )

        destination = await fetch_destination(
            "tok123", credentials, "backend", settings=settings, transport=make_transport(handler)
        )

        assert destination.auth_tokens[0].value is None
        assert destination.auth_tokens[0].usable is False
