"""Pytest configuration and shared fixtures.

This module provides:
- Fixed service-binding credentials
- A recording `httpx.MockTransport` factory
- Settings isolated from the developer's environment
"""

from collections.abc import Callable

import httpx
import pytest

from adapters.service_bindings import StaticBindingProvider
from core.config import AppSettings
from core.domain.models import ServiceCredentials

# ============================================================================
# SETTINGS / BINDINGS
# ============================================================================


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep VCAP_SERVICES and user .env files out of the tests."""
    monkeypatch.delenv("VCAP_SERVICES", raising=False)
    for name in ("HTTP_TIMEOUT_SECONDS", "USER_AGENT", "VCAP_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(f"DESTINATION_CALLER_{name}", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def credentials() -> ServiceCredentials:
    return ServiceCredentials(
        url="https://auth.example.com",
        clientid="sb-client",
        clientsecret="s3cret",  # pragma: allowlist secret
        uri="https://destination.example.com",
    )


@pytest.fixture
def bindings(credentials: ServiceCredentials) -> StaticBindingProvider:
    return StaticBindingProvider({"dest-service": credentials})


# ============================================================================
# HTTP FIXTURES
# ============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingTransport]:
    return RecordingTransport


DESTINATION_JSON = {
    "owner": {"SubaccountId": "sub", "InstanceId": None},
    "destinationConfiguration": {
        "Name": "backend",
        "Type": "HTTP",
        "URL": "https://api.example.com",
        "Authentication": "OAuth2ClientCredentials",
    },
    "authTokens": [{"type": "Bearer", "value": "abc", "http_header": {"key": "Authorization", "value": "Bearer abc"}}],
}


def destination_service_handler(
    final: Callable[[httpx.Request], httpx.Response] | None = None,
    *,
    token_status: int = 200,
    destination_status: int = 200,
    destination_json: dict | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Route token, destination and target requests to canned responses."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "auth.example.com":
            if token_status != 200:
                return httpx.Response(token_status, text="denied")
            return httpx.Response(200, json={"access_token": "tok123", "token_type": "bearer"})
        if request.url.host == "destination.example.com":
            if destination_status != 200:
                return httpx.Response(destination_status, text="missing")
            return httpx.Response(200, json=destination_json or DESTINATION_JSON)
        if final is not None:
            return final(request)
        return httpx.Response(200, text="ok")

    return handler


@pytest.fixture
def destination_handler() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    return destination_service_handler
