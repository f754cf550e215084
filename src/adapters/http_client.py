"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent para los tres pasos de la llamada.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import DestinationCallError

logger = logging.getLogger(__name__)


def build_timeout(settings: AppSettings) -> httpx.Timeout:
    # Sin timeout configurado, una petición colgada bloquea toda la cadena.
    return httpx.Timeout(settings.http_timeout_seconds)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del proyecto.

    Por qué un builder:
    - Centraliza timeouts/headers para que los tres pasos se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=build_timeout(settings),
        headers=headers,
        transport=transport,
    )


async def send_request(
    method: str,
    url: str,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Ejecuta una única petición y traduce fallos de red a `DestinationCallError`.

    No reintenta ni inspecciona el status: eso lo decide cada paso.
    """

    try:
        async with build_async_client(settings, extra_headers=headers, transport=transport) as client:
            return await client.request(method, url, **kwargs)
    except httpx.TimeoutException as exc:
        logger.warning("HTTP request timed out", extra={"method": method, "url": url})
        raise DestinationCallError.transport(f"Timeout calling {method} {url}") from exc
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        logger.warning(
            "HTTP request failed",
            extra={"method": method, "url": url, "error_type": type(exc).__name__},
        )
        raise DestinationCallError.transport(f"Network error calling {method} {url}: {exc}") from exc
