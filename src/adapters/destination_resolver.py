"""Lectura de destinos desde la API de configuración de destinos."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from adapters.http_client import send_request
from core.config import AppSettings
from core.domain.errors import DestinationCallError
from core.domain.models import Destination, ServiceCredentials

logger = logging.getLogger(__name__)

DESTINATIONS_PATH = "/destination-configuration/v1/destinations"


def destination_url(credentials: ServiceCredentials, destination_name: str) -> str:
    return f"{credentials.uri}{DESTINATIONS_PATH}/{destination_name}"


async def fetch_destination(
    token: str,
    credentials: ServiceCredentials,
    destination_name: str,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Destination:
    """Obtiene la configuración (URL + authTokens) de `destination_name`.

    - 200: parsea el JSON como `Destination`.
    - Otro status: `DestinationCallError` de tipo upstream-status.
    """

    url = destination_url(credentials, destination_name)
    logger.info("Fetching destination", extra={"destination": destination_name, "url": url})

    response = await send_request(
        "GET",
        url,
        settings=settings,
        transport=transport,
        headers={"Authorization": f"Bearer {token}"},
    )

    if response.status_code != 200:
        logger.error(
            "Destination lookup rejected",
            extra={"destination": destination_name, "status_code": response.status_code},
        )
        raise DestinationCallError.upstream_status(
            response.status_code,
            "the destination from destination service",
        )

    try:
        return Destination.model_validate_json(response.content)
    except ValidationError as exc:
        raise DestinationCallError.invalid_response(
            f"Destination '{destination_name}' could not be parsed",
            status_code=response.status_code,
        ) from exc
