"""Cliente OAuth2 del servicio de destinos (client-credentials grant).

Reglas:
- Cada llamada hace un intercambio nuevo: sin caché ni refresco.
- Un status distinto de 200 es error; el cuerpo no se parsea en ese caso.
"""

from __future__ import annotations

import base64
import logging

import httpx

from adapters.http_client import send_request
from core.config import AppSettings
from core.domain.errors import DestinationCallError
from core.domain.models import ServiceCredentials

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/token"


def basic_auth_header(client_id: str, client_secret: str) -> str:
    encoded = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


async def fetch_access_token(
    credentials: ServiceCredentials,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Obtiene un JWT para la API del servicio de destinos.

    Devuelve el campo `access_token` de la respuesta JSON.
    """

    token_url = f"{credentials.url}{TOKEN_PATH}"
    logger.info("Requesting client credentials token", extra={"client_id": credentials.clientid, "token_url": token_url})

    response = await send_request(
        "POST",
        token_url,
        settings=settings,
        transport=transport,
        headers={
            "Authorization": basic_auth_header(credentials.clientid, credentials.clientsecret),
            "Content-type": "application/x-www-form-urlencoded",
        },
        data={
            "client_id": credentials.clientid,
            "grant_type": "client_credentials",
        },
    )

    if response.status_code != 200:
        logger.error(
            "Client credentials token request rejected",
            extra={"client_id": credentials.clientid, "status_code": response.status_code},
        )
        raise DestinationCallError.upstream_status(response.status_code, "the JWT token")

    try:
        token = response.json()["access_token"]
    except (ValueError, KeyError, TypeError) as exc:
        raise DestinationCallError.invalid_response(
            "Token endpoint returned a body without 'access_token'",
            status_code=response.status_code,
        ) from exc
    if not isinstance(token, str):
        raise DestinationCallError.invalid_response(
            "Token endpoint returned a non-string 'access_token'",
            status_code=response.status_code,
        )
    return token
