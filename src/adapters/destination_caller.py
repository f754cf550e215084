"""Llamada al sistema destino.

A diferencia del token y del destino, aquí el status no se comprueba:
cualquier respuesta (incluido 5xx) devuelve el cuerpo tal cual.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from adapters.http_client import send_request
from core.config import AppSettings
from core.domain.errors import DestinationCallError
from core.domain.models import Destination, HttpMethod

logger = logging.getLogger(__name__)


def build_target_url(destination: Destination, url: str | None = None) -> str:
    return f"{destination.destination_configuration.url}{url or ''}"


def build_auth_headers(destination: Destination) -> dict[str, str]:
    if not destination.auth_tokens or not destination.auth_tokens[0].usable:
        return {}
    return {"Authorization": destination.auth_tokens[0].as_header()}


def has_payload(payload: Any) -> bool:
    """`None`, `False`, `0`, NaN y `""` no cuentan como cuerpo; `{}` y `[]` sí."""

    if payload is None or isinstance(payload, bool):
        return bool(payload)
    if isinstance(payload, (int, float)):
        return payload == payload and payload != 0
    if isinstance(payload, str):
        return payload != ""
    return True


def encode_payload(payload: Any) -> bytes:
    try:
        return json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise DestinationCallError.validation(f"Payload is not JSON serializable: {exc}") from exc


async def call_destination_endpoint(
    destination: Destination,
    http_method: HttpMethod,
    *,
    url: str | None = None,
    payload: Any | None = None,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Ejecuta la petición de negocio y devuelve el cuerpo crudo."""

    target = build_target_url(destination, url)
    headers = build_auth_headers(destination)
    kwargs: dict[str, Any] = {}
    if has_payload(payload) and http_method.sends_payload:
        headers["Content-Type"] = "application/json"
        kwargs["content"] = encode_payload(payload)

    response = await send_request(
        http_method.value,
        target,
        settings=settings,
        transport=transport,
        headers=headers,
        **kwargs,
    )

    logger.info(
        "Destination call finished",
        extra={"method": http_method.value, "url": target, "status_code": response.status_code},
    )
    return response.text
