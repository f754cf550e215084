"""Orquestación de una llamada a destino.

Secuencia (sin paralelismo, cada paso depende del anterior):
1. token OAuth2 del servicio de destinos
2. configuración del destino
3. petición al sistema destino

El proveedor de bindings se inyecta y se consulta en los pasos 1 y 2 por
separado. No hay estado compartido entre invocaciones.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.destination_caller import call_destination_endpoint
from adapters.destination_resolver import fetch_destination
from adapters.token_client import fetch_access_token
from core.config import AppSettings
from core.domain.errors import DestinationCallError
from core.domain.models import CallOptions, HttpMethod
from core.interfaces.bindings import ServiceBindingProvider

logger = logging.getLogger(__name__)


def validate_call_options(options: CallOptions | Mapping[str, Any]) -> tuple[CallOptions, HttpMethod]:
    """Comprueba las invariantes de `CallOptions` antes de tocar la red.

    Orden de comprobación: método, instancia, nombre de destino.
    """

    if not isinstance(options, CallOptions):
        try:
            options = CallOptions.model_validate(options)
        except ValidationError as exc:
            raise DestinationCallError.validation(f"Invalid call options: {exc}") from exc

    if options.http_method not in HttpMethod.allowed():
        raise DestinationCallError.validation(
            f"Unknown HTTP method: {options.http_method}. Allowed methods: {json.dumps(HttpMethod.allowed())}"
        )
    if not options.destination_instance:
        raise DestinationCallError.validation("Invalid destination service instance")
    if not options.destination_name:
        raise DestinationCallError.validation("Invalid destination name")

    return options, HttpMethod(options.http_method)


async def call_destination(
    options: CallOptions | Mapping[str, Any],
    *,
    bindings: ServiceBindingProvider,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Ejecuta la cadena token → destino → llamada y devuelve el cuerpo crudo."""

    options, method = validate_call_options(options)
    settings = settings or AppSettings()
    assert options.destination_instance is not None
    assert options.destination_name is not None

    token = await fetch_access_token(
        bindings.get_credentials(options.destination_instance),
        settings=settings,
        transport=transport,
    )
    destination = await fetch_destination(
        token,
        bindings.get_credentials(options.destination_instance),
        options.destination_name,
        settings=settings,
        transport=transport,
    )
    logger.debug(
        "Destination resolved",
        extra={"destination": options.destination_name, "url": destination.destination_configuration.url},
    )
    return await call_destination_endpoint(
        destination,
        method,
        url=options.url,
        payload=options.payload,
        settings=settings,
        transport=transport,
    )
