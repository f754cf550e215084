"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""

from core.domain.errors import DestinationCallError, ErrorKind
from core.domain.models import (
    AuthToken,
    CallOptions,
    Destination,
    DestinationConfiguration,
    HttpMethod,
    ServiceCredentials,
)

__all__ = [
    "AuthToken",
    "CallOptions",
    "Destination",
    "DestinationCallError",
    "DestinationConfiguration",
    "ErrorKind",
    "HttpMethod",
    "ServiceCredentials",
]
