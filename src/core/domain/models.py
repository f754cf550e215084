"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los JSON del servicio de destinos usan camelCase; los alias permiten
  parsearlos tal cual y exponer nombres pythonicos.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class HttpMethod(str, Enum):
    """Métodos HTTP admitidos en una llamada a destino."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def allowed(cls) -> list[str]:
        return [m.value for m in cls]

    @property
    def sends_payload(self) -> bool:
        """Solo POST, PUT y PATCH adjuntan cuerpo."""

        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class CallOptions(BaseModel):
    """Parámetros de una llamada a destino.

    Por qué sin validadores:
    - Las invariantes (método conocido, nombres no vacíos) las comprueba el
      punto de entrada, que las reporta como `DestinationCallError`.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str | None = Field(
        default=None,
        description="Path absoluto dentro del destino (con '/' inicial), p.ej. /api/v1/json.",
    )
    destination_instance: str | None = Field(
        default=None,
        alias="destinationInstance",
        description="Nombre de la instancia del servicio de destinos.",
    )
    destination_name: str | None = Field(
        default=None,
        alias="destinationName",
        description="Nombre del destino a usar.",
    )
    http_method: str | None = Field(
        default=None,
        alias="httpMethod",
        description="Método HTTP a usar contra el destino.",
    )
    payload: Any | None = Field(
        default=None,
        description="Cuerpo JSON para POST, PUT o PATCH.",
    )


class ServiceCredentials(BaseModel):
    """Credenciales de un binding del servicio de destinos.

    - `url`: base del endpoint OAuth (`/oauth/token`).
    - `uri`: base de la API de configuración de destinos.
    """

    model_config = ConfigDict(extra="ignore")

    url: str = Field(..., min_length=1, description="Base URL del servidor OAuth.")
    clientid: str = Field(..., min_length=1, description="Client ID del binding.")
    clientsecret: str = Field(..., min_length=1, description="Client secret del binding.")
    uri: str = Field(..., min_length=1, description="Base URL del servicio de destinos.")


class DestinationConfiguration(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: str = Field(
        ...,
        alias="URL",
        description="URL base del sistema destino.",
    )
    name: str | None = Field(
        default=None,
        alias="Name",
        description="Nombre del destino (si el servicio lo devuelve).",
    )


class AuthToken(BaseModel):
    """Token calculado por el servicio de destinos.

    Las entradas de error (p.ej. sin `value`) se aceptan tal cual; solo
    generan header si traen esquema y valor.
    """

    model_config = ConfigDict(extra="allow")

    type: str | None = Field(default=None, description="Esquema del token (p.ej. 'Bearer').")
    value: str | None = Field(default=None, description="Valor del token.")

    @property
    def usable(self) -> bool:
        return bool(self.type) and bool(self.value)

    def as_header(self) -> str:
        return f"{self.type} {self.value}"


class Destination(BaseModel):
    """Destino resuelto por el servicio de configuración de destinos."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    destination_configuration: DestinationConfiguration = Field(
        ...,
        alias="destinationConfiguration",
        description="Configuración del destino (URL y propiedades).",
    )
    auth_tokens: list[AuthToken] = Field(
        default_factory=list,
        alias="authTokens",
        description="Tokens calculados por el servicio; el primero autoriza la llamada.",
    )

    @field_validator("auth_tokens", mode="before")
    @classmethod
    def _null_tokens_as_empty(cls, value: Any) -> Any:
        # El servicio puede devolver `"authTokens": null`.
        return [] if value is None else value
