"""Errores del dominio.

Todas las fallas de una llamada a destino salen como `DestinationCallError`,
etiquetadas con un `ErrorKind`. La excepción original (httpx, pydantic) queda
encadenada en `__cause__`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Categorías de error de una llamada a destino."""

    VALIDATION = "validation"
    TRANSPORT = "transport"
    UPSTREAM_STATUS = "upstream-status"
    INVALID_RESPONSE = "invalid-response"


class DestinationCallError(Exception):
    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    @classmethod
    def validation(cls, message: str) -> "DestinationCallError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def transport(cls, message: str) -> "DestinationCallError":
        return cls(ErrorKind.TRANSPORT, message)

    @classmethod
    def upstream_status(cls, status_code: int, what: str) -> "DestinationCallError":
        return cls(
            ErrorKind.UPSTREAM_STATUS,
            f"Server responded with status code {status_code} when requesting {what}",
            status_code=status_code,
        )

    @classmethod
    def invalid_response(cls, message: str, *, status_code: int | None = None) -> "DestinationCallError":
        return cls(ErrorKind.INVALID_RESPONSE, message, status_code=status_code)
