"""Contratos de resolución de service bindings.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los pasos de la llamada reciben el proveedor inyectado en vez de leer el
  entorno por su cuenta, así se testean con credenciales fijas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ServiceCredentials


@runtime_checkable
class ServiceBindingProvider(Protocol):
    """Contrato mínimo para resolver credenciales de una instancia.

    Reglas de diseño:
    - `get_credentials` es síncrono: lee metadata local (env/archivo), no red.
    - Si la instancia no existe lanza `DestinationCallError` de validación.
    """

    def get_credentials(self, instance_name: str) -> ServiceCredentials:
        """Devuelve las credenciales del binding llamado `instance_name`."""

        ...
