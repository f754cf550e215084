"""Proveedores de service bindings (Cloud Foundry).

Formatos soportados:
- `VCAP_SERVICES`: {"<label>": [{"name": "...", "credentials": {...}}, ...]}
- Archivo vcap: el mismo JSON, o envuelto como {"services": {...}}.

La búsqueda es por nombre de instancia en todas las etiquetas.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.config import AppSettings
from core.domain.errors import DestinationCallError
from core.domain.models import ServiceCredentials

logger = logging.getLogger(__name__)

VCAP_SERVICES_ENV = "VCAP_SERVICES"


def load_vcap_file(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"VCAP file {path} must contain a JSON object")
    services = data.get("services", data)
    if not isinstance(services, dict):
        raise ValueError(f"VCAP file {path} has an invalid 'services' entry")
    return services


def find_service(services: Mapping[str, Any], instance_name: str) -> dict[str, Any] | None:
    """Busca un binding por `name` recorriendo todas las etiquetas."""

    for label, instances in services.items():
        if not isinstance(instances, list):
            continue
        for instance in instances:
            if isinstance(instance, dict) and instance.get("name") == instance_name:
                logger.debug("Service binding found", extra={"instance": instance_name, "label": label})
                return instance
    return None


def _credentials_from(instance: Mapping[str, Any] | None, instance_name: str) -> ServiceCredentials:
    if instance is None:
        raise DestinationCallError.validation(f"No service binding found for instance '{instance_name}'")
    try:
        return ServiceCredentials.model_validate(instance.get("credentials") or {})
    except ValidationError as exc:
        raise DestinationCallError.validation(
            f"Service binding '{instance_name}' has incomplete credentials"
        ) from exc


class VcapServicesBindingProvider:
    """Resuelve credenciales desde `VCAP_SERVICES` o desde un archivo vcap.

    Por qué relee en cada llamada:
    - No se guarda estado entre invocaciones; cada paso resuelve su binding.
    """

    def __init__(
        self,
        *,
        vcap_file: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._vcap_file = vcap_file
        self._environ = environ if environ is not None else os.environ

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "VcapServicesBindingProvider":
        settings = settings or AppSettings()
        return cls(vcap_file=settings.vcap_file)

    def _load_services(self) -> dict[str, Any]:
        raw = self._environ.get(VCAP_SERVICES_ENV)
        if raw:
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise DestinationCallError.validation(f"{VCAP_SERVICES_ENV} is not valid JSON") from exc
            if isinstance(data, dict):
                return data
            raise DestinationCallError.validation(f"{VCAP_SERVICES_ENV} must contain a JSON object")
        if self._vcap_file is not None:
            try:
                return load_vcap_file(self._vcap_file)
            except (OSError, ValueError) as exc:
                raise DestinationCallError.validation(f"Cannot read VCAP file {self._vcap_file}: {exc}") from exc
        return {}

    def get_credentials(self, instance_name: str) -> ServiceCredentials:
        return _credentials_from(find_service(self._load_services(), instance_name), instance_name)


class StaticBindingProvider:
    """Credenciales fijas en memoria (tests, scripts, configuración explícita)."""

    def __init__(self, bindings: Mapping[str, ServiceCredentials | Mapping[str, Any]]) -> None:
        self._bindings = dict(bindings)

    def get_credentials(self, instance_name: str) -> ServiceCredentials:
        found = self._bindings.get(instance_name)
        if isinstance(found, ServiceCredentials):
            return found
        return _credentials_from(None if found is None else {"credentials": found}, instance_name)
