"""Exportación del cuerpo de respuesta a disco.

Por qué aquí:
- La CLI puede volcar la respuesta del destino a un archivo para pipelines.
- Si el cuerpo es JSON y se pide `pretty`, se reescribe con formato estable.
"""

from __future__ import annotations

import json
from pathlib import Path


def format_body(body: str, *, pretty: bool = False) -> str:
    if not pretty:
        return body
    try:
        data = json.loads(body)
    except ValueError:
        return body
    return json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_response_body(*, body: str, output_path: Path, pretty: bool = False) -> Path:
    """Escribe el cuerpo en UTF-8 (formateado si es JSON y `pretty`)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_body(body, pretty=pretty), encoding="utf-8")
    return output_path
