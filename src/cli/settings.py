"""Carga de `AppSettings` para los comandos de la CLI."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from core.config import AppSettings

_err_console = Console(stderr=True)


def load_settings(*, vcap_file: Path | None = None) -> AppSettings:
    """Construye la configuración; una env var inválida termina con código 2."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=2) from None
    if vcap_file is not None:
        settings.vcap_file = vcap_file
    return settings
