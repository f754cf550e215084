"""CLI principal (Typer).

Comandos:
- `call`: ejecuta una llamada a destino e imprime el cuerpo de respuesta.
- `doctor`: diagnósticos de configuración (ver `cli.doctor`).
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.body_exporter import export_response_body, format_body
from adapters.service_bindings import VcapServicesBindingProvider
from cli import doctor
from cli.settings import load_settings
from cli.ui_components import build_error_panel, print_banner
from core.domain.errors import DestinationCallError, ErrorKind
from core.domain.models import CallOptions, HttpMethod
from core.services.destination_call import call_destination

app = typer.Typer(no_args_is_help=True, help="Call an HTTP endpoint through a platform destination.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=False, show_path=False)],
        force=True,
    )


def _parse_payload(raw: str | None) -> Any | None:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise typer.BadParameter("payload must be valid JSON", param_hint="--payload") from None


@app.command()
def call(
    instance: str = typer.Option(..., "--instance", "-i", help="Destination service instance name."),
    destination: str = typer.Option(..., "--destination", "-d", help="Destination name."),
    method: str = typer.Option(HttpMethod.GET.value, "--method", "-X", help="HTTP method to use on the destination."),
    url: str | None = typer.Option(None, "--url", "-u", help="Absolute path inside the destination, e.g. /api/v1/json."),
    payload: str | None = typer.Option(None, "--payload", "-p", help="JSON payload for POST, PUT or PATCH."),
    vcap_file: Path | None = typer.Option(None, "--vcap-file", help="VCAP services JSON file."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the response body to this file."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print JSON bodies."),
    banner: bool = typer.Option(False, "--banner", help="Show the banner before calling."),
) -> None:
    """Resolve the destination and perform the call."""

    settings = load_settings(vcap_file=vcap_file)
    configure_logging(settings.log_level)

    if banner:
        print_banner(_err_console)

    options = CallOptions(
        url=url,
        destination_instance=instance,
        destination_name=destination,
        http_method=method,
        payload=_parse_payload(payload),
    )
    bindings = VcapServicesBindingProvider.from_settings(settings)

    try:
        body = asyncio.run(call_destination(options, bindings=bindings, settings=settings))
    except DestinationCallError as exc:
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=2 if exc.kind is ErrorKind.VALIDATION else 1) from None

    if output is not None:
        path = export_response_body(body=body, output_path=output, pretty=pretty)
        _err_console.print(f"[green]Saved response to:[/green] {path}")
        return
    _console.out(format_body(body, pretty=pretty), end="")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
