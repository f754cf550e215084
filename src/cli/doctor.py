"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.service_bindings import VCAP_SERVICES_ENV, VcapServicesBindingProvider
from adapters.token_client import fetch_access_token
from cli.settings import load_settings
from cli.ui_components import build_binding_table
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import DestinationCallError
from core.domain.models import ServiceCredentials

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_token(credentials: ServiceCredentials, settings: AppSettings) -> tuple[bool, str]:
    try:
        await fetch_access_token(credentials, settings=settings)
        return True, "Token acquired"
    except DestinationCallError as exc:
        return False, str(exc)


@app.command()
def run(
    instance: str | None = typer.Option(
        None,
        "--instance",
        "-i",
        help="Destination service instance to resolve and authenticate against.",
    ),
    vcap_file: Path | None = typer.Option(None, "--vcap-file", help="VCAP services JSON file."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings(vcap_file=vcap_file)

    table = Table(title="destination-caller Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if os.environ.get(VCAP_SERVICES_ENV):
        table.add_row("Bindings source", "OK", f"{VCAP_SERVICES_ENV} env var")
    elif settings.vcap_file is not None:
        status = "OK" if settings.vcap_file.exists() else "FAIL"
        table.add_row("Bindings source", status, str(settings.vcap_file))
    else:
        table.add_row("Bindings source", "FAIL", f"Set {VCAP_SERVICES_ENV} or --vcap-file")

    timeout = settings.http_timeout_seconds
    table.add_row("HTTP timeout", "OK" if timeout else "OPTIONAL", f"{timeout}s" if timeout else "none (requests never expire)")

    credentials: ServiceCredentials | None = None
    if instance:
        try:
            credentials = VcapServicesBindingProvider.from_settings(settings).get_credentials(instance)
            table.add_row("Binding", "OK", instance)
        except DestinationCallError as exc:
            table.add_row("Binding", "FAIL", exc.message)

    if credentials is not None:
        ok_token, detail_token = asyncio.run(_check_token(credentials, settings))
        table.add_row("OAuth token", "OK" if ok_token else "FAIL", detail_token)

    _console.print(table)
    if credentials is not None and instance:
        _console.print(build_binding_table(instance, credentials))


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    vcap_file = typer.prompt("VCAP services file", default="", show_default=False).strip()
    timeout = typer.prompt("HTTP timeout in seconds (empty for none)", default="", show_default=False).strip()

    if timeout:
        try:
            if float(timeout) <= 0:
                raise ValueError(timeout)
        except ValueError:
            raise typer.BadParameter("timeout must be a positive number") from None

    values: dict[str, str] = {}
    if vcap_file:
        values["DESTINATION_CALLER_VCAP_FILE"] = vcap_file
    if timeout:
        values["DESTINATION_CALLER_HTTP_TIMEOUT_SECONDS"] = timeout

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
