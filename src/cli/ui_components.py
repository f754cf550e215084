"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en `call` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import DestinationCallError
from core.domain.models import ServiceCredentials


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("destination-caller", style="bold cyan")
    subtitle = Text("Token • Destino • Llamada", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def mask_secret(value: str, *, visible: int = 4) -> str:
    if len(value) <= visible:
        return "***"
    return value[:visible] + "***"


def build_binding_table(instance_name: str, credentials: ServiceCredentials) -> Table:
    """Tabla con las credenciales resueltas (el secreto va enmascarado)."""

    table = Table(title=f"Binding: {instance_name}")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("url", credentials.url)
    table.add_row("uri", credentials.uri)
    table.add_row("clientid", credentials.clientid)
    table.add_row("clientsecret", mask_secret(credentials.clientsecret))
    return table


def build_error_panel(error: DestinationCallError) -> Panel:
    body = Text()
    body.append(error.message + "\n")
    body.append(f"\nTipo: {error.kind.value}", style="dim")
    if error.status_code is not None:
        body.append(f"\nStatus: {error.status_code}", style="dim")
    if error.__cause__ is not None:
        body.append(f"\nCausa: {type(error.__cause__).__name__}", style="dim")
    return Panel(body, title=Text("Error", style="bold red"), border_style="red")
