"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from rich.console import Group
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from core.domain.errors import UnwrapError
from core.domain.models import FormattedUserError


def build_user_errors_table(records: Iterable[FormattedUserError], *, title: str = "User Errors") -> Table:
    """Tabla con una fila por error de usuario."""

    table = Table(title=title)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Message", style="white")
    table.add_column("Code", style="magenta")
    for record in records:
        table.add_row(record.field or "-", record.message, record.code or "-")
    return table


def build_error_panel(error: UnwrapError, *, show_raw: bool = False) -> Panel:
    """Panel para presentar un `UnwrapError`."""

    title = Text(f"Unwrap failed: {error.kind.value}", style="bold red")
    body: list[Any] = [Text(error.message)]

    if error.operation:
        body.append(Text(f"Operation: {error.operation}", style="dim"))
    if error.resource:
        body.append(Text(f"Resource: {error.resource}", style="dim"))

    if error.is_user_error:
        body.append(build_user_errors_table(error.formatted_user_error_records))
    elif error.errors and not show_raw:
        # Para errores de transporte, basta con el conteo si no se piden crudos.
        body.append(Text(f"{len(error.errors)} GraphQL error(s) returned.", style="dim"))

    if show_raw and error.errors:
        body.append(Text("\nRaw errors:", style="bold"))
        body.append(Pretty(error.errors))

    return Panel(Group(*body), title=title, border_style="red")
