"""CLI principal (Typer).

Comandos:
- `unwrap`: aplica el unwrap a una respuesta guardada y muestra el resultado.
- `shape`: muestra la variante detectada (fetch/object/merged/unknown).
- `format-errors`: formatea una lista de userErrors como `field: message (code)`.
- `config`: lectura/escritura de la configuración de usuario.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import dump_result_json, export_result_json
from adapters.response_loader import ResponseLoadError, load_response
from cli.config_commands import app as config_app
from cli.config_commands import describe_validation_error
from cli.ui_components import build_error_panel, build_user_errors_table
from core.config import AppSettings
from core.domain.errors import UnwrapError
from core.domain.formatting import format_user_error, user_error_record
from core.services.shape_detector import classify_response
from core.services.unwrap import unwrap

logger = logging.getLogger(__name__)

app = typer.Typer(
    no_args_is_help=True,
    help="Unwrap GraphQL responses into data, or a readable failure.",
)
app.add_typer(config_app, name="config")

_console = Console()
_err_console = Console(stderr=True)

_RESPONSE_ARG = typer.Argument(..., help="JSON response file, or '-' for stdin.")


class LogLevel(str, Enum):
    """Niveles aceptados por `--log-level`."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _load(path: str) -> Any:
    try:
        return load_response(path)
    except ResponseLoadError as exc:
        raise typer.BadParameter(str(exc), param_hint="RESPONSE") from exc


@app.callback()
def main(
    ctx: typer.Context,
    log_level: LogLevel | None = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Logging level. Defaults to SHOPIFY_UNWRAP_LOG_LEVEL.",
    ),
) -> None:
    try:
        settings_level = AppSettings().log_level
    except ValidationError as exc:
        # `config` debe seguir funcionando para poder corregir el .env.
        if ctx.invoked_subcommand != "config":
            raise typer.BadParameter(
                f"Invalid settings ({describe_validation_error(exc)}). Fix them with `config set`."
            ) from exc
        settings_level = LogLevel.WARNING.value
    configure_logging(log_level.value if log_level else settings_level)


@app.command(name="unwrap")
def unwrap_command(
    response: str = _RESPONSE_ARG,
    operation: str | None = typer.Option(None, "--operation", "-o", help="Operation key to narrow to."),
    resource: str | None = typer.Option(None, "--resource", "-r", help="Resource key inside the operation."),
    output: Path | None = typer.Option(None, "--output", help="Write the result to a JSON file."),
) -> None:
    """Unwrap a saved GraphQL response."""

    if resource and not operation:
        raise typer.BadParameter("--resource requires --operation")

    settings = AppSettings()
    payload = _load(response)
    logger.debug("Detected response shape: %s", classify_response(payload).value)

    try:
        result = asyncio.run(unwrap(payload, operation, resource))
    except UnwrapError as exc:
        logger.info("Unwrap failed with kind=%s", exc.kind.value)
        _err_console.print(build_error_panel(exc, show_raw=settings.show_raw_errors))
        raise typer.Exit(code=settings.error_exit_code) from exc

    if output:
        path = export_result_json(result=result, output_path=output, settings=settings)
        _err_console.print(f"[green]Saved result to:[/green] {path}")
        return
    typer.echo(dump_result_json(result, settings))


@app.command()
def shape(response: str = _RESPONSE_ARG) -> None:
    """Print the detected response shape."""

    typer.echo(classify_response(_load(response)).value)


@app.command(name="format-errors")
def format_errors(
    response: str = _RESPONSE_ARG,
    table: bool = typer.Option(False, "--table", help="Render as a table instead of plain lines."),
) -> None:
    """Format a JSON list of userErrors as `field: message (code)` lines."""

    raw = _load(response)
    user_errors = [raw] if isinstance(raw, Mapping) else raw
    if not isinstance(user_errors, list):
        raise typer.BadParameter("Expected a JSON list of user errors.", param_hint="RESPONSE")

    if table:
        _console.print(build_user_errors_table(user_error_record(item) for item in user_errors))
        return
    for item in user_errors:
        typer.echo(format_user_error(item))


def run() -> None:
    app()
