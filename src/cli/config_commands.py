"""Config commands (show/set user settings)."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Show or persist user configuration.")

_console = Console()


def describe_validation_error(exc: ValidationError) -> str:
    """`field: reason` por cada error, en una sola línea."""

    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "settings"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


@app.command()
def show() -> None:
    """Show the effective settings and where the user .env lives."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        raise typer.BadParameter(
            f"Invalid settings ({describe_validation_error(exc)}). Fix them with `config set`."
        ) from exc

    table = Table(title="shopify-unwrap settings")
    table.add_column("Setting", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))

    _console.print(table)
    _console.print(f"[dim]User config:[/dim] {get_user_env_file()}")


@app.command(name="set")
def set_values(
    assignments: list[str] = typer.Argument(..., help="KEY=VALUE pairs, e.g. json_indent=4."),
) -> None:
    """Persist settings into the user config .env."""

    known = set(AppSettings.model_fields)
    values: dict[str, str] = {}
    for assignment in assignments:
        if "=" not in assignment:
            raise typer.BadParameter(f"Expected KEY=VALUE, got {assignment!r}")
        key, value = assignment.split("=", 1)
        name = key.strip().lower()
        if name not in known:
            raise typer.BadParameter(f"Unknown setting {key!r}. Known: {', '.join(sorted(known))}")
        values[name] = value.strip()

    # Los valores nuevos tienen prioridad sobre env/.env: se valida la config resultante.
    try:
        AppSettings(**values)
    except ValidationError as exc:
        raise typer.BadParameter(describe_validation_error(exc)) from exc

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
