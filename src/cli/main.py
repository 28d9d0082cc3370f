"""CLI principal (Typer).

Comandos:
- `update`: edita la configuración de una versión del SDK (diff + confirmación).
- `list` / `show`: inspección de solo lectura del documento remoto.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.versions_api import VersionsApiStorage
from cli import doctor
from cli.prompts import AutoApproveGate, RichInteractionGate
from cli.ui_components import (
    build_diff_panel,
    build_entry_view,
    build_versions_table,
    print_banner,
    print_result,
)
from core.config import AppSettings
from core.domain.environment import Environment
from core.domain.models import EditRequest
from core.errors import InvalidVersionError, StorageError
from core.interfaces.gate import InteractionGate
from core.interfaces.storage import VersionsStorage
from core.services.edit_session import EditSession, SessionHooks
from core.services.version_selector import ensure_valid_version

app = typer.Typer(
    no_args_is_help=True,
    help="Inspect and update the SDK versions configuration served by the versions API.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(console=_console, show_time=False, show_path=False, markup=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_storage(settings: AppSettings, environment: Environment) -> VersionsStorage:
    return VersionsApiStorage(settings, environment)


def build_gate(assume_yes: bool) -> InteractionGate:
    gate: InteractionGate = RichInteractionGate(_console)
    if assume_yes:
        gate = AutoApproveGate(gate, console=_console)
    return gate


def parse_value(raw: str) -> Any:
    """`--value` accepts JSON (`true`, `3`, `{"a": 1}`); anything else is a string."""

    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _resolve_environment(settings: AppSettings, production: bool) -> Environment:
    return Environment.PRODUCTION if production else settings.default_environment


@app.command("update")
def update(
    sdk_version: Optional[str] = typer.Option(
        None, "--sdk-version", "-s", help="SDK version to update. Can be chosen from the list if not provided."
    ),
    deprecated: Optional[bool] = typer.Option(
        None, "--deprecated/--no-deprecated", "-d", help="Sets chosen SDK version as deprecated (or not)."
    ),
    release_note_url: Optional[str] = typer.Option(
        None, "--release-note-url", "-r", help="URL pointing to the release blog post."
    ),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="A custom, dotted key that you want to set in the configuration."
    ),
    value: Optional[str] = typer.Option(
        None, "--value", "-v", help="Value for the custom key (parsed as JSON when possible)."
    ),
    delete: bool = typer.Option(False, "--delete", help="Deletes config entry under key specified by `--key` flag."),
    production: bool = typer.Option(False, "--production", help="Target the production host instead of staging."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept every confirmation with its default answer."),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging."),
) -> None:
    """Updates SDK configuration under the versions endpoint."""

    configure_logging(verbose)
    settings = AppSettings()
    environment = _resolve_environment(settings, production)

    request = EditRequest(
        sdk_version=sdk_version,
        deprecated=deprecated,
        release_note_url=release_note_url,
        key=key,
        value=parse_value(value) if value is not None else None,
        has_value=value is not None,
        delete=delete,
    )

    print_banner(_console, host=settings.host_for(environment))

    hooks = SessionHooks(
        info=lambda msg: _console.print(msg),
        warning=lambda msg: _console.print(f"[yellow]{msg}[/yellow]"),
        preview=lambda version, delta, before, is_new: _console.print(build_diff_panel(version, delta, before, is_new=is_new)),
    )
    session = EditSession(
        build_storage(settings, environment),
        build_gate(yes),
        hooks=hooks,
        environment_label=environment.label(),
        inspect_url=settings.versions_url_for(environment),
    )
    result = session.run(request)
    print_result(_console, result)

    if not result.outcome.ok:
        raise typer.Exit(code=result.outcome.exit_code)


app.command("update-versions", hidden=True)(update)


@app.command("list")
def list_versions(
    production: bool = typer.Option(False, "--production", help="Read from the production host."),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging."),
) -> None:
    """Lists every configured SDK version, newest first."""

    configure_logging(verbose)
    settings = AppSettings()
    environment = _resolve_environment(settings, production)
    try:
        config = build_storage(settings, environment).fetch()
    except StorageError as exc:
        _console.print(f"[red]Failed to fetch versions config: {exc}[/red]")
        raise typer.Exit(code=1)
    _console.print(build_versions_table(config))


@app.command("show")
def show(
    sdk_version: str = typer.Argument(..., help="SDK version to print."),
    production: bool = typer.Option(False, "--production", help="Read from the production host."),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging."),
) -> None:
    """Prints the configuration of one SDK version as JSON."""

    configure_logging(verbose)
    try:
        ensure_valid_version(sdk_version)
    except InvalidVersionError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    settings = AppSettings()
    environment = _resolve_environment(settings, production)
    try:
        config = build_storage(settings, environment).fetch()
    except StorageError as exc:
        _console.print(f"[red]Failed to fetch versions config: {exc}[/red]")
        raise typer.Exit(code=1)

    entry = config.entry(sdk_version)
    if entry is None:
        _console.print(f"[yellow]Configuration for SDK {sdk_version} doesn't exist.[/yellow]")
        return
    _console.print(build_entry_view(sdk_version, entry))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
