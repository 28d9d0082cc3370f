"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.versions_api import VersionsApiStorage
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.environment import Environment
from core.errors import StorageError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_fetch(settings: AppSettings, environment: Environment) -> tuple[bool, str]:
    try:
        config = VersionsApiStorage(settings, environment).fetch()
    except StorageError as exc:
        return False, str(exc)
    return True, f"{len(config.sdk_versions)} SDK versions"


@app.command()
def run(
    production: bool = typer.Option(False, "--production", help="Also check the production host."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="SDK Versions Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.session_secret:
        table.add_row("Session secret", "OK", "Sent as Expo-Session header")
    else:
        table.add_row("Session secret", "MISSING", "Reads may work; updates will be rejected")
    table.add_row("User config", "OK", str(get_user_env_file()))
    table.add_row("Default environment", "OK", settings.default_environment.label())

    environments = [settings.default_environment]
    if production and Environment.PRODUCTION not in environments:
        environments.append(Environment.PRODUCTION)

    all_ok = True
    for environment in environments:
        ok, detail = _check_fetch(settings, environment)
        all_ok = all_ok and ok
        table.add_row(f"Fetch {settings.host_for(environment)}", "OK" if ok else "FAIL", detail)

    _console.print(table)

    if not settings.session_secret:
        _console.print("\n[yellow]Note:[/yellow] run `sdk-versions doctor setup-auth` to store a session secret.")
    if not all_ok:
        raise typer.Exit(code=1)


@app.command(name="setup-auth")
def setup_auth() -> None:
    """Interactive auth setup (stores the session secret in the user config .env)."""

    secret = typer.prompt("Session secret", hide_input=True, confirmation_prompt=False).strip()
    if not secret:
        raise typer.BadParameter("session secret is required")

    env_path = write_user_env_vars({"SDK_VERSIONS_SESSION_SECRET": secret})
    _console.print(f"[green]Saved session secret to:[/green] {env_path}")
