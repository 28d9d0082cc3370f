"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.models import DEPRECATED_KEY, RELEASE_NOTE_URL_KEY, VersionedConfig
from core.services.differ import Delta, render
from core.services.edit_session import SessionOutcome, SessionResult
from core.services.version_selector import sort_versions


def print_banner(console: Console, *, host: str) -> None:
    """Imprime el banner con el host de destino.

    El host se muestra siempre: es la única pista visual de si se está
    editando staging o producción.
    """

    title = Text("SDK Versions", style="bold cyan")
    subtitle = Text(f"Editing {host}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_diff_panel(version: str, delta: Delta, before: Any, *, is_new: bool = False) -> Panel:
    """Panel con el diff de cambios a aplicar."""

    title = Text.assemble("Changes for SDK ", (version, "bold cyan"))
    return Panel(render(delta, before, is_new=is_new), title=title, border_style="yellow", title_align="left")


def build_versions_table(config: VersionedConfig) -> Table:
    """Tabla Rich con las versiones conocidas (más reciente primero)."""

    table = Table(title="SDK Versions")
    table.add_column("Version", style="cyan", no_wrap=True)
    table.add_column("Deprecated", style="white")
    table.add_column("Release notes", style="magenta")
    table.add_column("Keys", style="dim")

    for version in sort_versions(config.versions()):
        entry = config.sdk_versions.get(version)
        entry = entry if isinstance(entry, dict) else {}
        deprecated = entry.get(DEPRECATED_KEY)
        table.add_row(
            version,
            "[red]yes[/red]" if deprecated is True else "no",
            str(entry.get(RELEASE_NOTE_URL_KEY) or ""),
            str(len(entry)),
        )
    return table


def build_entry_view(version: str, entry: Any) -> Panel:
    body = Syntax(json.dumps(entry, ensure_ascii=False, indent=2), "json", word_wrap=True)
    return Panel(body, title=Text.assemble("SDK ", (version, "bold cyan")), border_style="cyan")


_OUTCOME_STYLES: dict[SessionOutcome, str] = {
    SessionOutcome.DONE: "green",
    SessionOutcome.NO_CHANGES: "yellow",
    SessionOutcome.CANCELED: "yellow",
    SessionOutcome.INVALID_VERSION: "red",
    SessionOutcome.MALFORMED_REQUEST: "red",
    SessionOutcome.FETCH_FAILED: "red",
    SessionOutcome.PERSIST_FAILED: "red",
}


def print_result(console: Console, result: SessionResult) -> None:
    style = _OUTCOME_STYLES.get(result.outcome, "white")
    console.print(Text(result.message, style=style))
