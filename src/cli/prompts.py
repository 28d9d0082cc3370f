"""Prompts interactivos (Rich) que implementan `InteractionGate`."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from core.interfaces.gate import InteractionGate


class RichInteractionGate(InteractionGate):
    """Asks the operator through `rich.prompt` on the given console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def select_from_list(self, items: Sequence[str], default: str | None = None) -> str:
        for index, item in enumerate(items, start=1):
            marker = " [dim](default)[/dim]" if item == default else ""
            self._console.print(f"  [cyan]{index:>2}[/cyan]  {item}{marker}")

        numbers = [str(i) for i in range(1, len(items) + 1)]
        kwargs = {"default": default} if default is not None else {}
        answer = Prompt.ask(
            "Choose SDK version (number or value)",
            console=self._console,
            choices=[*numbers, *items],
            show_choices=False,
            **kwargs,
        )
        if answer in numbers and answer not in items:
            return items[int(answer) - 1]
        return answer

    def confirm(self, message: str, default: bool = True) -> bool:
        return Confirm.ask(message, console=self._console, default=default)

    def free_text(self, message: str) -> str:
        return Prompt.ask(message, console=self._console).strip()


class AutoApproveGate(InteractionGate):
    """Non-interactive gate for `--yes`: every question takes its default.

    A list choice without a default cannot be answered and a free-text
    question has no default at all; both delegate to the wrapped gate.
    """

    def __init__(self, fallback: InteractionGate, console: Console | None = None) -> None:
        self._fallback = fallback
        self._console = console

    def _note(self, message: str) -> None:
        if self._console is not None:
            self._console.print(f"[dim]{message}[/dim]")

    def select_from_list(self, items: Sequence[str], default: str | None = None) -> str:
        if default is None:
            return self._fallback.select_from_list(items, default)
        self._note(f"Auto-selected {default}")
        return default

    def confirm(self, message: str, default: bool = True) -> bool:
        self._note(f"{message} -> {'yes' if default else 'no'} (--yes)")
        return default

    def free_text(self, message: str) -> str:
        return self._fallback.free_text(message)
