"""Contrato de interacción con el operador."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class InteractionGate(Protocol):
    """Every blocking question the editor asks the operator.

    Each call is a single request/response round-trip; the session never has
    more than one outstanding question.
    """

    def select_from_list(self, items: Sequence[str], default: str | None = None) -> str:
        """Let the operator pick one of `items`."""

        ...

    def confirm(self, message: str, default: bool = True) -> bool:
        """Yes/no question; `False` means the operator declined."""

        ...

    def free_text(self, message: str) -> str:
        ...
