"""Contrato del almacenamiento remoto del documento de versiones."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import VersionedConfig


@runtime_checkable
class VersionsStorage(Protocol):
    """Whole-document access to the remote versions configuration.

    Reglas de diseño:
    - `fetch` devuelve el documento completo; no hay lecturas parciales.
    - `persist` reemplaza el documento completo en una sola escritura.
    - Ambos lanzan `StorageError` ante fallos de red o respuestas inválidas.
    """

    def fetch(self) -> VersionedConfig:
        ...

    def persist(self, config: VersionedConfig) -> None:
        ...
