"""Errores del dominio.

Todas las excepciones del editor heredan de `EditorError` para que la sesión
pueda convertirlas en un resultado terminal legible sin capturar nada ajeno.
"""

from __future__ import annotations


class EditorError(Exception):
    """Base class for every error raised by the editor core."""


class ValidationError(EditorError):
    """Input rejected before any remote call is made."""


class InvalidVersionError(ValidationError):
    def __init__(self, version: str) -> None:
        super().__init__(f"Provided SDK version {version!r} is invalid.")
        self.version = version


class MalformedRequestError(ValidationError):
    """An edit request that cannot be applied as given."""


class SessionCanceled(EditorError):
    """The operator declined a confirmation. Not a failure."""


class StorageError(EditorError):
    """Fetching or persisting the remote document failed."""
