"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación en el borde del documento remoto sin imponer un esquema a las
  entradas: cada `VersionEntry` es un valor JSON arbitrario.
- Serialización estable (`by_alias`) para devolver el documento tal cual llegó.

Nota:
- Estos modelos describen *qué* se edita, no *cómo* se obtiene ni se guarda.
"""

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.errors import MalformedRequestError

# Conventional entry keys written by the dedicated CLI flags.
DEPRECATED_KEY = "isDeprecated"
RELEASE_NOTE_URL_KEY = "releaseNoteUrl"


class VersionedConfig(BaseModel):
    """The full remote document.

    Only `sdkVersions` is interpreted; every other top-level field is kept as
    an extra and written back untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    sdk_versions: dict[str, Any] = Field(
        default_factory=dict,
        alias="sdkVersions",
        description="SDK version string -> arbitrary JSON entry.",
    )

    def versions(self) -> list[str]:
        return list(self.sdk_versions.keys())

    def entry(self, version: str) -> Any:
        """Deep copy of one entry, or `None` when the version is unknown."""

        if version not in self.sdk_versions:
            return None
        return copy.deepcopy(self.sdk_versions[version])

    def with_entry(self, version: str, entry: Any) -> "VersionedConfig":
        """Structural copy of the document with one entry replaced (or added)."""

        payload = self.to_payload()
        payload["sdkVersions"][version] = copy.deepcopy(entry)
        return VersionedConfig.model_validate(payload)

    def to_payload(self) -> dict[str, Any]:
        return copy.deepcopy(self.model_dump(mode="json", by_alias=True))


class EditOperation(BaseModel):
    """A single pending mutation: set `value` at `path`, or delete `path`."""

    path: str = Field(..., min_length=1)
    value: Any = None
    delete: bool = False


class EditRequest(BaseModel):
    """What the operator asked for in one invocation.

    `operations()` yields the edits in the fixed application order:
    deprecated flag, then release-note URL, then the custom key.
    """

    sdk_version: str | None = Field(
        default=None,
        description="Version to edit; chosen interactively when absent.",
    )
    deprecated: bool | None = Field(
        default=None,
        description="New value of `isDeprecated`, if requested.",
    )
    release_note_url: str | None = Field(
        default=None,
        description="New value of `releaseNoteUrl`, if requested.",
    )
    key: str | None = Field(
        default=None,
        description="Custom dotted key to set or delete.",
    )
    value: Any = Field(
        default=None,
        description="Value for `key`; only meaningful when `has_value` is set.",
    )
    has_value: bool = Field(
        default=False,
        description="Distinguishes an explicit `null` value from no value at all.",
    )
    delete: bool = Field(
        default=False,
        description="Delete `key` instead of setting it.",
    )

    def validate_request(self) -> None:
        if self.key is not None and not self.key.strip():
            raise MalformedRequestError("`--key` flag requires a non-empty dotted path.")
        if self.key and not self.has_value and not self.delete:
            raise MalformedRequestError("`--key` flag requires `--value` or `--delete` flag.")
        if self.key and self.has_value and self.delete:
            raise MalformedRequestError("`--value` and `--delete` cannot be used together.")
        if (self.has_value or self.delete) and not self.key:
            raise MalformedRequestError("`--value` and `--delete` flags require `--key` flag.")

    def operations(self) -> list[EditOperation]:
        ops: list[EditOperation] = []
        if self.deprecated is not None:
            ops.append(EditOperation(path=DEPRECATED_KEY, value=bool(self.deprecated)))
        if self.release_note_url is not None:
            ops.append(EditOperation(path=RELEASE_NOTE_URL_KEY, value=self.release_note_url))
        if self.key:
            if self.delete:
                ops.append(EditOperation(path=self.key, delete=True))
            else:
                ops.append(EditOperation(path=self.key, value=self.value))
        return ops
