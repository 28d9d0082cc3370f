"""Resolution of the SDK version a session operates on."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import semver

from core.errors import InvalidVersionError, SessionCanceled
from core.interfaces.gate import InteractionGate

logger = logging.getLogger(__name__)


@dataclass
class VersionSelection:
    """Resolved version plus the entry the edits start from."""

    version: str
    is_new: bool
    entry: Any


def is_valid_version(version: str | None) -> bool:
    return bool(version) and semver.Version.is_valid(version)


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Newest first. Keys that are not semantic versions go last, as given."""

    versions = list(versions)
    valid = [v for v in versions if is_valid_version(v)]
    invalid = [v for v in versions if not is_valid_version(v)]
    if invalid:
        logger.warning("Ignoring ordering of non-semver keys: %s", ", ".join(invalid))
    return sorted(valid, key=semver.Version.parse, reverse=True) + invalid


def ensure_valid_version(version: str) -> str:
    if not is_valid_version(version):
        raise InvalidVersionError(version)
    return version


class VersionSelector:
    """Picks the working version and its starting entry.

    When no version is requested the operator chooses from the known ones,
    newest first. A valid but unknown version can be initialized after an
    explicit confirmation.
    """

    def __init__(self, gate: InteractionGate) -> None:
        self._gate = gate

    def resolve(
        self,
        known_versions: Sequence[str],
        requested: str | None,
        entries: dict[str, Any] | None = None,
    ) -> VersionSelection:
        ordered = sort_versions(known_versions)

        version = requested
        if not version:
            if not ordered:
                version = self._gate.free_text("No SDK versions found. Which version do you want to initialize?")
            else:
                version = self._gate.select_from_list(ordered, default=ordered[0])
        version = version.strip()

        ensure_valid_version(version)

        if version in known_versions:
            entry = (entries or {}).get(version)
            return VersionSelection(version=version, is_new=False, entry=_copy_entry(entry))

        add_new = self._gate.confirm(
            f"Configuration for SDK {version} doesn't exist. Do you want to initialize it?",
            default=True,
        )
        if not add_new:
            raise SessionCanceled(f"Initialization of SDK {version} declined.")
        return VersionSelection(version=version, is_new=True, entry={})


def _copy_entry(entry: Any) -> Any:
    return copy.deepcopy(entry) if isinstance(entry, dict) else {}
