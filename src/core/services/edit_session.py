"""Edit session orchestration: fetch, select, mutate, diff, confirm, commit.

The CLI builds an `EditRequest` and hands it to `EditSession.run`. Every error
the core can raise is converted here into a terminal `SessionResult`; nothing
escapes to the caller, and nothing is printed: progress and the diff preview
go through `SessionHooks` so the UI layer decides how to show them.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from core.domain.models import EditOperation, EditRequest, VersionedConfig
from core.errors import InvalidVersionError, SessionCanceled, StorageError, ValidationError
from core.interfaces.gate import InteractionGate
from core.interfaces.storage import VersionsStorage
from core.paths import delete_path, parse_path, set_path
from core.services.differ import Delta, diff
from core.services.version_selector import VersionSelector, ensure_valid_version

logger = logging.getLogger(__name__)


class SessionOutcome(str, Enum):
    """Terminal states of a session."""

    DONE = "done"
    NO_CHANGES = "no_changes"
    CANCELED = "canceled"
    INVALID_VERSION = "invalid_version"
    MALFORMED_REQUEST = "malformed_request"
    FETCH_FAILED = "fetch_failed"
    PERSIST_FAILED = "persist_failed"

    @property
    def exit_code(self) -> int:
        """0 for success, no-op and cancel; 1 for I/O failures; 2 for bad input."""

        if self in (SessionOutcome.FETCH_FAILED, SessionOutcome.PERSIST_FAILED):
            return 1
        if self in (SessionOutcome.INVALID_VERSION, SessionOutcome.MALFORMED_REQUEST):
            return 2
        return 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class SessionHooks:
    """Optional callbacks for UI layers."""

    info: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None
    preview: Callable[[str, Delta, Any, bool], None] | None = None


@dataclass
class SessionResult:
    """Output of one session."""

    outcome: SessionOutcome
    message: str
    version: str | None = None
    is_new: bool = False
    delta: Delta | None = None
    persisted: VersionedConfig | None = None


def apply_edits(entry: Any, operations: Iterable[EditOperation]) -> Any:
    """Apply `operations` in order to a deep copy of `entry`."""

    edited = copy.deepcopy(entry)
    for op in operations:
        if op.delete:
            delete_path(edited, op.path)
        else:
            set_path(edited, op.path, copy.deepcopy(op.value))
    return edited


class EditSession:
    """Runs the mutate, diff, confirm, commit workflow once."""

    def __init__(
        self,
        storage: VersionsStorage,
        gate: InteractionGate,
        *,
        hooks: SessionHooks | None = None,
        environment_label: str = "staging",
        inspect_url: str | None = None,
    ) -> None:
        self._storage = storage
        self._gate = gate
        self._hooks = hooks or SessionHooks()
        self._selector = VersionSelector(gate)
        self._environment_label = environment_label
        self._inspect_url = inspect_url

    def _info(self, message: str) -> None:
        logger.debug(message)
        if self._hooks.info:
            self._hooks.info(message)

    def _warning(self, message: str) -> None:
        logger.debug(message)
        if self._hooks.warning:
            self._hooks.warning(message)

    def run(self, request: EditRequest) -> SessionResult:
        # Input checks happen before any remote call.
        try:
            request.validate_request()
            if request.key:
                parse_path(request.key)
            if request.sdk_version:
                ensure_valid_version(request.sdk_version.strip())
        except InvalidVersionError as exc:
            return SessionResult(SessionOutcome.INVALID_VERSION, str(exc), version=request.sdk_version)
        except ValidationError as exc:
            return SessionResult(SessionOutcome.MALFORMED_REQUEST, str(exc))

        try:
            config = self._storage.fetch()
        except StorageError as exc:
            logger.debug("fetch failed", exc_info=True)
            return SessionResult(SessionOutcome.FETCH_FAILED, f"Failed to fetch versions config: {exc}")

        try:
            selection = self._selector.resolve(config.versions(), request.sdk_version, config.sdk_versions)
        except InvalidVersionError as exc:
            return SessionResult(SessionOutcome.INVALID_VERSION, str(exc), version=exc.version)
        except SessionCanceled:
            return SessionResult(SessionOutcome.CANCELED, "Canceled")

        version = selection.version
        self._info(f"Using {self._environment_label} host ...")
        self._info(f"Using SDK {version} ...")

        original = config.entry(version)
        if original is not None and not isinstance(original, dict):
            self._warning(f"SDK {version} config is not an object; edits start from an empty one.")
        try:
            edited = apply_edits(selection.entry, request.operations())
        except ValidationError as exc:
            return SessionResult(SessionOutcome.MALFORMED_REQUEST, str(exc), version=version)

        delta = diff(original, edited)
        if delta is None:
            return SessionResult(
                SessionOutcome.NO_CHANGES,
                "There are no changes to apply in the configuration.",
                version=version,
                is_new=selection.is_new,
            )

        if self._hooks.preview:
            self._hooks.preview(version, delta, original, selection.is_new)

        approved = self._gate.confirm(
            f"Does this look correct? Type `y` or press enter to update {self._environment_label} config.",
            default=True,
        )
        if not approved:
            return SessionResult(SessionOutcome.CANCELED, "Canceled", version=version, delta=delta)

        updated = config.with_entry(version, edited)
        try:
            self._storage.persist(updated)
        except StorageError as exc:
            logger.debug("persist failed", exc_info=True)
            return SessionResult(
                SessionOutcome.PERSIST_FAILED,
                f"Failed to update {self._environment_label} config: {exc}. Nothing was retried; run the command again.",
                version=version,
                is_new=selection.is_new,
                delta=delta,
            )

        message = f"Successfully updated {self._environment_label} config."
        if self._inspect_url:
            message += f" You can check it out on {self._inspect_url}"
        return SessionResult(
            SessionOutcome.DONE,
            message,
            version=version,
            is_new=selection.is_new,
            delta=delta,
            persisted=updated,
        )
