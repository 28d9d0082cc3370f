from __future__ import annotations

import copy
from typing import Any, Sequence

import pytest

from core.domain.models import VersionedConfig
from core.errors import StorageError


class InMemoryStorage:
    """Records every fetch/persist; can be told to fail either call."""

    def __init__(self, document: dict[str, Any], *, fail_fetch: bool = False, fail_persist: bool = False) -> None:
        self.document = copy.deepcopy(document)
        self.fail_fetch = fail_fetch
        self.fail_persist = fail_persist
        self.fetch_calls = 0
        self.persisted: list[VersionedConfig] = []

    def fetch(self) -> VersionedConfig:
        self.fetch_calls += 1
        if self.fail_fetch:
            raise StorageError("connection refused")
        return VersionedConfig.model_validate(copy.deepcopy(self.document))

    def persist(self, config: VersionedConfig) -> None:
        if self.fail_persist:
            raise StorageError("HTTP 500")
        self.persisted.append(config)


class ScriptedGate:
    """Answers prompts from queues and records what was asked."""

    def __init__(
        self,
        *,
        choices: Sequence[str] = (),
        confirms: Sequence[bool] = (),
        texts: Sequence[str] = (),
    ) -> None:
        self._choices = list(choices)
        self._confirms = list(confirms)
        self._texts = list(texts)
        self.asked: list[tuple[str, Any]] = []

    def select_from_list(self, items: Sequence[str], default: str | None = None) -> str:
        self.asked.append(("select", (list(items), default)))
        return self._choices.pop(0) if self._choices else default

    def confirm(self, message: str, default: bool = True) -> bool:
        self.asked.append(("confirm", message))
        return self._confirms.pop(0) if self._confirms else default

    def free_text(self, message: str) -> str:
        self.asked.append(("text", message))
        return self._texts.pop(0)


@pytest.fixture()
def versions_document() -> dict[str, Any]:
    return {
        "sdkVersions": {
            "2.0.0": {
                "isDeprecated": False,
                "releaseNoteUrl": "https://blog.example/sdk-2",
                "packages": {"react-native": "0.55.4"},
            },
            "3.0.0": {
                "releaseNoteUrl": "https://blog.example/sdk-3",
                "packages": {"react-native": "0.57.1"},
            },
        },
        "turtleSdkVersions": {"android": "3.0.0", "ios": "3.0.0"},
        "androidVersion": "2.10.0",
    }


@pytest.fixture()
def storage(versions_document: dict[str, Any]) -> InMemoryStorage:
    return InMemoryStorage(versions_document)
