from __future__ import annotations

import pytest

from core.errors import InvalidVersionError, SessionCanceled
from core.services.version_selector import VersionSelector, is_valid_version, sort_versions
from tests.conftest import ScriptedGate


def test_sort_versions_is_semantic_and_descending() -> None:
    assert sort_versions(["2.0.0", "10.0.0", "3.0.0", "10.0.0-beta.1"]) == [
        "10.0.0",
        "10.0.0-beta.1",
        "3.0.0",
        "2.0.0",
    ]


def test_sort_versions_keeps_non_semver_keys_last() -> None:
    assert sort_versions(["UNVERSIONED", "1.0.0", "2.0.0"]) == ["2.0.0", "1.0.0", "UNVERSIONED"]


@pytest.mark.parametrize("version,valid", [("1.2.3", True), ("50.0.0-rc.1", True), ("1.2", False), ("not-a-version", False), ("", False)])
def test_is_valid_version(version: str, valid: bool) -> None:
    assert is_valid_version(version) is valid


def test_prompts_newest_first_with_newest_as_default() -> None:
    gate = ScriptedGate()
    selection = VersionSelector(gate).resolve(["2.0.0", "3.0.0"], None, {"3.0.0": {"a": 1}, "2.0.0": {}})

    assert gate.asked == [("select", (["3.0.0", "2.0.0"], "3.0.0"))]
    assert selection.version == "3.0.0"
    assert selection.is_new is False
    assert selection.entry == {"a": 1}


def test_existing_entry_is_a_copy() -> None:
    entries = {"2.0.0": {"packages": {"a": "1"}}}
    selection = VersionSelector(ScriptedGate()).resolve(["2.0.0"], "2.0.0", entries)
    selection.entry["packages"]["a"] = "2"
    assert entries["2.0.0"]["packages"]["a"] == "1"


def test_invalid_requested_version_aborts_before_creation_prompt() -> None:
    gate = ScriptedGate()
    with pytest.raises(InvalidVersionError):
        VersionSelector(gate).resolve(["2.0.0"], "not-a-version")
    assert gate.asked == []


def test_unknown_version_confirmed_starts_empty() -> None:
    gate = ScriptedGate(confirms=[True])
    selection = VersionSelector(gate).resolve(["2.0.0"], "9.9.9")
    assert selection.is_new is True
    assert selection.entry == {}
    assert gate.asked[0][0] == "confirm"
    assert "9.9.9" in gate.asked[0][1]


def test_unknown_version_declined_cancels() -> None:
    with pytest.raises(SessionCanceled):
        VersionSelector(ScriptedGate(confirms=[False])).resolve(["2.0.0"], "9.9.9")


def test_empty_document_asks_for_a_version() -> None:
    gate = ScriptedGate(texts=["1.0.0"], confirms=[True])
    selection = VersionSelector(gate).resolve([], None)
    assert selection.version == "1.0.0"
    assert selection.is_new is True
