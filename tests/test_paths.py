from __future__ import annotations

import copy
import logging

import pytest

from core.errors import ValidationError
from core.paths import delete_path, get_path, has_path, parse_path, set_path


def test_parse_path_keys_and_indices() -> None:
    assert parse_path("a.b.c") == ["a", "b", "c"]
    assert parse_path("items[0].name") == ["items", 0, "name"]
    assert parse_path("grid[1][2]") == ["grid", 1, 2]


@pytest.mark.parametrize("path", ["", "  ", "a..b", "a.", "a[x]", "a[0]b"])
def test_parse_path_rejects_malformed(path: str) -> None:
    with pytest.raises(ValidationError):
        parse_path(path)


def test_set_path_creates_intermediate_mappings_and_keeps_siblings() -> None:
    tree = {"custom": {"other": 1}, "isDeprecated": False}
    before = copy.deepcopy(tree)

    set_path(tree, "custom.nested.flag", True)

    assert get_path(tree, "custom.nested.flag") is True
    assert tree["custom"]["other"] == before["custom"]["other"]
    assert tree["isDeprecated"] is False


def test_set_path_replaces_scalar_intermediate() -> None:
    tree = {"custom": "legacy"}
    set_path(tree, "custom.flag", 1)
    assert tree == {"custom": {"flag": 1}}


def test_set_path_creates_lists_for_index_segments() -> None:
    tree: dict = {}
    set_path(tree, "hosts[1].name", "b")
    assert tree == {"hosts": [None, {"name": "b"}]}


def test_set_path_overwrites_existing_value() -> None:
    tree = {"releaseNoteUrl": "old"}
    set_path(tree, "releaseNoteUrl", "new")
    assert tree == {"releaseNoteUrl": "new"}


def test_set_path_rejects_index_on_root_mapping() -> None:
    with pytest.raises(ValidationError):
        set_path({}, "[0]", 1)


def test_delete_path_removes_existing_leaf() -> None:
    tree = {"custom": {"flag": True, "keep": 1}}
    delete_path(tree, "custom.flag")
    assert tree == {"custom": {"keep": 1}}


@pytest.mark.parametrize("path", ["missing", "custom.missing", "custom.keep.deeper", "list[5]", "custom[0]"])
def test_delete_path_absent_is_noop(path: str) -> None:
    tree = {"custom": {"keep": 1}, "list": [1, 2]}
    before = copy.deepcopy(tree)
    delete_path(tree, path)
    assert tree == before


def test_has_path_distinguishes_null_from_missing() -> None:
    tree = {"a": None}
    assert has_path(tree, "a")
    assert not has_path(tree, "b")


def test_mutations_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    tree: dict = {}
    with caplog.at_level(logging.INFO, logger="core.paths"):
        set_path(tree, "custom.flag", 1)
        delete_path(tree, "custom.flag")
    assert "Setting custom.flag config key ..." in caplog.messages
    assert "Deleting custom.flag config key ..." in caplog.messages


@pytest.mark.parametrize(
    "tree,path",
    [
        ({"hosts": {"primary": "x"}}, "hosts[0]"),
        ({"hosts": ["a", "b"]}, "hosts.extra"),
        ({"hosts": {"primary": "x"}}, "hosts[0].name"),
        ({"hosts": ["a", {"name": "b"}]}, "hosts.extra.name"),
    ],
)
def test_set_path_wrong_segment_kind_on_existing_container_keeps_tree(tree: dict, path: str) -> None:
    before = copy.deepcopy(tree)
    with pytest.raises(ValidationError):
        set_path(tree, path, "y")
    assert tree == before


def test_set_path_index_into_existing_list_keeps_siblings() -> None:
    tree = {"hosts": ["a", {"name": "b"}], "other": 1}
    set_path(tree, "hosts[1].port", 80)
    assert tree == {"hosts": ["a", {"name": "b", "port": 80}], "other": 1}
