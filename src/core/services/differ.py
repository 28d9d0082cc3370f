"""Structural diff of JSON-like values.

`diff` walks both trees and reports one `Change` per differing leaf. Mappings
are compared key by key (keys of `after` first, in their order, then keys that
only exist in `before`); lists are compared index by index. Any other pair of
values is compared with JSON semantics, so `true` and `1` differ while `1` and
`1.0` do not.
"""

from __future__ import annotations

import copy
import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from rich.text import Text

from core.paths import PathSegment


class ChangeKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


_MISSING: Any = object()


@dataclass(frozen=True)
class Change:
    """One differing leaf. `old`/`new` are `None` for additions/removals."""

    path: tuple[PathSegment, ...]
    kind: ChangeKind
    old: Any = None
    new: Any = None

    @property
    def dotted_path(self) -> str:
        return format_path(self.path)


@dataclass(frozen=True)
class Delta:
    changes: tuple[Change, ...]

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)


_NEEDS_QUOTING = re.compile(r"[.\[\]\"]")


def format_path(path: tuple[PathSegment, ...]) -> str:
    """Dotted rendering of `path`; keys that would read ambiguously are quoted as `["a.b"]`."""

    if not path:
        return "(root)"
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        elif not segment or segment == "(root)" or _NEEDS_QUOTING.search(segment):
            out += f"[{json.dumps(segment, ensure_ascii=False)}]"
        else:
            out += f".{segment}" if out else segment
    return out


def _same_scalar(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    return type(a) is type(b) and a == b


def _walk(before: Any, after: Any, path: tuple[PathSegment, ...]) -> Iterator[Change]:
    if before is _MISSING:
        yield Change(path, ChangeKind.ADDED, new=copy.deepcopy(after))
        return
    if after is _MISSING:
        yield Change(path, ChangeKind.REMOVED, old=copy.deepcopy(before))
        return

    if isinstance(before, dict) and isinstance(after, dict):
        for key, value in after.items():
            yield from _walk(before.get(key, _MISSING), value, path + (key,))
        for key, value in before.items():
            if key not in after:
                yield from _walk(value, _MISSING, path + (key,))
        return

    if isinstance(before, list) and isinstance(after, list):
        for index in range(max(len(before), len(after))):
            left = before[index] if index < len(before) else _MISSING
            right = after[index] if index < len(after) else _MISSING
            yield from _walk(left, right, path + (index,))
        return

    if isinstance(before, (dict, list)) or isinstance(after, (dict, list)) or not _same_scalar(before, after):
        yield Change(path, ChangeKind.MODIFIED, old=copy.deepcopy(before), new=copy.deepcopy(after))


def diff(before: Any, after: Any) -> Delta | None:
    """Return every change needed to turn `before` into `after`, or `None`."""

    changes = tuple(_walk(before, after, ()))
    if not changes:
        return None
    return Delta(changes)


def _set_in(root: Any, path: tuple[PathSegment, ...], value: Any) -> Any:
    if not path:
        return value
    parent = root
    for segment in path[:-1]:
        parent = parent[segment]
    last = path[-1]
    if isinstance(last, int) and last == len(parent):
        parent.append(value)
    else:
        parent[last] = value
    return root


def patch(before: Any, delta: Delta | None) -> Any:
    """Apply `delta` to a copy of `before`; inverse of `diff`."""

    result = copy.deepcopy(before)
    if delta is None:
        return result

    removals: list[Change] = []
    for change in delta:
        if change.kind is ChangeKind.REMOVED:
            removals.append(change)
        else:
            result = _set_in(result, change.path, copy.deepcopy(change.new))

    # List removals are trailing indices; delete from the end so positions hold.
    for change in sorted(removals, key=lambda c: (len(c.path), _sort_key(c.path[-1])), reverse=True):
        parent = result
        for segment in change.path[:-1]:
            parent = parent[segment]
        del parent[change.path[-1]]
    return result


def _sort_key(segment: PathSegment) -> tuple[int, Any]:
    return (1, segment) if isinstance(segment, int) else (0, str(segment))


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=False)


def render(delta: Delta, before: Any = None, *, is_new: bool = False) -> Text:
    """Human-readable, path-annotated preview of `delta`.

    `is_new` labels an entry that did not exist yet. When `before` is a mapping,
    a trailing line counts its top-level keys the delta leaves untouched.
    """

    text = Text()
    if is_new:
        text.append("(new entry)\n", style="bold cyan")

    for change in delta:
        path = change.dotted_path
        if change.kind is ChangeKind.ADDED:
            text.append(f"+ {path}: ", style="bold green")
            text.append(_dump(change.new), style="green")
        elif change.kind is ChangeKind.REMOVED:
            text.append(f"- {path}: ", style="bold red")
            text.append(_dump(change.old), style="red strike")
        else:
            text.append(f"~ {path}: ", style="bold yellow")
            text.append(_dump(change.old), style="red")
            text.append(" → ", style="dim")
            text.append(_dump(change.new), style="green")
        text.append("\n")

    if isinstance(before, dict):
        touched = {change.path[0] for change in delta if change.path}
        untouched = sum(1 for key in before if key not in touched)
        if untouched and all(change.path for change in delta):
            text.append(f"({untouched} unchanged key{'' if untouched == 1 else 's'})\n", style="dim")
    text.rstrip()
    return text
