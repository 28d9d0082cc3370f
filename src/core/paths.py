"""Dotted-path access to nested JSON-like trees.

Syntax: `a.b.c` addresses mapping keys; `a.items[0].name` addresses a list
index. Writes create missing intermediate containers, deletes of absent paths
do nothing.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from core.errors import ValidationError

logger = logging.getLogger(__name__)

PathSegment = str | int

_INDEX_RE = re.compile(r"\[(\d+)\]")


def parse_path(path: str) -> list[PathSegment]:
    """Split a dotted path into key (str) and index (int) segments."""

    if not path or not path.strip():
        raise ValidationError("Empty config key path.")

    segments: list[PathSegment] = []
    for part in path.split("."):
        head, _, rest = part.partition("[")
        if head:
            segments.append(head)
        if rest:
            indices = _INDEX_RE.findall("[" + rest)
            if "".join(f"[{i}]" for i in indices) != "[" + rest:
                raise ValidationError(f"Malformed index in config key path {path!r}.")
            segments.extend(int(i) for i in indices)
        elif not head:
            raise ValidationError(f"Empty segment in config key path {path!r}.")
    return segments


def _container_for(next_segment: PathSegment) -> Any:
    return [] if isinstance(next_segment, int) else {}


def _child(node: Any, segment: PathSegment) -> tuple[bool, Any]:
    if isinstance(segment, int):
        if isinstance(node, list) and 0 <= segment < len(node):
            return True, node[segment]
        return False, None
    if isinstance(node, dict) and segment in node:
        return True, node[segment]
    return False, None


def get_path(tree: Any, path: str, default: Any = None) -> Any:
    current = tree
    for segment in parse_path(path):
        found, current = _child(current, segment)
        if not found:
            return default
    return current


def has_path(tree: Any, path: str) -> bool:
    sentinel = object()
    return get_path(tree, path, sentinel) is not sentinel


def _assign(node: Any, segment: PathSegment, value: Any) -> None:
    if isinstance(segment, int) != isinstance(node, list):
        raise ValidationError(f"Cannot address {segment!r} inside a {type(node).__name__}.")
    if isinstance(segment, int):
        while len(node) <= segment:
            node.append(None)
    node[segment] = value


def set_path(tree: dict[str, Any], path: str, value: Any) -> None:
    """Write `value` at `path`, creating missing intermediate containers.

    A missing or scalar intermediate is replaced by a new container; an existing
    mapping or list addressed with the wrong kind of segment is a `ValidationError`.
    """

    segments = parse_path(path)
    logger.info("Setting %s config key ...", path)

    current: Any = tree
    for segment, next_segment in zip(segments, segments[1:]):
        found, child = _child(current, segment)
        if not found or not isinstance(child, (dict, list)):
            child = _container_for(next_segment)
            _assign(current, segment, child)
        elif isinstance(next_segment, int) != isinstance(child, list):
            raise ValidationError(f"Cannot address {next_segment!r} inside the {type(child).__name__} at {path!r}.")
        current = child
    _assign(current, segments[-1], value)


def delete_path(tree: dict[str, Any], path: str) -> None:
    """Remove the value at `path` if it exists."""

    segments = parse_path(path)
    logger.info("Deleting %s config key ...", path)

    current: Any = tree
    for segment in segments[:-1]:
        found, current = _child(current, segment)
        if not found:
            return

    last = segments[-1]
    found, _ = _child(current, last)
    if found:
        del current[last]
