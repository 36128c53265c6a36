"""Dot-path projection of nested response data.

Pure functions -- no MCP, httpx, or Click dependencies.

``filter_fields`` keeps exactly the requested sub-tree of a JSON-like dict.
A segment ending in ``[]`` maps the rest of the path over every element of
a list (``components[].name``). Paths that run into a missing, null or
non-object intermediate contribute nothing; the input is never mutated.
"""

from __future__ import annotations

from typing import Any

_ARRAY_SUFFIX = "[]"

# A tree node maps an output key to a branch; None marks a leaf (copy the
# whole value). A branch records whether the segment carried ``[]``.
_Tree = dict[str, "_Branch | None"]
_Branch = tuple[bool, "_Tree"]


def _split_path(path: Any) -> list[str] | None:
    if not isinstance(path, str) or not path:
        return None
    segments = path.split(".")
    if any(not s or s == _ARRAY_SUFFIX for s in segments):
        return None
    return segments


def _strip_array(seg: str) -> tuple[str, bool]:
    if seg.endswith(_ARRAY_SUFFIX):
        return seg[: -len(_ARRAY_SUFFIX)], True
    return seg, False


def _build_tree(paths: list[str]) -> _Tree:
    tree: _Tree = {}
    for path in paths:
        segments = _split_path(path)
        if segments is None:
            continue
        node = tree
        for i, seg in enumerate(segments):
            key, is_array = _strip_array(seg)
            if i == len(segments) - 1:
                # A whole-value selection absorbs any deeper one, in either order.
                node[key] = None
                break
            if key in node and node[key] is None:
                break
            branch = node.get(key)
            if branch is None:
                branch = (is_array, {})
                node[key] = branch
            node = branch[1]
    return tree


def _project(source: dict[str, Any], tree: _Tree) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, branch in tree.items():
        if key not in source:
            continue
        value = source[key]
        if branch is None:
            out[key] = value
            continue
        is_array, sub = branch
        if is_array:
            if not isinstance(value, list):
                continue
            items = [p for p in (_project(el, sub) for el in value if isinstance(el, dict)) if p]
            if items:
                out[key] = items
            continue
        if not isinstance(value, dict):
            continue
        projected = _project(value, sub)
        if projected:
            out[key] = projected
    return out


def filter_fields(data: Any, paths: list[str]) -> dict[str, Any]:
    """Return a new dict holding only the values addressed by *paths*.

    >>> filter_fields({"assignee": {"displayName": "A", "extra": "X"}}, ["assignee.displayName"])
    {'assignee': {'displayName': 'A'}}
    """
    if not isinstance(data, dict) or not paths:
        return {}
    return _project(data, _build_tree(paths))


def extract_top_level_fields(paths: list[str]) -> list[str]:
    """First segment of every path, ``[]`` stripped, de-duplicated in order."""
    seen: dict[str, None] = {}
    for path in paths:
        segments = _split_path(path)
        if segments is None:
            continue
        head, _ = _strip_array(segments[0])
        seen.setdefault(head, None)
    return list(seen)
