"""Path utilities: bracket notation and path-addressed mutation."""

from __future__ import annotations

import copy
import json
from collections.abc import Sequence

PathSegment = str | int
Path = Sequence[PathSegment]

_DECODER = json.JSONDecoder()


class PathConflictError(ValueError):
    """A value of the wrong kind sits where the path needs a container."""

    def __init__(self, prefix: Path, expected: str, found: object) -> None:
        self.prefix = tuple(prefix)
        self.expected = expected
        self.found = found
        super().__init__(
            f"{format_path(prefix)} holds {type(found).__name__}, "
            f"expected {expected}"
        )


def _is_index(seg: object) -> bool:
    return isinstance(seg, int) and not isinstance(seg, bool)


def _check_segment(seg: object) -> None:
    if _is_index(seg):
        if seg < 0:
            raise ValueError(f"negative array index in path: {seg}")
    elif not isinstance(seg, str):
        raise TypeError(f"invalid path segment: {seg!r}")


def format_path(path: Path | None) -> str:
    """Render *path* as ``$["key"][0]`` style text; the root is ``$``."""
    if not path:
        return "$"
    parts = []
    for seg in path:
        if _is_index(seg):
            parts.append(f"[{seg}]")
        else:
            parts.append(f"[{json.dumps(seg, ensure_ascii=False)}]")
    return "$" + "".join(parts)


def parse_path(text: str) -> tuple[PathSegment, ...]:
    """Parse bracket notation produced by :func:`format_path`.

    Keys may be double-quoted (JSON string escapes) or single-quoted.
    """
    text = text.strip()
    if not text.startswith("$"):
        raise ValueError("path must start with $")

    rest = text[1:]
    segments: list[PathSegment] = []
    while rest:
        if not rest.startswith("["):
            raise ValueError(f"expected '[' at {rest!r}")

        if rest.startswith('["'):
            key, end = _DECODER.raw_decode(rest, 1)
        elif rest.startswith("['"):
            end = rest.find("'", 2)
            if end == -1:
                raise ValueError("Unclosed quote")
            key = rest[2:end]
            end += 1
        else:
            end = rest.find("]")
            if end == -1:
                raise ValueError("Unclosed bracket")
            index_str = rest[1:end]
            if not (index_str.isascii() and index_str.isdigit()):
                raise ValueError(f"invalid array index: {index_str!r}")
            segments.append(int(index_str))
            rest = rest[end + 1 :]
            continue

        if rest[end : end + 1] != "]":
            raise ValueError("Unclosed bracket")
        segments.append(key)
        rest = rest[end + 1 :]

    return tuple(segments)


def get_value_at_path(data: object, path: Path) -> object:
    """Get the value at a given path in data, or None when absent."""
    current = data
    for key in path:
        if isinstance(current, dict) and isinstance(key, str) and key in current:
            current = current[key]
        elif isinstance(current, list) and _is_index(key):
            if 0 <= key < len(current):
                current = current[key]
            else:
                return None
        else:
            return None
    return current


def _fits(value: object, seg: PathSegment) -> bool:
    """Whether *value* is the container kind that *seg* indexes into."""
    return isinstance(value, list) if _is_index(seg) else isinstance(value, dict)


def _empty_for(seg: PathSegment) -> list | dict:
    return [] if _is_index(seg) else {}


def _child(container: list | dict, seg: PathSegment) -> object:
    if isinstance(container, list):
        return container[seg] if seg < len(container) else None
    return container.get(seg)


def _assign(container: list | dict, seg: PathSegment, value: object) -> None:
    if isinstance(container, list) and seg >= len(container):
        # pad the gap with nulls
        container.extend([None] * (seg - len(container) + 1))
    container[seg] = value


def set_value_at_path(
    root: object,
    path: Path | None,
    replacement: object,
    *,
    strict: bool = False,
) -> object:
    """Return a new root with *replacement* installed at *path*.

    An empty path returns *replacement* itself. Otherwise *root* is deep
    copied and only the copy is changed. Missing containers along the way
    are created, a list when the following segment is an index and a dict
    when it is a key. A value of the wrong kind is replaced by a fresh
    container unless *strict* is set, in which case PathConflictError is
    raised. Indices past the end of a list pad it with None.
    """
    if not path:
        return replacement
    for seg in path:
        _check_segment(seg)

    new_root = copy.deepcopy(root)
    if not _fits(new_root, path[0]):
        if strict and new_root is not None:
            raise PathConflictError((), _kind_name(path[0]), new_root)
        new_root = _empty_for(path[0])

    cursor = new_root
    for i in range(len(path) - 1):
        seg, next_seg = path[i], path[i + 1]
        child = _child(cursor, seg)
        if not _fits(child, next_seg):
            if strict and child is not None:
                raise PathConflictError(path[: i + 1], _kind_name(next_seg), child)
            child = _empty_for(next_seg)
            _assign(cursor, seg, child)
        cursor = child

    _assign(cursor, path[-1], replacement)
    return new_root


def _kind_name(seg: PathSegment) -> str:
    return "array" if _is_index(seg) else "object"
