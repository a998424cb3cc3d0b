"""Dot/bracket path resolution over a document tree.

A path such as ``users[1].profile.role`` is tokenized once into a tuple of
steps::

    parse_path("users[1].profile.role")
    # (Key('users'), Index(1), Key('profile'), Key('role'))

The first step is always looked up in the top-level mapping (the root key).
get/has/set/unset all walk the same step tuple, so they agree on what a
path means.

Traversal rules:
    - Key on a mapping looks up the key.
    - Key on a sequence works only for decimal names (``items.0``).
    - Index on a sequence is positional; on a mapping it looks up ``str(n)``.
    - Descending into a scalar does not resolve.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Key:
    """Mapping lookup step."""

    name: str


@dataclass(frozen=True)
class Index:
    """Sequence position step."""

    position: int


Step = Union[Key, Index]

_DIGITS = re.compile(r"[0-9]+")
_MISSING = object()


def _bracket_step(content: str) -> Step:
    text = content.strip()
    if _DIGITS.fullmatch(text):
        return Index(int(text))
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return Key(text[1:-1])
    return Key(content)


@lru_cache(maxsize=1024)
def parse_path(path: str) -> Tuple[Step, ...]:
    """Tokenize a path string into steps.

    Segments are separated by ``.``; each may carry ``[n]`` suffixes.
    Empty segments become ``Key("")``. An unclosed ``[`` is kept as part
    of the key name.

    Args:
        path: Path string (e.g., "a.b[2].c")

    Returns:
        Tuple of Key/Index steps, never empty
    """
    steps = []
    name = []
    bracketed = False  # current segment already produced bracket steps
    i = 0
    while i < len(path):
        ch = path[i]
        if ch == ".":
            if name or not bracketed:
                steps.append(Key("".join(name)))
            name = []
            bracketed = False
            i += 1
        elif ch == "[":
            close = path.find("]", i + 1)
            if close == -1:
                name.append(path[i:])
                break
            if name:
                steps.append(Key("".join(name)))
                name = []
            steps.append(_bracket_step(path[i + 1 : close]))
            bracketed = True
            i = close + 1
        else:
            name.append(ch)
            i += 1

    if name or not bracketed:
        steps.append(Key("".join(name)))
    return tuple(steps)


# Traversal primitives


def _mapping_key(step: Step) -> str:
    return step.name if isinstance(step, Key) else str(step.position)


def _position(step: Step) -> Optional[int]:
    if isinstance(step, Index):
        return step.position
    if _DIGITS.fullmatch(step.name):
        return int(step.name)
    return None


def _child(node: Any, step: Step) -> Any:
    if isinstance(node, dict):
        return node.get(_mapping_key(step), _MISSING)
    if isinstance(node, list):
        position = _position(step)
        if position is not None and position < len(node):
            return node[position]
    return _MISSING


def _resolve(node: Any, steps: Tuple[Step, ...]) -> Any:
    for step in steps:
        node = _child(node, step)
        if node is _MISSING:
            break
    return node


def _assign(node: Any, step: Step, value: Any) -> bool:
    if isinstance(node, dict):
        node[_mapping_key(step)] = value
        return True
    position = _position(step)
    if position is None:
        return False
    if position >= len(node):
        node.extend([None] * (position - len(node) + 1))
    node[position] = value
    return True


def _build(steps: Tuple[Step, ...], value: Any) -> Any:
    """Build a fresh subtree holding value at the end of steps."""
    for step in reversed(steps):
        if isinstance(step, Index):
            value = [None] * step.position + [value]
        else:
            value = {step.name: value}
    return value


# Operations


def get_path(document: dict, path: str, default: Any = None) -> Any:
    """Return the value at path, or default if it does not resolve.

    A stored None is returned as None, not replaced by default.
    """
    value = _resolve(document, parse_path(path))
    return default if value is _MISSING else value


def has_path(document: dict, path: str) -> bool:
    """Check whether path resolves to a value."""
    return _resolve(document, parse_path(path)) is not _MISSING


def set_path(document: dict, path: str, value: Any) -> bool:
    """Assign value at path, creating missing containers.

    Existing containers are descended. At the first missing or scalar
    intermediate the rest of the path is built as a new subtree (Key makes
    a mapping, Index makes a sequence) and attached with one assignment.
    Sequences are padded with None when an index lies past their end.

    Returns:
        False, with the document untouched, if an existing sequence is
        addressed with a non-integer key; True otherwise
    """
    steps = parse_path(path)
    node = document
    for depth, step in enumerate(steps[:-1]):
        child = _child(node, step)
        if not isinstance(child, (dict, list)):
            if isinstance(node, list) and _position(step) is None:
                return False
            return _assign(node, step, _build(steps[depth + 1 :], value))
        node = child
    return _assign(node, steps[-1], value)


def unset_path(document: dict, path: str) -> bool:
    """Remove the value at path.

    Sequence elements are removed outright, so later elements shift down.

    Returns:
        True if something was removed
    """
    steps = parse_path(path)
    parent = _resolve(document, steps[:-1])
    leaf = steps[-1]

    if isinstance(parent, dict):
        key = _mapping_key(leaf)
        if key in parent:
            del parent[key]
            return True
    elif isinstance(parent, list):
        position = _position(leaf)
        if position is not None and position < len(parent):
            del parent[position]
            return True
    return False


__all__ = [
    "Key",
    "Index",
    "Step",
    "parse_path",
    "get_path",
    "has_path",
    "set_path",
    "unset_path",
]
