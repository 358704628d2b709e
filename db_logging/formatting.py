"""
Rendering of structured log state into an indented text block.

A structured payload is an ordered sequence of (key, value) pairs, where a
value is a scalar, another such sequence, or a collection of either. For example::

    LogValues(user='alice', roles=['admin', 'staff'], request={'path': '/x'})

renders as::

      user: alice
      roles:
        admin
        staff
      request:
        path: /x
"""

from collections.abc import Iterable, Mapping
from typing import Any, Iterator, List, Optional, Tuple

INDENTATION = 2


class LogValues:
    """
    Ordered key/value pairs describing one structured log record (or a part of one).

    Keys need not be unique. Built from a list of pairs, a mapping, keyword
    arguments, or any combination of those.
    """

    __slots__ = ('_pairs',)

    def __init__(self, values=None, **kwargs):
        pairs: List[Tuple[str, Any]] = []
        if isinstance(values, Mapping):
            pairs.extend(values.items())
        elif values is not None:
            pairs.extend((key, value) for key, value in values)
        pairs.extend(kwargs.items())
        self._pairs = pairs

    def get_values(self) -> List[Tuple[str, Any]]:
        return list(self._pairs)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other):
        if not isinstance(other, LogValues):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self):
        return f"LogValues({self._pairs!r})"


def is_log_values(value: Any) -> bool:
    """True when value is rendered as a nested block rather than a scalar."""
    return isinstance(value, (LogValues, Mapping))


def _pairs_of(node) -> List[Tuple[str, Any]]:
    if node is None:
        return []
    if isinstance(node, LogValues):
        return node.get_values()
    return list(node.items())


def _is_collection(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray))


def _text(value: Any) -> str:
    return '' if value is None else str(value)


def _format_into(parts: List[str], node, level: int, bullet: bool) -> None:
    is_first = True
    for key, value in _pairs_of(node):
        parts.append('\n')
        if bullet and is_first:
            parts.append(' ' * (level * INDENTATION - 1) + '-')
        else:
            parts.append(' ' * (level * INDENTATION))
        parts.append(f"{_text(key)}: ")

        if is_log_values(value):
            _format_into(parts, value, level + 1, bullet=False)
        elif _is_collection(value):
            for item in value:
                if is_log_values(item):
                    _format_into(parts, item, level + 1, bullet=True)
                else:
                    parts.append('\n' + ' ' * ((level + 1) * INDENTATION) + _text(item))
        else:
            parts.append(_text(value))
        is_first = False


def format_log_values(values, level: int = 1, bullet: bool = False) -> str:
    """
    Render structured log state as an indented multi-line string.

    Each pair goes on its own line, indented two spaces per level. Nested
    nodes are rendered one level deeper; nodes inside a collection are
    rendered as list items whose first line is marked with '-'. An empty
    node renders as an empty string, which callers treat as nothing to log.
    """
    parts: List[str] = []
    _format_into(parts, values, level, bullet)
    return ''.join(parts)


def trim(value: Optional[str], maximum_length: int) -> Optional[str]:
    """Truncate text to maximum_length characters; None passes through."""
    if value is None:
        return None
    return value[:maximum_length] if len(value) > maximum_length else value
