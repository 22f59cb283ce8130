"""Structured store keys.

Keys are tuples of segments encoded as ``a:b:c``.  A ``:`` or ``\\`` inside a
segment is escaped with a backslash so object names and attribute names
can never shift the segment boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass

from pybluster._constants import KEY_SEPARATOR, OBJECTS_SEGMENT, SYNC_MARKER_SEGMENT

_ESCAPE = "\\"
_GLOB_SPECIALS = frozenset("*?[]\\")


def _escape_segment(segment: str) -> str:
    return segment.replace(_ESCAPE, _ESCAPE * 2).replace(KEY_SEPARATOR, _ESCAPE + KEY_SEPARATOR)


def _glob_escape(text: str) -> str:
    """Escape Redis ``KEYS``/``SCAN`` glob metacharacters."""
    return "".join(_ESCAPE + ch if ch in _GLOB_SPECIALS else ch for ch in text)


@dataclass(frozen=True, slots=True)
class StoreKey:
    """A store key made of namespace segments."""

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("a store key needs at least one segment")

    def child(self, *segments: str) -> StoreKey:
        return StoreKey(self.segments + segments)

    def encode(self) -> str:
        return KEY_SEPARATOR.join(_escape_segment(s) for s in self.segments)

    def pattern(self) -> str:
        """Glob matching every key strictly below this one."""
        return _glob_escape(self.encode()) + KEY_SEPARATOR + "*"

    def is_prefix_of(self, other: StoreKey) -> bool:
        size = len(self.segments)
        return len(other.segments) > size and other.segments[:size] == self.segments

    @classmethod
    def decode(cls, raw: str) -> StoreKey:
        """Split an encoded key on unescaped separators."""
        segments: list[str] = []
        current: list[str] = []
        chars = iter(raw)
        for ch in chars:
            if ch == _ESCAPE:
                # A trailing lone backslash is kept literally.
                current.append(next(chars, _ESCAPE))
            elif ch == KEY_SEPARATOR:
                segments.append("".join(current))
                current = []
            else:
                current.append(ch)
        segments.append("".join(current))
        return cls(tuple(segments))

    def __str__(self) -> str:
        return self.encode()


def objects_root(namespace: str) -> StoreKey:
    return StoreKey((namespace, OBJECTS_SEGMENT))


def type_key(namespace: str, object_type: str) -> StoreKey:
    return objects_root(namespace).child(object_type)


def object_key(namespace: str, object_type: str, name: str) -> StoreKey:
    return objects_root(namespace).child(object_type, name)


def attribute_key(namespace: str, object_type: str, name: str, attribute: str) -> StoreKey:
    return objects_root(namespace).child(object_type, name, attribute)


def sync_marker_key(namespace: str) -> StoreKey:
    return StoreKey((namespace, SYNC_MARKER_SEGMENT))
