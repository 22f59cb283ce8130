"""Nagios ``objects.cache`` parser.

The grammar is a flat sequence of blocks::

    define contact {
        contact_name    admin
        email           admin@example.com
    }

Parsing is lenient on purpose: text outside a block is ignored, a block
that is never closed is dropped, and a repeated attribute keeps its last
value.  Nothing in here raises on malformed input.
"""

from __future__ import annotations

import logging
import os
import re

from pybluster.models.objects import ObjectRecord, ObjectSet

_logger = logging.getLogger(__name__)

_DEFINE_RE = re.compile(r"^define\s+(\w+)")
_WHITESPACE_RE = re.compile(r"\s+")


def _split_attribute(line: str) -> tuple[str, str] | None:
    chunks = _WHITESPACE_RE.split(line)
    if not chunks or not chunks[0]:
        return None
    return chunks[0], " ".join(chunks[1:])


def parse_object_cache(text: str) -> ObjectSet:
    """Parse object-cache text into records grouped by object type."""
    objects: ObjectSet = {}
    object_type: str | None = None
    data: dict[str, str] = {}
    dropped = 0

    for raw_line in text.splitlines():
        line = raw_line.strip()

        match = _DEFINE_RE.match(line)
        if match:
            if object_type is not None:
                # Previous block was never closed.
                dropped += 1
            object_type = match.group(1)
            data = {}
            objects.setdefault(object_type, [])
            continue

        if object_type is None:
            continue

        if line == "}":
            objects[object_type].append(ObjectRecord(object_type=object_type, attributes=data))
            object_type = None
            data = {}
            continue

        if not line or line == "{":
            continue

        attribute = _split_attribute(line)
        if attribute is not None:
            key, value = attribute
            data[key] = value

    if object_type is not None:
        dropped += 1
    if dropped:
        _logger.debug("Dropped %d unterminated object block(s)", dropped)

    return objects


def read_object_cache(path: str | os.PathLike[str]) -> ObjectSet:
    """Read and parse the object cache at *path*."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        text = handle.read()
    objects = parse_object_cache(text)
    _logger.debug(
        "Parsed %s: %s",
        path,
        ", ".join(f"{object_type}={len(records)}" for object_type, records in objects.items()) or "no objects",
    )
    return objects
