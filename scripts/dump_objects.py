#!/usr/bin/env python3
"""Dump every object pybluster mirrors into Redis.

Syncs the object cache if needed, then prints each object name with its
attributes as read back from Redis.

Usage
-----
Set environment variables and run::

    export BLUSTER_OBJECTS_PATH="/var/cache/nagios3/objects.cache"
    export BLUSTER_SERVER="localhost:6379"
    python scripts/dump_objects.py

Options::

    --objects PATH       Object cache path (default: $BLUSTER_OBJECTS_PATH)
    --server HOST:PORT   Redis address (default: $BLUSTER_SERVER)
    --type TYPE          Only dump this object type (repeatable)
    --force              Re-sync even if the stored marker is current
    --json               Output as machine-readable JSON
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybluster import Bluster, BlusterConfig, BlusterError  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_object(name: str, data: dict[str, str], out: list[str]) -> None:
    out.append(f"\n  {name}")
    width = max((len(key) for key in data), default=0)
    for key in sorted(data):
        out.append(f"    {key.ljust(width)}  {data[key]}")


# ── main ─────────────────────────────────────────────────────


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump objects mirrored by pybluster")
    parser.add_argument("--objects", help="Path to objects.cache")
    parser.add_argument("--server", help="Redis address as HOST:PORT")
    parser.add_argument("--type", dest="types", action="append", help="Object type to dump (repeatable)")
    parser.add_argument("--force", action="store_true", help="Force a full re-sync first")
    parser.add_argument("--json", dest="json_mode", action="store_true", help="Output JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.objects:
        overrides["objects_path"] = args.objects
    if args.server:
        overrides["server"] = args.server

    try:
        config = BlusterConfig.from_env(**overrides)
        with Bluster.from_config(config) as bluster:
            if args.force:
                bluster.refresh()
            status = bluster.sync_status()
            types = args.types or list(config.object_types)
            result: dict[str, Any] = {
                "objects_path": config.objects_path,
                "server": config.server,
                "marker": status.marker,
                "types": {},
            }
            for object_type in types:
                result["types"][object_type] = {
                    name: bluster.get_object(object_type, name) for name in sorted(bluster.objects(object_type))
                }
    except BlusterError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json_mode:
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0

    out: list[str] = [_section("pybluster dump_objects")]
    out.append(f"  objects   : {result['objects_path']}")
    out.append(f"  server    : {result['server']}")
    out.append(f"  marker    : {result['marker']}")
    for object_type, objects in result["types"].items():
        out.append(_section(f"{object_type.upper()}  ({len(objects)})"))
        for name, data in objects.items():
            _format_object(name, data, out)
    print("\n".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(main())
