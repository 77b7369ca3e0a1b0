# src/cyclering/ring_config.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict

import yaml

from cyclering.core import log
from cyclering.core.buffer import CircularBuffer

_log = log.get("cyclering.config")


def _build_ring(name: str, spec: Dict[str, Any], allow_empty: bool) -> CircularBuffer:
    if not isinstance(spec, dict):
        raise ValueError(f"ring {name!r}: expected a mapping, got {type(spec).__name__}")

    has_items = "items" in spec
    has_size = "size" in spec
    if has_items == has_size:
        raise ValueError(f"ring {name!r}: give exactly one of 'items' or 'size'")
    unknown = set(spec) - {"items", "size", "fill", "cursor"}
    if unknown:
        raise ValueError(f"ring {name!r}: unknown keys {sorted(unknown)}")

    if has_items:
        items = spec["items"] or []
        if not isinstance(items, list):
            raise ValueError(f"ring {name!r}: 'items' must be a list")
        if "fill" in spec:
            raise ValueError(f"ring {name!r}: 'fill' only applies with 'size'")
        ring = CircularBuffer.from_sequence(items, name=name, allow_empty=allow_empty)
    else:
        size = spec["size"]
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            raise ValueError(f"ring {name!r}: 'size' must be a non-negative integer")
        ring = CircularBuffer.with_fill(size, spec.get("fill"), name=name, allow_empty=allow_empty)

    cursor = spec.get("cursor", 0)
    if not isinstance(cursor, int) or isinstance(cursor, bool):
        raise ValueError(f"ring {name!r}: 'cursor' must be an integer")
    if cursor or not ring.is_empty():
        # reset_cursor raises EmptyBufferError for a cursor on an empty ring
        ring.reset_cursor(cursor)
    return ring


def build_from_dict(data: Dict[str, Any] | None) -> Dict[str, CircularBuffer]:
    """Build named rings from the ``rings:`` mapping of a config document."""
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError("ring config must be a mapping")
    allow_empty = bool(data.get("allow_empty", True))
    rings_cfg = data.get("rings") or {}
    if not isinstance(rings_cfg, dict):
        raise ValueError("'rings' must be a mapping of name -> ring spec")

    rings: Dict[str, CircularBuffer] = {}
    for name, spec in rings_cfg.items():
        rings[str(name)] = _build_ring(str(name), spec or {}, allow_empty)
    _log.debug("built %d ring(s): %s", len(rings), ", ".join(rings))
    return rings


def build_from_yaml(yaml_path: str | Path) -> Dict[str, CircularBuffer]:
    """Read a ring config YAML file and build its rings."""
    data = yaml.safe_load(Path(yaml_path).read_text(encoding="utf-8"))
    return build_from_dict(data)
