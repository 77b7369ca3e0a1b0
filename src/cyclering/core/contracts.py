from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

__all__ = [
    "Event",
    "RingSnapshot",
]


# --------- Dispatcher envelope ---------
@dataclass(slots=True)
class Event:
    """Simple envelope: a topic and its payload (data)."""
    topic: str
    data: Any = None

    @property
    def payload(self) -> Any:
        return self.data


# --------- Ring introspection ---------
@dataclass(slots=True)
class RingSnapshot:
    """Point-in-time copy of a ring's state."""
    name: str
    capacity: int
    cursor: int                                  # 0 when capacity == 0
    items: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["items"] = list(self.items)
        return d
