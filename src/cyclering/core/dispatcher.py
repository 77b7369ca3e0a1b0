# src/cyclering/core/dispatcher.py
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from cyclering.core import log
from cyclering.core.buffer import CircularBuffer
from cyclering.core.contracts import Event

Handler = Callable[[Event], Any]


class Dispatcher:
    """Round-robin router: each topic owns a fixed ring of handlers."""

    def __init__(self):
        self.routes: Dict[str, CircularBuffer[Handler]] = {}  # topic exact match
        self.l = log.get("cyclering.dispatcher")

    def register(self, topic: str, handlers: Iterable[Handler]) -> None:
        self.routes[topic] = CircularBuffer(handlers, name=f"dispatch.{topic}", allow_empty=False)

    def topics(self) -> List[str]:
        return list(self.routes)

    def handle(self, ev: Event) -> Any:
        ring = self.routes.get(ev.topic)
        if ring is None:
            self.l.debug("no handlers for topic=%s", ev.topic)
            return None
        return ring.advance()(ev)
