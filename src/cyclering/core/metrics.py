
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# ---------------- Utilities ----------------

LabelKey = Tuple[Tuple[str, str], ...]  # sorted tuple of (k,v)


def _labels_key(labels: Dict[str, Any] | None) -> LabelKey:
    if not labels:
        return tuple()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


# ---------------- Metric types ----------------

@dataclass
class _Base:
    name: str
    labels: LabelKey


class Counter(_Base):
    def __init__(self, name: str, labels: LabelKey):
        super().__init__(name, labels)
        self._value = 0.0
        self._lock = threading.Lock()

    def inc(self, n: float = 1.0) -> None:
        with self._lock:
            self._value += n

    def value(self) -> float:
        with self._lock:
            return self._value


class Gauge(_Base):
    def __init__(self, name: str, labels: LabelKey):
        super().__init__(name, labels)
        self._value = 0.0
        self._lock = threading.Lock()

    def set(self, v: float) -> None:
        with self._lock:
            self._value = float(v)

    def value(self) -> float:
        with self._lock:
            return self._value


# ---------------- Registry ----------------

class _Registry:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._counters: Dict[Tuple[str, LabelKey], Counter] = {}
        self._gauges: Dict[Tuple[str, LabelKey], Gauge] = {}

    def counter(self, name: str, labels: Dict[str, Any] | None) -> Counter:
        key = (name, _labels_key(labels))
        with self._lock:
            m = self._counters.get(key)
            if m is None:
                m = Counter(name, key[1])
                self._counters[key] = m
            return m

    def gauge(self, name: str, labels: Dict[str, Any] | None) -> Gauge:
        key = (name, _labels_key(labels))
        with self._lock:
            m = self._gauges.get(key)
            if m is None:
                m = Gauge(name, key[1])
                self._gauges[key] = m
            return m

    def items(self):
        with self._lock:
            return list(self._counters.items()), list(self._gauges.items())

    def clear(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()


_REG = _Registry()

# ---------------- Public API ----------------

def inc_counter(name: str, n: float = 1.0, **labels: Any) -> None:
    _REG.counter(name, labels).inc(n)


def set_gauge(name: str, v: float, **labels: Any) -> None:
    _REG.gauge(name, labels).set(v)


def counter_value(name: str, **labels: Any) -> float:
    """Current value of a counter (0.0 if never incremented)."""
    return _REG.counter(name, labels).value()


def gauge_value(name: str, **labels: Any) -> float:
    return _REG.gauge(name, labels).value()


def reset() -> None:
    """Drop every metric (tests)."""
    _REG.clear()


def snapshot_all() -> dict:
    """Return a snapshot of current metrics."""
    counters, gauges = _REG.items()
    out = {"counters": [], "gauges": []}
    for (name, labels), m in counters:
        out["counters"].append({"name": name, "labels": dict(labels), "value": m.value()})
    for (name, labels), m in gauges:
        out["gauges"].append({"name": name, "labels": dict(labels), "value": m.value()})
    return out


def force_emit(logger: Optional[logging.Logger] = None, json_mode: bool = False) -> None:
    """Log one line per metric right now."""
    lg = logger or logging.getLogger("metrics")
    counters, gauges = _REG.items()

    if json_mode:
        for (_, labels), m in counters:
            lg.info({"type": "counter", "name": m.name, "labels": dict(labels), "value": m.value()})
        for (_, labels), m in gauges:
            lg.info({"type": "gauge", "name": m.name, "labels": dict(labels), "value": m.value()})
    else:
        for (_, labels), m in counters:
            lg.info(f"[ctr] {m.name} {dict(labels)} value={m.value():.0f}")
        for (_, labels), m in gauges:
            lg.info(f"[gauge] {m.name} {dict(labels)} value={m.value():.3f}")
