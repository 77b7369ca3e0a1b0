# tests/test_metrics_wraps.py
import logging

from cyclering.core import metrics
from cyclering.core.buffer import CircularBuffer


def test_wraps_counted_per_lap():
    ring = CircularBuffer(["A", "B", "C"], name="laps")
    for _ in range(7):
        ring.advance()
    assert metrics.counter_value("ring_wraps_total", ring="laps") == 2.0


def test_skip_counts_whole_laps():
    ring = CircularBuffer(range(3), name="skipper")
    ring.skip(7)
    assert metrics.counter_value("ring_wraps_total", ring="skipper") == 2.0
    ring.skip(-5)
    assert metrics.counter_value("ring_wraps_total", ring="skipper") == 2.0


def test_single_item_wraps_every_advance():
    ring = CircularBuffer(["x"], name="solo")
    for _ in range(4):
        ring.advance()
    assert metrics.counter_value("ring_wraps_total", ring="solo") == 4.0


def test_capacity_gauge_set_on_construction():
    CircularBuffer.with_fill(5, 0, name="pool")
    assert metrics.gauge_value("ring_capacity", ring="pool") == 5.0

    snap = metrics.snapshot_all()
    assert {"name": "ring_capacity", "labels": {"ring": "pool"}, "value": 5.0} in snap["gauges"]


def test_force_emit_logs_each_metric(caplog):
    caplog.set_level(logging.INFO, logger="metrics")
    ring = CircularBuffer([1, 2], name="emit")
    ring.skip(2)

    metrics.force_emit(logger=logging.getLogger("metrics"))
    text = " ".join(r.getMessage() for r in caplog.records if r.name == "metrics")
    assert "ring_wraps_total" in text
    assert "ring_capacity" in text


def test_force_emit_json_mode_logs_dicts(caplog):
    caplog.set_level(logging.INFO, logger="metrics")
    metrics.inc_counter("custom_total", 3, topic="demo")

    metrics.force_emit(logger=logging.getLogger("metrics"), json_mode=True)
    msgs = [r.msg for r in caplog.records if r.name == "metrics"]
    assert {"type": "counter", "name": "custom_total", "labels": {"topic": "demo"}, "value": 3.0} in msgs
