# tests/test_buffer_positional.py
import numpy as np
import pytest

from cyclering.core.buffer import CircularBuffer


@pytest.mark.parametrize("i", [-7, -3, -1, 0, 2, 3, 5, 100])
def test_set_then_get_any_index(i):
    ring = CircularBuffer(["a", "b", "c"])
    ring.set(i, "v")
    assert ring.get(i) == "v"
    assert ring.get(i % 3) == "v"
    assert len(ring) == 3


def test_negative_index_counts_from_end():
    ring = CircularBuffer([10, 20, 30, 40])
    assert ring.get(-1) == 40
    assert ring[-4] == 10
    assert ring[-5] == 40


def test_subscript_wraps_and_accepts_numpy_ints():
    ring = CircularBuffer([10, 20, 30])
    assert ring[4] == 20
    assert ring[np.int64(2)] == 30
    ring[7] = 99
    assert ring.to_list() == [10, 99, 30]


def test_slice_reads_storage_without_wrap():
    ring = CircularBuffer([1, 2, 3, 4])
    assert ring[1:3] == [2, 3]
    assert ring[::-1] == [4, 3, 2, 1]
    assert ring[2:10] == [3, 4]


def test_slice_assignment_rejected():
    ring = CircularBuffer([1, 2, 3])
    with pytest.raises(TypeError):
        ring[0:2] = [9, 9]
    assert ring.to_list() == [1, 2, 3]


@pytest.mark.parametrize("key", ["0", 1.0, None])
def test_bad_subscript_type(key):
    ring = CircularBuffer([1, 2, 3])
    with pytest.raises(TypeError):
        ring[key]


def test_positional_access_ignores_cursor():
    ring = CircularBuffer(["a", "b", "c"])
    ring.skip(2)
    assert ring.get(0) == "a"
    ring.set(0, "z")
    assert ring.cursor_position() == 2
    assert ring.advance() == "c"
    assert ring.advance() == "z"


def test_input_list_is_copied():
    src = [1, 2, 3]
    ring = CircularBuffer.from_sequence(src)
    src.append(4)
    src[0] = 100
    assert ring.to_list() == [1, 2, 3]
    assert ring.capacity == 3


def test_sequence_items_are_stored_as_is():
    pairs = [[1, 2], (3, 4), {"k": 5}]
    ring = CircularBuffer(pairs)
    assert ring.advance() == [1, 2]
    assert ring.advance() == (3, 4)
    assert ring.get(2) == {"k": 5}
    assert len(ring) == 3


def test_with_fill_and_factory():
    filled = CircularBuffer.with_fill(3, 0)
    assert filled.to_list() == [0, 0, 0]

    made = CircularBuffer.from_factory(4, lambda i: i * i)
    assert made.to_list() == [0, 1, 4, 9]
    assert made.advance() == 0

    with pytest.raises(ValueError):
        CircularBuffer.with_fill(-1, 0)
    with pytest.raises(ValueError):
        CircularBuffer.from_factory(-2, str)


def test_snapshot_and_equality():
    a = CircularBuffer([1, 2, 3], name="a")
    b = CircularBuffer([1, 2, 3], name="b")
    assert a == b
    a.advance()
    assert a != b

    snap = a.snapshot()
    assert snap.to_dict() == {"name": "a", "capacity": 3, "cursor": 1, "items": [1, 2, 3]}
    snap.items.append(4)
    assert len(a) == 3
    assert "cursor=1" in repr(a)
