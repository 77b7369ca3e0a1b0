# src/cyclering/core/buffer.py
"""
Fixed-capacity circular buffer.

The buffer holds exactly N items for its whole lifetime and hands them out in
order through ``advance()``, wrapping from the last position back to the
first. It intentionally does not implement ``__next__``: a Python iterator is
expected to end, this one never does. ``cycle()`` is the explicit infinite
generator, and ``iter(buf)`` is a single finite pass over the storage.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, TypeVar

import numpy as np

from cyclering.core import log
from cyclering.core.contracts import RingSnapshot
from cyclering.core.metrics import inc_counter, set_gauge

T = TypeVar("T")

__all__ = ["CircularBuffer", "EmptyBufferError", "EmptyInputError"]


class EmptyBufferError(IndexError):
    """Raised when an element is requested from a zero-capacity buffer."""


class EmptyInputError(ValueError):
    """Raised when empty input is given to a constructor that disallows it."""


class CircularBuffer(Generic[T]):
    def __init__(self, items: Iterable[T] = (), *, name: str = "ring", allow_empty: bool = True):
        values = list(items)
        if not values and not allow_empty:
            raise EmptyInputError(f"ring {name!r} requires at least one item")

        # object array: fixed length, no append/insert/remove
        self._items = np.empty(len(values), dtype=object)
        for i, v in enumerate(values):
            self._items[i] = v
        self._cursor = 0
        self.name = name
        self.l = log.get(f"cyclering.buffer.{name}")

        set_gauge("ring_capacity", len(values), ring=name)
        self.l.debug("ring created capacity=%d", len(values))

    # -------------------- Construction --------------------
    @classmethod
    def from_sequence(cls, items: Iterable[T], *, name: str = "ring", allow_empty: bool = True) -> "CircularBuffer[T]":
        return cls(items, name=name, allow_empty=allow_empty)

    @classmethod
    def with_fill(cls, n: int, value: T, *, name: str = "ring", allow_empty: bool = True) -> "CircularBuffer[T]":
        """N references to the same ``value``."""
        if n < 0:
            raise ValueError(f"capacity must be >= 0, got {n}")
        return cls([value] * n, name=name, allow_empty=allow_empty)

    @classmethod
    def from_factory(cls, n: int, fn: Callable[[int], T], *, name: str = "ring", allow_empty: bool = True) -> "CircularBuffer[T]":
        """Element ``i`` is ``fn(i)``."""
        if n < 0:
            raise ValueError(f"capacity must be >= 0, got {n}")
        return cls((fn(i) for i in range(n)), name=name, allow_empty=allow_empty)

    # -------------------- Internals --------------------
    def _require_items(self, op: str) -> int:
        n = len(self._items)
        if n == 0:
            raise EmptyBufferError(f"{op}() on empty ring {self.name!r}")
        return n

    def _step(self, n: int) -> None:
        nxt = self._cursor + 1
        if nxt == n:
            nxt = 0
            inc_counter("ring_wraps_total", ring=self.name)
        self._cursor = nxt

    # -------------------- Traversal --------------------
    def advance(self) -> T:
        """Return the item under the cursor and move the cursor one step."""
        n = self._require_items("advance")
        item = self._items[self._cursor]
        self._step(n)
        return item

    def peek(self) -> T:
        self._require_items("peek")
        return self._items[self._cursor]

    def skip(self, n: int = 1) -> None:
        """Move the cursor ``n`` steps (negative goes back) without reading."""
        size = self._require_items("skip")
        if n > 0:
            laps = (self._cursor + n) // size
            if laps:
                inc_counter("ring_wraps_total", laps, ring=self.name)
        self._cursor = (self._cursor + n) % size

    def advance_replace(self, value: T) -> T:
        """Store ``value`` under the cursor, advance, return the old item."""
        n = self._require_items("advance_replace")
        old = self._items[self._cursor]
        self._items[self._cursor] = value
        self._step(n)
        return old

    def advance_update(self, fn: Callable[[T], T]) -> T:
        """Replace the item under the cursor with ``fn(item)``, advance, return the new item."""
        n = self._require_items("advance_update")
        new = fn(self._items[self._cursor])
        self._items[self._cursor] = new
        self._step(n)
        return new

    def cycle(self) -> Iterator[T]:
        """Infinite generator over ``advance()``. Never raises StopIteration."""
        while True:
            yield self.advance()

    # -------------------- Positional access --------------------
    def get(self, i: int) -> T:
        n = self._require_items("get")
        return self._items[i % n]

    def set(self, i: int, value: T) -> None:
        n = self._require_items("set")
        self._items[i % n] = value

    def __getitem__(self, key: Any):
        if isinstance(key, slice):
            return list(self._items[key])
        if isinstance(key, (int, np.integer)) and not isinstance(key, bool):
            return self.get(int(key))
        raise TypeError(f"ring indices must be integers or slices, not {type(key).__name__}")

    def __setitem__(self, key: Any, value: T) -> None:
        if isinstance(key, slice):
            raise TypeError("slice assignment is not supported on a fixed-capacity ring")
        if isinstance(key, (int, np.integer)) and not isinstance(key, bool):
            self.set(int(key), value)
            return
        raise TypeError(f"ring indices must be integers, not {type(key).__name__}")

    # -------------------- Introspection --------------------
    def __len__(self) -> int:
        return len(self._items)

    @property
    def capacity(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def cursor_position(self) -> int:
        """Current cursor; always 0 for an empty ring."""
        return self._cursor

    def to_list(self) -> List[T]:
        return list(self._items)

    def snapshot(self) -> RingSnapshot:
        return RingSnapshot(name=self.name, capacity=len(self._items), cursor=self._cursor, items=self.to_list())

    def __iter__(self) -> Iterator[T]:
        # single pass in position order; cursor untouched
        return iter(self.to_list())

    def __contains__(self, value: object) -> bool:
        return any(item is value or item == value for item in self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CircularBuffer):
            return NotImplemented
        return self._cursor == other._cursor and self.to_list() == other.to_list()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CircularBuffer(name={self.name!r}, items={self.to_list()!r}, cursor={self._cursor})"

    # -------------------- Reset --------------------
    def reset_cursor(self, to: int = 0) -> None:
        n = self._require_items("reset_cursor")
        self._cursor = to % n
        self.l.debug("cursor reset to %d", self._cursor)
