"""Fixed-capacity containers: a cursor ring and a power-of-two ring buffer."""

from __future__ import annotations

import copy
from typing import Generic, Iterator, List, Optional, TypeVar

__all__ = [
    "next_power_of_two",
    "simple_growth",
    "cpython_growth",
    "Ring",
    "RingBuffer",
]

T = TypeVar("T")

_U32_MASK = 0xFFFFFFFF


def next_power_of_two(n: int) -> int:
    """The smallest power of two that is at least ``n`` (1 for ``n <= 1``)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def simple_growth(capacity: int) -> int:
    """New capacity for a full array: double the capacity plus one."""
    return (capacity + 1) * 2


def cpython_growth(capacity: int) -> int:
    """New capacity for a full array, grown by about an eighth and kept a multiple of four."""
    grown = capacity + 1
    return (grown + (grown >> 3) + 6) & ~3


class Ring(Generic[T]):
    """A fixed number of slots with a cursor that wraps around."""

    def __init__(self, capacity: int, initial: Optional[T] = None) -> None:
        if capacity < 1:
            raise ValueError(f"ring capacity must be positive, got {capacity}")
        self._items: List[Optional[T]] = [copy.copy(initial) for _ in range(capacity)]
        self._index = 0

    @property
    def capacity(self) -> int:
        return len(self._items)

    @property
    def index(self) -> int:
        return self._index

    def current(self) -> Optional[T]:
        """The item under the cursor."""
        return self._items[self._index]

    def next(self) -> Optional[T]:
        """Advance the cursor one slot, wrapping, and return the new item."""
        self._index = (self._index + 1) % self.capacity
        return self.current()

    def prev(self) -> Optional[T]:
        """Move the cursor back one slot and return the new item.

        The step back wraps as a 32-bit unsigned index before the modulo, so
        from slot zero it lands on the last slot only for power-of-two sizes.
        """
        self._index = ((self._index - 1) & _U32_MASK) % self.capacity
        return self.current()

    def fill(self, value: T) -> "Ring[T]":
        """Set every slot to a copy of ``value``."""
        self._items = [copy.copy(value) for _ in self._items]
        return self

    def __getitem__(self, index: int) -> Optional[T]:
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._items[index] = value

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Optional[T]]:
        return iter(self._items)


class RingBuffer(Generic[T]):
    """First-in first-out queue over a power-of-two number of slots.

    Pushing into a full buffer does not move the tail: the count starts over
    and the oldest slots are overwritten.
    """

    def __init__(self, capacity: int) -> None:
        size = next_power_of_two(capacity)
        self._items: List[Optional[T]] = [None] * size
        self._mask = size - 1
        self._head = 0
        self._tail = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._items)

    @property
    def head(self) -> int:
        return self._head

    @property
    def tail(self) -> int:
        return self._tail

    def push(self, value: T) -> None:
        """Append ``value`` at the head."""
        if self._count == self.capacity:
            self._count = 0
        self._items[self._head] = value
        self._head = (self._head + 1) & self._mask
        self._count += 1

    def pop(self) -> T:
        """Remove and return the item at the tail; ``IndexError`` when empty."""
        if self._count == 0:
            raise IndexError("pop from an empty ring buffer")
        value = self._items[self._tail]
        self._tail = (self._tail + 1) & self._mask
        self._count -= 1
        return value  # type: ignore[return-value]

    def drain(self) -> Iterator[T]:
        """Pop items until the buffer is empty."""
        while self._count:
            yield self.pop()

    def __len__(self) -> int:
        return self._count