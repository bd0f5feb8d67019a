"""Open-addressing map from strings to values, with a fixed capacity."""

from __future__ import annotations

from itertools import chain
from typing import Any, Iterator, Optional, Union

__all__ = ["char_is_printable", "hash_string", "StringMap"]

_U64_MASK = (1 << 64) - 1


def char_is_printable(c: Union[str, int]) -> bool:
    """True for the printable ASCII range, space up to and including DEL."""
    code = ord(c) if isinstance(c, str) else c
    return 32 <= code < 128


def hash_string(text: Union[str, bytes]) -> int:
    """64-bit string hash, seeded with 5381, mixing each byte in twice."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    value = 5381
    for byte in data:
        signed = byte - 256 if byte >= 128 else byte
        value = (value * 33 + signed) & _U64_MASK
        value = (value * 33 + signed) & _U64_MASK
    return value


def _next_power_of_two(n: int) -> int:
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


class StringMap:
    """Linear-probing hash map keyed by strings.

    The capacity is rounded up to a power of two and never grows. Inserting
    an existing key adds a second entry; lookups find the earlier one.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = _next_power_of_two(capacity)
        self._mask = self._capacity - 1
        self._slots: list[Optional[tuple[str, Any]]] = [None] * self._capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def _probe(self, key: str) -> Iterator[int]:
        start = hash_string(key) & self._mask
        return chain(range(start, self._capacity), range(start))

    def insert(self, key: str, value: Any) -> int:
        """Store ``value`` under ``key`` and return the slot used.

        Raises ``OverflowError`` when every slot is taken.
        """
        for index in self._probe(key):
            if self._slots[index] is None:
                self._slots[index] = (key, value)
                return index
        raise OverflowError("string map is full")

    def lookup(self, key: str) -> Any:
        """The value stored under ``key``; raises ``KeyError`` if absent."""
        for index in self._probe(key):
            slot = self._slots[index]
            if slot is None:
                break
            if slot[0] == key:
                return slot[1]
        raise KeyError(key)

    def get(self, key: str, default: Any = None) -> Any:
        """The value stored under ``key``, or ``default``."""
        try:
            return self.lookup(key)
        except KeyError:
            return default

    def __getitem__(self, key: str) -> Any:
        return self.lookup(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, bytes)):
            return False
        try:
            self.lookup(key)  # type: ignore[arg-type]
        except KeyError:
            return False
        return True

    def __len__(self) -> int:
        return sum(slot is not None for slot in self._slots)