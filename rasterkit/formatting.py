"""Type-keyword string formatting.

Escapes start with ``%`` and name the type of the next argument, for example
``%u32``, ``%s8``, ``%f64``, ``%fvec2`` or ``%fmat3``. Between the ``%`` and
the keyword an escape may carry:

* ``#``: the argument is a sequence, printed with its length.
* ``$``: the next argument gives the element count of a sequence.
* a left and a right precision, as digits or ``*`` (taken from the arguments),
  separated by ``.``.

A bare ``%`` that names no keyword prints the next argument with the type of
the previous escape. ``%%`` prints a percent sign.
"""

from __future__ import annotations

import math
import struct
import sys
from dataclasses import astuple, is_dataclass
from enum import Enum, auto
from itertools import islice
from typing import Any, Iterable, Iterator, Optional

__all__ = [
    "uint_to_string",
    "sint_to_string",
    "bits_to_string",
    "float_to_string",
    "format_string",
    "print_formatted",
]


class _Kind(Enum):
    B8 = auto()
    B16 = auto()
    B32 = auto()
    B64 = auto()
    V8 = auto()
    V16 = auto()
    V32 = auto()
    V64 = auto()
    U8 = auto()
    U16 = auto()
    U32 = auto()
    U64 = auto()
    S8 = auto()
    S16 = auto()
    S32 = auto()
    S64 = auto()
    F16 = auto()
    F32 = auto()
    F64 = auto()
    CSTRING = auto()
    STRING = auto()
    U32VEC2 = auto()
    S32VEC2 = auto()
    F32VEC2 = auto()
    F32VEC3 = auto()
    F32VEC4 = auto()
    F32MAT2 = auto()
    F32MAT3 = auto()
    F32MAT4 = auto()


# Kept sorted: the keyword search narrows a range over this table.
_KEYWORDS = (
    ("b16", _Kind.B16),
    ("b32", _Kind.B32),
    ("b64", _Kind.B64),
    ("b8", _Kind.B8),
    ("cstr", _Kind.CSTRING),
    ("f16", _Kind.F16),
    ("f32", _Kind.F32),
    ("f64", _Kind.F64),
    ("fmat2", _Kind.F32MAT2),
    ("fmat3", _Kind.F32MAT3),
    ("fmat4", _Kind.F32MAT4),
    ("fvec2", _Kind.F32VEC2),
    ("fvec3", _Kind.F32VEC3),
    ("fvec4", _Kind.F32VEC4),
    ("s16", _Kind.S16),
    ("s32", _Kind.S32),
    ("s64", _Kind.S64),
    ("s8", _Kind.S8),
    ("str", _Kind.STRING),
    ("svec2", _Kind.S32VEC2),
    ("u16", _Kind.U16),
    ("u32", _Kind.U32),
    ("u64", _Kind.U64),
    ("u8", _Kind.U8),
    ("uvec2", _Kind.U32VEC2),
    ("v16", _Kind.V16),
    ("v32", _Kind.V32),
    ("v64", _Kind.V64),
    ("v8", _Kind.V8),
)

_BIT_WIDTHS = {
    _Kind.V8: 8, _Kind.V16: 16, _Kind.V32: 32, _Kind.V64: 64,
    _Kind.U8: 8, _Kind.U16: 16, _Kind.U32: 32, _Kind.U64: 64,
    _Kind.S8: 8, _Kind.S16: 16, _Kind.S32: 32, _Kind.S64: 64,
}

_VECTORS = {
    _Kind.U32VEC2: (_Kind.U32, 2),
    _Kind.S32VEC2: (_Kind.S32, 2),
    _Kind.F32VEC2: (_Kind.F32, 2),
    _Kind.F32VEC3: (_Kind.F32, 3),
    _Kind.F32VEC4: (_Kind.F32, 4),
}

_MATRICES = {
    _Kind.F32MAT2: 2,
    _Kind.F32MAT3: 3,
    _Kind.F32MAT4: 4,
}


def uint_to_string(n: int) -> str:
    """Decimal digits of a non-negative integer."""
    if n < 0:
        raise ValueError(f"expected a non-negative integer, got {n}")
    return str(n)


def sint_to_string(n: int) -> str:
    """Decimal digits of an integer, with a leading ``-`` when negative."""
    return str(n)


def bits_to_string(value: int, bit_count: int) -> str:
    """The low ``bit_count`` bits of ``value``, most significant first."""
    return "".join(str((value >> i) & 1) for i in reversed(range(bit_count)))


def _round_half_away(x: float) -> int:
    whole = math.floor(x)
    return whole + 1 if x - whole >= 0.5 else whole


def float_to_string(n: float, left_precision: int = 0, right_precision: int = 0) -> str:
    """Format a float.

    ``left_precision`` is the total number of figures wanted; when the integer
    part (with its sign) already uses that many or more, only it is returned.
    With no left precision, ``right_precision`` gives the number of fractional
    digits, or one when it is zero too.
    """
    if math.isnan(n):
        return "nan"
    if math.isinf(n):
        return "-inf" if n < 0 else "inf"
    negative = n < 0
    if negative:
        n = -n
    ipart = int(n)
    fpart = n - ipart
    head = ("-" if negative else "") + uint_to_string(ipart)
    if left_precision > len(head):
        figures = left_precision - len(head)
    elif left_precision == 0:
        figures = right_precision if right_precision else 1
    else:
        return head
    scaled = _round_half_away(fpart * float(10 ** figures))
    return head + "." + uint_to_string(scaled)[:figures]


def _is_digit(c: str) -> bool:
    return c != "" and "0" <= c <= "9"


def _round_float(code: str, value: float) -> float:
    try:
        return struct.unpack(code, struct.pack(code, value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _components(value: Any) -> tuple:
    if is_dataclass(value) and not isinstance(value, type):
        return astuple(value)
    return tuple(value)


class _Formatter:
    """Walks a format string, consuming arguments as escapes ask for them."""

    def __init__(self, fmt: str, args: Iterable[Any]) -> None:
        self.fmt = fmt
        self.pos = 0
        self.args: Iterator[Any] = iter(args)
        self.out: list[str] = []
        self.kind: Optional[_Kind] = None
        self.last_kind: Optional[_Kind] = None
        self.left = 0
        self.right = 0
        self.is_array = False
        self.hidden_count = False
        self.count = 0

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.fmt[index] if index < len(self.fmt) else ""

    def _next_arg(self) -> Any:
        try:
            return next(self.args)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def _read_uint(self) -> int:
        start = self.pos
        while _is_digit(self._peek()):
            self.pos += 1
        return int(self.fmt[start:self.pos])

    def run(self) -> str:
        while self.pos < len(self.fmt):
            ch = self.fmt[self.pos]
            if ch == "%":
                self.pos += 1
                if self.pos >= len(self.fmt):
                    self._emit()
                    break
                self._escape()
            else:
                self.out.append(ch)
                self.pos += 1
        return "".join(self.out)

    def _escape(self) -> None:
        start = self.pos
        if self._peek() == "%":
            self.out.append("%")
            self.pos += 1
            return
        if self._peek() == "#":
            self.pos += 1
            self.is_array = True
            self.hidden_count = True

        precision_set = False
        if _is_digit(self._peek()):
            self.left = self._read_uint()
            precision_set = True
        elif self._peek() == "*":
            self.left = int(self._next_arg())
            self.pos += 1
            precision_set = True
        elif self._peek() == "$":
            self.count = int(self._next_arg())
            self.pos += 1
            self.hidden_count = False

        has_dot = self._peek() == "."
        if has_dot:
            self.pos += 1

        if _is_digit(self._peek()):
            self.right = self._read_uint()
            precision_set = True
        elif self._peek() == "*":
            self.right = int(self._next_arg())
            self.pos += 1
            precision_set = True

        if has_dot and not precision_set:
            self.left = self.right = 0

        if self.pos >= len(self.fmt):
            return

        match = self._match_keyword()
        if match is None:
            self.pos = start
            self._emit()
            return
        kind, length = match
        self.last_kind = self.kind
        self.kind = kind
        if kind != self.last_kind and not precision_set:
            self.left = self.right = 0
        self._emit()
        self.pos += length

    def _match_keyword(self) -> Optional[tuple[_Kind, int]]:
        text = self.fmt[self.pos:]
        lo, hi = 0, len(_KEYWORDS) - 1
        j = 0
        while True:
            matches = 0
            i = lo
            while i < hi:
                word = _KEYWORDS[i][0]
                if len(word) > j:
                    if j < len(text) and word[j] == text[j]:
                        if matches == 0:
                            lo = i
                        matches += 1
                    elif matches:
                        hi = i
                i += 1
            j += 1
            if matches == 0:
                return None
            if matches == 1 and j == len(_KEYWORDS[lo][0]):
                return _KEYWORDS[lo][1], j

    def _scalar(self, kind: Optional[_Kind], value: Any) -> str:
        if kind in (_Kind.V8, _Kind.V16, _Kind.V32, _Kind.V64):
            width = _BIT_WIDTHS[kind]
            return bits_to_string(int(value), width)
        if kind in (_Kind.U8, _Kind.U16, _Kind.U32, _Kind.U64):
            width = _BIT_WIDTHS[kind]
            return uint_to_string(int(value) & ((1 << width) - 1))
        if kind in (_Kind.S8, _Kind.S16, _Kind.S32, _Kind.S64):
            width = _BIT_WIDTHS[kind]
            span = 1 << width
            bias = span >> 1
            return sint_to_string(((int(value) + bias) % span) - bias)
        if kind is _Kind.F16:
            return float_to_string(_round_float("<e", float(value)), self.left, self.right)
        if kind is _Kind.F32:
            return float_to_string(_round_float("<f", float(value)), self.left, self.right)
        if kind is _Kind.F64:
            return float_to_string(float(value), self.left, self.right)
        if kind in (_Kind.CSTRING, _Kind.STRING):
            return str(value)
        return ""

    def _emit(self) -> None:
        kind = self.kind
        if self.is_array:
            data = self._next_arg()
            if self.hidden_count:
                count = 0 if data is None else len(data)
            else:
                count = self.count
            self._array(kind, count, data)
            return
        if kind in _VECTORS:
            scalar_kind, size = _VECTORS[kind]
            self._vector(scalar_kind, _components(self._next_arg())[:size])
            return
        if kind in _MATRICES:
            size = _MATRICES[kind]
            self._matrix(size, _components(self._next_arg()))
            return
        if kind is None or kind in (_Kind.B8, _Kind.B16, _Kind.B32, _Kind.B64):
            name = "no type" if kind is None else kind.name
            raise ValueError(f"this keyword can not be printed: {name}")
        self.out.extend(self._scalar(kind, self._next_arg()))

    def _vector(self, kind: _Kind, values: tuple) -> None:
        self.out.append("(")
        for value in values:
            self.out.extend(self._scalar(kind, value))
            self.out.extend(", ")
        del self.out[-2:]
        self.out.append(")")

    def _matrix(self, size: int, values: tuple) -> None:
        for row_start in range(0, size * size, size):
            self.out.append("[")
            for value in values[row_start:row_start + size]:
                self.out.extend(self._scalar(_Kind.F32, value))
                self.out.extend(", ")
            del self.out[-2:]
            self.out.extend("]\n")
        del self.out[-1:]
        self.out.extend(".\n")

    def _array(self, kind: Optional[_Kind], count: int, data: Any) -> None:
        first = min(count, self.left) if self.left else 0
        last = min(count, self.right) if self.right else count
        self.out.extend(f"[{count}]")
        if first <= last and (first != 0 or last != count):
            self.out.extend(f"{{{first}:{last}}}")
        self.out.append("(")
        for value in islice(data or (), count):
            self.out.extend(self._scalar(kind, value))
            self.out.extend(", ")
        del self.out[-2:]
        self.out.extend(").")


def format_string(fmt: str, *args: Any) -> str:
    """Render ``fmt`` with ``args`` according to its type-keyword escapes.

    Raises ``TypeError`` when the arguments run out and ``ValueError`` for an
    escape whose type cannot be printed.
    """
    return _Formatter(fmt, args).run()


def print_formatted(fmt: str, *args: Any) -> int:
    """Format, write to standard output and return the number of characters."""
    text = format_string(fmt, *args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text)