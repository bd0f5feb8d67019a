"""Small fixed-size vectors and matrices for 2D graphics work.

Integer vectors wrap like 32-bit machine integers: ``UVec2`` is unsigned and
``SVec2`` is two's-complement signed. ``FVec2``, ``FVec4`` and the matrices
hold floats.
"""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass, fields
from typing import Callable, Union

__all__ = [
    "lerp",
    "UVec2",
    "SVec2",
    "FVec2",
    "unit2",
    "normal2",
    "normal3",
    "FVec3",
    "FVec4",
    "FMat2",
    "FMat3",
    "FMat4",
]

_U32_MASK = 0xFFFFFFFF
_S32_BIAS = 1 << 31
_U32_SPAN = 1 << 32

Number = Union[int, float]


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation: ``a`` at ``t == 0``, ``b`` at ``t == 1``."""
    return (b - a) * t + a


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class _Vec2:
    """Operations shared by the two-component vectors."""

    __slots__ = ()

    x: Number
    y: Number

    def _apply(self, other, op: Callable[[Number, Number], Number]):
        cls = type(self)
        if isinstance(other, _Vec2):
            return cls(op(self.x, other.x), op(self.y, other.y))
        return cls(op(self.x, other), op(self.y, other))

    def __add__(self, other):
        return self._apply(other, lambda a, b: a + b)

    def __sub__(self, other):
        return self._apply(other, lambda a, b: a - b)

    def __mul__(self, other):
        return self._apply(other, lambda a, b: a * b)

    def __truediv__(self, other):
        return self._apply(other, type(self)._div)

    def __mod__(self, other):
        return self._apply(other, lambda a, b: math.fmod(a, b))

    def __iter__(self):
        yield self.x
        yield self.y

    def maximum(self, other):
        """Component-wise maximum with a vector or a scalar."""
        return self._apply(other, max)

    def minimum(self, other):
        """Component-wise minimum with a vector or a scalar."""
        return self._apply(other, min)

    @classmethod
    def splat(cls, value):
        """A vector with both components set to ``value``."""
        return cls(value, value)

    @classmethod
    def cast(cls, v: "_Vec2"):
        """Convert another two-component vector to this type."""
        return cls(v.x, v.y)


class _IntVec2(_Vec2):
    __slots__ = ()

    def __rshift__(self, sh: int):
        return self.rshift(sh)

    def __lshift__(self, sh: int):
        return self.lshift(sh)


@dataclass(frozen=True, slots=True)
class UVec2(_IntVec2):
    """Unsigned 32-bit integer vector."""

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", self._coerce(self.x))
        object.__setattr__(self, "y", self._coerce(self.y))

    @staticmethod
    def _coerce(value: Number) -> int:
        return int(value) & _U32_MASK

    @staticmethod
    def _div(a: Number, b: Number) -> int:
        return int(a) // int(b)

    def area(self) -> int:
        """Product of the two components, wrapped to 32 bits."""
        return self._coerce(self.x * self.y)

    def flip(self) -> "UVec2":
        """The vector with its components swapped."""
        return UVec2(self.y, self.x)

    def rshift(self, sh: int) -> "UVec2":
        """Shift both components right by ``sh`` bits."""
        return UVec2(self.x >> sh, self.y >> sh)

    def lshift(self, sh: int) -> "UVec2":
        """Shift both components left by ``sh`` bits, wrapping to 32 bits."""
        return UVec2(self.x << sh, self.y << sh)


@dataclass(frozen=True, slots=True)
class SVec2(_IntVec2):
    """Signed 32-bit integer vector."""

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", self._coerce(self.x))
        object.__setattr__(self, "y", self._coerce(self.y))

    @staticmethod
    def _coerce(value: Number) -> int:
        return ((int(value) + _S32_BIAS) % _U32_SPAN) - _S32_BIAS

    @staticmethod
    def _div(a: Number, b: Number) -> int:
        return _trunc_div(int(a), int(b))

    def area(self) -> int:
        """Product of the two components, wrapped to 32 bits."""
        return self._coerce(self.x * self.y)

    def flip(self) -> "SVec2":
        """The vector with its components swapped."""
        return SVec2(self.y, self.x)

    def rshift(self, sh: int) -> "SVec2":
        """Arithmetic shift of both components right by ``sh`` bits."""
        return SVec2(self.x >> sh, self.y >> sh)

    def lshift(self, sh: int) -> "SVec2":
        """Shift both components left by ``sh`` bits, wrapping to 32 bits."""
        return SVec2(self.x << sh, self.y << sh)


@dataclass(frozen=True, slots=True)
class FVec2(_Vec2):
    """Floating point two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @staticmethod
    def _coerce(value: Number) -> float:
        return float(value)

    @staticmethod
    def _div(a: Number, b: Number) -> float:
        return a / b

    def __neg__(self) -> "FVec2":
        return FVec2(-self.x, -self.y)

    def area(self) -> float:
        """Product of the two components."""
        return self.x * self.y

    def flip(self) -> "FVec2":
        """The vector with its components swapped."""
        return FVec2(self.y, self.x)

    def perp(self) -> "FVec2":
        """The vector rotated a quarter turn: ``(-y, x)``."""
        return FVec2(-self.y, self.x)

    def floor(self) -> "FVec2":
        return FVec2(math.floor(self.x), math.floor(self.y))

    def inv(self) -> "FVec2":
        """Component-wise reciprocal."""
        return FVec2(1.0 / self.x, 1.0 / self.y)

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def distance_squared(self, other: "FVec2") -> float:
        return (other - self).magnitude_squared()

    def distance(self, other: "FVec2") -> float:
        return (other - self).magnitude()

    def lerp(self, other: "FVec2", t: float) -> "FVec2":
        return FVec2(lerp(self.x, other.x, t), lerp(self.y, other.y, t))

    def unit(self) -> "FVec2":
        """The vector scaled to length one."""
        return self / self.magnitude()

    def normal(self) -> "FVec2":
        """The unit vector perpendicular to this one."""
        return self.unit().perp()

    def dot(self, other: "FVec2") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "FVec2") -> float:
        """The z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def atan(self) -> float:
        """Angle of the vector in radians, as ``atan2(y, x)``."""
        return math.atan2(self.y, self.x)

    def scale_rotate(self, scale: float, radians: float) -> "FVec2":
        """Scale uniformly, then rotate by ``radians``."""
        mat = FMat2.rotate(radians) @ FMat2.scale(scale, scale)
        return mat.transform(self)


def unit2(a: FVec2, b: FVec2) -> FVec2:
    """Unit vector pointing from ``a`` to ``b``."""
    return (b - a).unit()


def normal2(a: FVec2, b: FVec2) -> FVec2:
    """Unit normal of the segment from ``a`` to ``b``."""
    return (b - a).unit().perp()


def normal3(a: FVec2, b: FVec2, c: FVec2) -> FVec2:
    """Unit normal of the average direction of ``b - a`` and ``c - b``."""
    return (unit2(a, b) + unit2(b, c)).normal()


@dataclass(frozen=True, slots=True)
class FVec3:
    """Three floats, used as an RGB triple."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0


@dataclass(frozen=True, slots=True)
class FVec4:
    """Four floats, used as an RGBA colour."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0

    def _apply(self, other, op: Callable[[float, float], float]) -> "FVec4":
        if isinstance(other, FVec4):
            return FVec4(*(op(p, q) for p, q in zip(astuple(self), astuple(other))))
        return FVec4(*(op(p, other) for p in astuple(self)))

    def __add__(self, other) -> "FVec4":
        return self._apply(other, lambda p, q: p + q)

    def __sub__(self, other) -> "FVec4":
        return self._apply(other, lambda p, q: p - q)

    def __mul__(self, other) -> "FVec4":
        return self._apply(other, lambda p, q: p * q)

    def __truediv__(self, other) -> "FVec4":
        return self._apply(other, lambda p, q: p / q)

    def __iter__(self):
        return iter(astuple(self))

    def __str__(self) -> str:
        return f"fvec4({self.r:f}, {self.g:f}, {self.b:f}, {self.a:f})"

    def lerp(self, other: "FVec4", t: float) -> "FVec4":
        return self._apply(other, lambda p, q: lerp(p, q, t))

    def clamp(self, minimum: float, maximum: float) -> "FVec4":
        """Return the vector as it is; clamping is switched off."""
        return self

    def is_zero(self) -> bool:
        return all(component == 0.0 for component in astuple(self))


@dataclass(frozen=True, slots=True)
class FMat2:
    """Row-major 2x2 matrix ``[[a, b], [c, d]]``."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0

    @classmethod
    def identity(cls) -> "FMat2":
        return cls(1.0, 0.0, 0.0, 1.0)

    @classmethod
    def zero(cls) -> "FMat2":
        return cls()

    @classmethod
    def scale(cls, x: float, y: float) -> "FMat2":
        return cls(x, 0.0, 0.0, y)

    @classmethod
    def shear(cls, x: float, y: float) -> "FMat2":
        return cls(1.0, x, y, 1.0)

    @classmethod
    def rotate(cls, radians: float) -> "FMat2":
        s = math.sin(radians)
        c = math.cos(radians)
        return cls(c, -s, s, c)

    def __matmul__(self, o: "FMat2") -> "FMat2":
        return FMat2(
            self.a * o.a + self.b * o.c, self.a * o.b + self.b * o.d,
            self.c * o.a + self.d * o.c, self.c * o.b + self.d * o.d,
        )

    def transform(self, v: FVec2) -> FVec2:
        """Apply the matrix to the column vector ``v``."""
        return FVec2(v.x * self.a + v.y * self.b, v.x * self.c + v.y * self.d)


@dataclass(frozen=True, slots=True)
class FMat3:
    """Row-major 3x3 matrix ``[[a, b, c], [d, e, f], [g, h, i]]``."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 0.0
    f: float = 0.0
    g: float = 0.0
    h: float = 0.0
    i: float = 0.0

    @classmethod
    def identity(cls) -> "FMat3":
        return cls(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

    @classmethod
    def zero(cls) -> "FMat3":
        return cls()

    @classmethod
    def translate(cls, x: float, y: float) -> "FMat3":
        return cls(1.0, 0.0, x, 0.0, 1.0, y, 0.0, 0.0, 1.0)

    @classmethod
    def scale(cls, x: float, y: float) -> "FMat3":
        return cls(x, 0.0, 0.0, 0.0, y, 0.0, 0.0, 0.0, 1.0)

    @classmethod
    def shear(cls, x: float, y: float) -> "FMat3":
        return cls(1.0, x, 0.0, y, 1.0, 0.0, 0.0, 0.0, 1.0)

    @classmethod
    def rotate(cls, radians: float) -> "FMat3":
        c = math.cos(radians)
        s = math.sin(radians)
        return cls(c, -s, 0.0, s, c, 0.0, 0.0, 0.0, 1.0)

    @classmethod
    def product(cls, *args: "FMat3") -> "FMat3":
        """Multiply the matrices left to right, starting from the identity."""
        result = cls.identity()
        for mat in args:
            result = result @ mat
        return result

    def _rows(self):
        return ((self.a, self.b, self.c), (self.d, self.e, self.f), (self.g, self.h, self.i))

    def __iter__(self):
        return iter(astuple(self))

    def __add__(self, other: "FMat3") -> "FMat3":
        return FMat3(*(p + q for p, q in zip(astuple(self), astuple(other))))

    def __matmul__(self, other: "FMat3") -> "FMat3":
        cols = list(zip(*other._rows()))
        return FMat3(
            *(sum(r * c for r, c in zip(row, col)) for row in self._rows() for col in cols)
        )

    def translate_add(self, x: float, y: float) -> "FMat3":
        """The matrix with ``(x, y)`` added to its translation part."""
        values = {field.name: getattr(self, field.name) for field in fields(self)}
        values["c"] += x
        values["f"] += y
        return FMat3(**values)

    def lerp(self, other: "FMat3", t: float) -> "FMat3":
        return FMat3(*(lerp(p, q, t) for p, q in zip(astuple(self), astuple(other))))

    def transform(self, v: FVec2) -> FVec2:
        """Apply the affine transform to the point ``v``."""
        return FVec2(
            self.a * v.x + self.b * v.y + self.c,
            self.d * v.x + self.e * v.y + self.f,
        )

    def padded(self) -> tuple:
        """The nine values as three rows of four, each row padded with zero."""
        return tuple(value for row in self._rows() for value in (*row, 0.0))

    def affine_offset(self) -> FVec2:
        """The translation part of the transform."""
        return FVec2(self.c, self.f)

    def affine_det(self) -> float:
        """Determinant of the linear 2x2 part."""
        return self.a * self.e - self.b * self.d

    def affine_inverse(self) -> "FMat3":
        """Inverse of an affine transform.

        Raises ``ValueError`` when the linear part is singular.
        """
        det = self.affine_det()
        if det == 0.0:
            raise ValueError(f"matrix is not invertible: {self}")
        inv_det = 1.0 / det
        inv_a = inv_det * self.e
        inv_b = -inv_det * self.b
        inv_d = -inv_det * self.d
        inv_e = inv_det * self.a
        inv_c = -(inv_a * self.c + inv_b * self.f)
        inv_f = -(inv_d * self.c + inv_e * self.f)
        return FMat3(inv_a, inv_b, inv_c, inv_d, inv_e, inv_f, 0.0, 0.0, 1.0)

    def __str__(self) -> str:
        lines = ["mat3:"]
        lines.extend("[ " + " ".join(f"{v:f}" for v in row) + " ]" for row in self._rows())
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class FMat4:
    """Row-major 4x4 matrix of floats."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 0.0
    f: float = 0.0
    g: float = 0.0
    h: float = 0.0
    i: float = 0.0
    j: float = 0.0
    k: float = 0.0
    l: float = 0.0  # noqa: E741
    m: float = 0.0
    n: float = 0.0
    o: float = 0.0
    p: float = 0.0