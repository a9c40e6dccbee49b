"""
Arbitrary-precision three-component vectors.

This module defines :class:`Vector3`, the value type used for every position,
velocity, axis and field vector in the simulation. Components are
``decimal.Decimal`` so that positions of order 1e20 m keep sub-meter detail.

Arithmetic follows the usual Python operator protocol:

- ``a + b``, ``a - b``, ``a * b``, ``a / b`` return new vectors
- ``a += b`` and friends update ``a`` in place
- the right-hand operand may be another vector (elementwise) or a scalar
  (broadcast to all three components)

Scalars may be ``Decimal``, ``int``, numeric text or ``float``; floats are
converted through their shortest round-trip text (see
:func:`exactorbit.utils.series.f64_to_decimal`).
"""

from decimal import Decimal

import numpy as np

from exactorbit.utils.conversions import to_decimal
from exactorbit.utils.errors import InvariantViolation, ViolationKind
from exactorbit.utils.series import f64_to_decimal


def _scalar(value):
    try:
        return to_decimal(value)
    except TypeError:
        return None


class Vector3:
    """
    Three-component decimal vector.

    Parameters
    ----------
    x, y, z : Decimal, int, str or float
        Components. Non-decimal inputs are converted with
        :func:`exactorbit.utils.conversions.to_decimal`.

    Notes
    -----
    Vectors are mutable (the in-place operators and :meth:`normalize` change
    them), so they compare by value but are not hashable.
    """

    __slots__ = ("x", "y", "z")
    __hash__ = None

    def __init__(self, x=0, y=0, z=0):
        self.x = to_decimal(x)
        self.y = to_decimal(y)
        self.z = to_decimal(z)

    @classmethod
    def zero(cls):
        return cls(Decimal(0), Decimal(0), Decimal(0))

    @classmethod
    def from_str(cls, x, y, z):
        """Build a vector by parsing three decimal literals exactly."""
        return cls(Decimal(x), Decimal(y), Decimal(z))

    @classmethod
    def from_f64(cls, x, y, z):
        """Build a vector from native floats via their round-trip text."""
        return cls(f64_to_decimal(x), f64_to_decimal(y), f64_to_decimal(z))

    def copy(self):
        return Vector3(self.x, self.y, self.z)

    def assign(self, other):
        """Overwrite this vector's components with those of ``other``."""
        self.x = other.x
        self.y = other.y
        self.z = other.z
        return self

    def length_squared(self):
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self):
        return self.length_squared().sqrt()

    def distance_to(self, other):
        return (self - other).length()

    def normalize(self):
        """
        Scale this vector in place to unit length.

        Raises
        ------
        InvariantViolation
            With kind ``DEGENERATE_NORMALIZE`` if the vector has zero length.
        """
        length = self.length()
        if length == 0:
            raise InvariantViolation(
                ViolationKind.DEGENERATE_NORMALIZE,
                "Cannot normalize a zero-length vector",
            )
        self /= length
        return self

    def normalized(self):
        """Unit vector in the direction of this one (see :meth:`normalize`)."""
        return self.copy().normalize()

    def dot(self, other):
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        """Right-handed cross product ``self × other``."""
        ax, ay, az = self.x, self.y, self.z
        bx, by, bz = other.x, other.y, other.z
        return Vector3(
            ay * bz - az * by,
            az * bx - ax * bz,
            ax * by - ay * bx,
        )

    def is_close(self, other, tol=Decimal("1e-30")):
        """True if every component differs from ``other`` by at most ``tol``."""
        tol = to_decimal(tol)
        return all(abs(a - b) <= tol for a, b in zip(self, other))

    def as_array(self):
        """Components as a float64 numpy array, for plotting and interop."""
        return np.array([float(self.x), float(self.y), float(self.z)], dtype=np.float64)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __neg__(self):
        return Vector3(-self.x, -self.y, -self.z)

    def __str__(self):
        return f"{{ x: {self.x}, y: {self.y}, z: {self.z} }}"

    def __repr__(self):
        return f"Vector3('{self.x}', '{self.y}', '{self.z}')"

    # Both forms of every operator are built on _combine: a vector operand is
    # applied per component, anything else is broadcast as a scalar.

    def _combine(self, other, op):
        if isinstance(other, Vector3):
            return op(self.x, other.x), op(self.y, other.y), op(self.z, other.z)
        scalar = _scalar(other)
        if scalar is None:
            return None
        return op(self.x, scalar), op(self.y, scalar), op(self.z, scalar)

    def _binary(self, other, op):
        components = self._combine(other, op)
        if components is None:
            return NotImplemented
        return Vector3(*components)

    def _inplace(self, other, op):
        components = self._combine(other, op)
        if components is None:
            return NotImplemented
        self.x, self.y, self.z = components
        return self

    def __add__(self, other):
        return self._binary(other, lambda a, b: a + b)

    def __sub__(self, other):
        return self._binary(other, lambda a, b: a - b)

    def __mul__(self, other):
        return self._binary(other, lambda a, b: a * b)

    def __truediv__(self, other):
        return self._binary(other, lambda a, b: a / b)

    def __radd__(self, other):
        return self._binary(other, lambda a, b: b + a)

    def __rsub__(self, other):
        return self._binary(other, lambda a, b: b - a)

    def __rmul__(self, other):
        return self._binary(other, lambda a, b: b * a)

    def __iadd__(self, other):
        return self._inplace(other, lambda a, b: a + b)

    def __isub__(self, other):
        return self._inplace(other, lambda a, b: a - b)

    def __imul__(self, other):
        return self._inplace(other, lambda a, b: a * b)

    def __itruediv__(self, other):
        return self._inplace(other, lambda a, b: a / b)
