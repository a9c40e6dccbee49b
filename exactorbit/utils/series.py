"""
Truncated power series for decimal trigonometry.

This module provides the scalar helpers the kinematics layer is built on:

1. ``sin`` and ``cos`` evaluated as truncated Maclaurin series directly on
   ``decimal.Decimal`` values, so no binary float ever enters a rotation.
2. ``fract`` for the orbital/rotational phase of a time value.
3. ``f64_to_decimal`` for turning native floats into decimals through their
   shortest round-trip text instead of their binary expansion.

All arithmetic is rounded by the active decimal context, whose precision is
installed by :mod:`exactorbit.utils.constants`.
"""

import math
from decimal import Decimal, ROUND_DOWN


def sin(angle, terms):
    """
    Sine of a decimal angle from its first ``terms`` series terms.

    Parameters
    ----------
    angle : Decimal
        Angle in radians.
    terms : int
        Number of non-zero series terms to sum.

    Returns
    -------
    Decimal
        sum_{n < terms} (-1)^n x^(2n+1) / (2n+1)!

    Notes
    -----
    The series converges for every angle, but the number of terms needed
    grows with ``|angle|``. Callers in this package only pass angles in
    (-2π, 2π). There the first dropped term of the 32-term series, and so
    the truncation error, stays below 1e-37. That is the accuracy of the
    result, not the 64-digit working precision.
    """
    x = Decimal(angle)
    x_squared = x * x
    term = x
    total = x
    for n in range(1, terms):
        term = -term * x_squared / ((2 * n) * (2 * n + 1))
        total += term
    return total


def cos(angle, terms):
    """
    Cosine of a decimal angle from its first ``terms`` series terms.

    Parameters
    ----------
    angle : Decimal
        Angle in radians.
    terms : int
        Number of non-zero series terms to sum.

    Returns
    -------
    Decimal
        sum_{n < terms} (-1)^n x^(2n) / (2n)!
    """
    x = Decimal(angle)
    x_squared = x * x
    term = Decimal(1)
    total = Decimal(1)
    for n in range(1, terms):
        term = -term * x_squared / ((2 * n - 1) * (2 * n))
        total += term
    return total


def fract(value):
    """Fractional part ``value - trunc(value)``; keeps the sign of ``value``."""
    value = Decimal(value)
    return value - value.to_integral_value(rounding=ROUND_DOWN)


def f64_to_decimal(value):
    """
    Convert a native float to a Decimal via its shortest round-trip text.

    ``Decimal(0.1)`` would carry the full binary expansion of the float;
    ``repr`` gives ``'0.1'``, which is what the caller wrote.

    Raises
    ------
    ValueError
        If ``value`` is NaN or infinite.
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot convert non-finite float {value!r} to Decimal")
    return Decimal(repr(value))
