"""
Scalar conversions between native numbers, decimals and units.
"""

import numbers
from decimal import Decimal

from exactorbit.utils.constants import AU_METERS
from exactorbit.utils.series import f64_to_decimal


def to_decimal(value):
    """
    Coerce a scalar to ``Decimal``.

    Decimals pass through, integers (numpy integer scalars included) and
    numeric strings are parsed exactly, and any other real number, such as
    ``float`` or ``numpy.float32``, goes through :func:`f64_to_decimal`.

    Raises
    ------
    TypeError
        For booleans and non-numeric types.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not valid scalar values")
    if isinstance(value, str):
        return Decimal(value)
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    if isinstance(value, numbers.Real):
        return f64_to_decimal(float(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def decimal_to_f64(value):
    """Nearest float to a decimal, through its text form."""
    return float(str(value))


def au_to_meters(au):
    return to_decimal(au) * AU_METERS


def meters_to_au(meters):
    return to_decimal(meters) / AU_METERS
