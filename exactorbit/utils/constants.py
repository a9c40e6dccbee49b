"""
Physical constants and precision settings for exact orbital kinematics.

This module holds every process-wide value the simulation relies on. They are
computed once, at import, and never mutated afterwards:

1. Working precision of the decimal context and of mpmath
2. The number of series terms used for trigonometry
3. Universal constants (gravitational constant, astronomical unit, 2π)
4. Reference masses and distances for the Sun-Earth-Moon system

All physical values are ``decimal.Decimal`` in SI units, parsed from decimal
text so that they are exactly the literal written here.

References
----------
- IAU 2012 Resolution B2 (astronomical unit)
- CODATA 2014 (gravitational constant, 6.67408e-11)
"""

import decimal
from decimal import Decimal

import mpmath as mp

from exactorbit.utils.series import f64_to_decimal

# Precision
#----------

#: int: Significant digits carried by every decimal operation
#: Positions are ~1e20 m with sub-meter detail, so 28 digits is not enough
DECIMAL_PRECISION = 64

#: int: Non-zero terms summed by the sin/cos series
SERIES_TERMS = 32

# DefaultContext seeds the context of threads started later
decimal.DefaultContext.prec = DECIMAL_PRECISION
decimal.getcontext().prec = DECIMAL_PRECISION
mp.mp.dps = DECIMAL_PRECISION + 10

# Universal constants
#--------------------

#: Decimal: Universal gravitational constant (m^3 kg^-1 s^-2)
G = Decimal("0.0000000000667408")

#: Decimal: Astronomical unit (m)
AU_METERS = f64_to_decimal(149_597_870_691.0)

#: Decimal: 2π to the working precision
TWO_PI = Decimal(mp.nstr(2 * mp.pi, DECIMAL_PRECISION + 5, strip_zeros=False))

#: Decimal: 1/2, used by the quaternion extraction
HALF = Decimal("0.5")

# Reference bodies
#-----------------

#: Decimal: Mass of Sun (kg)
M_sun = Decimal("1988470") * Decimal(10) ** 24

#: Decimal: Mass of Earth (kg)
M_earth = Decimal("5.97219") * Decimal(10) ** 24

#: Decimal: Mass of Moon (kg)
M_moon = Decimal("0.073") * Decimal(10) ** 24

#: Decimal: Mean radius of Earth (m)
R_earth = Decimal("6371000")

#: Decimal: Average Earth-Moon distance (m)
R_earth_moon = Decimal("384400000")

#: int: Seconds in a day
DAY = 24 * 3600
