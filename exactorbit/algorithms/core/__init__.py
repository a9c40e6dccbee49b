"""
Decimal linear algebra for exact orbital kinematics.

This package contains the vector and rotation-matrix types every other part
of the simulation is written against.
"""

from .vector import Vector3
from .matrix import Matrix3

__all__ = [
    'Vector3',
    'Matrix3'
]
