"""
Exact orbital kinematics algorithms.

This package is organized into two submodules:

- core:      Decimal vectors and rotation matrices
- dynamics:  The hierarchical simulation engine and trajectory sampling
"""

from .core import Matrix3, Vector3
from .dynamics import Simulation, sample_system, sample_trajectory

__all__ = [
    # Linear algebra
    'Vector3',
    'Matrix3',

    # Dynamics
    'Simulation',
    'sample_system',
    'sample_trajectory'
]
