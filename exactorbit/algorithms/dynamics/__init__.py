"""
Hierarchical orbital kinematics.

This package provides the simulation engine and helpers built on it:
- Body registration and hierarchy resolution
- Closed-form position, velocity and orientation updates
- Local gravity field and surface velocity queries
- Trajectory sampling over time
"""

from .simulation import Simulation
from .sampling import sample_system, sample_trajectory

__all__ = [
    'Simulation',
    'sample_system',
    'sample_trajectory'
]
