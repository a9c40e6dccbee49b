"""
exactorbit - arbitrary-precision hierarchical orbital kinematics.

Positions, orientations, velocities, local gravity and spin surface velocity
for a tree of celestial bodies, computed in base-10 decimals so nothing drifts
over astronomical distances and times.
"""

# algorithms must load before models: models.body imports algorithms.core
from .algorithms import Matrix3, Simulation, Vector3, sample_system, sample_trajectory
from .models import Body, OrbitingDynamics, SimulatedBody, StaticDynamics
from .utils.errors import InvariantViolation, ViolationKind

__version__ = "0.1.0"

__all__ = [
    'Body',
    'InvariantViolation',
    'Matrix3',
    'OrbitingDynamics',
    'SimulatedBody',
    'Simulation',
    'StaticDynamics',
    'Vector3',
    'ViolationKind',
    'sample_system',
    'sample_trajectory'
]
