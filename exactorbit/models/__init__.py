"""
Data models for bodies in a hierarchical simulation.
"""

from .body import (
    Body,
    Dynamics,
    OrbitingDynamics,
    SimulatedBody,
    StaticDynamics
)

# Export all model classes
__all__ = [
    'Body',
    'Dynamics',
    'OrbitingDynamics',
    'SimulatedBody',
    'StaticDynamics'
]
