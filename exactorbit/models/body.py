"""
Celestial body models for hierarchical orbital kinematics.

This module defines two separate kinds of record:

1. :class:`Body`, the immutable descriptor a caller builds once. It names a
   body, says how it moves (:class:`StaticDynamics` or
   :class:`OrbitingDynamics`), how it spins and which satellites it carries.
2. :class:`SimulatedBody`, the runtime record a
   :class:`~exactorbit.algorithms.dynamics.simulation.Simulation` keeps for
   each registered body. It owns a copy of the descriptor, the integer ids
   linking it to its parent and satellites, and the derived position,
   velocity and orientation written by ``Simulation.update``.

Units are SI throughout: meters, seconds, kilograms, radians.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from exactorbit.algorithms.core import Matrix3, Vector3
from exactorbit.utils.conversions import to_decimal


@dataclass(frozen=True)
class StaticDynamics:
    """
    Fixed, time-independent global position.

    Static bodies anchor a hierarchy: ``Simulation.update`` walks down from
    every static body to decide what to evaluate.
    """
    position: Vector3


@dataclass(frozen=True)
class OrbitingDynamics:
    """
    Circular orbit around the parent body.

    Attributes
    ----------
    orbit_radius : Decimal
        Distance from the parent's center (m).
    orbit_period : Decimal
        Time for one revolution (s).
    orbit_plane_normal : Vector3
        Unit normal of the orbital plane; the body rotates about it with the
        right-hand rule, starting from ``(orbit_radius, 0, 0)`` at t = 0.
    """
    orbit_radius: Decimal
    orbit_period: Decimal
    orbit_plane_normal: Vector3

    def __post_init__(self):
        object.__setattr__(self, "orbit_radius", to_decimal(self.orbit_radius))
        object.__setattr__(self, "orbit_period", to_decimal(self.orbit_period))


Dynamics = Union[StaticDynamics, OrbitingDynamics]


@dataclass(frozen=True)
class Body:
    """
    Immutable description of a celestial body and its satellites.

    Parameters
    ----------
    name : str
        Identifier, assumed unique across the whole simulation.
    dynamics : StaticDynamics or OrbitingDynamics
        How the body's center moves.
    mass : Decimal
        Mass in kilograms.
    rotation_axis : Vector3
        Unit spin axis.
    rotation_period : Decimal
        Sidereal spin period in seconds.
    satellites : tuple of Body, optional
        Bodies orbiting this one, in registration order.
    """
    name: str
    dynamics: Dynamics
    mass: Decimal
    rotation_axis: Vector3
    rotation_period: Decimal
    satellites: Tuple["Body", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "mass", to_decimal(self.mass))
        object.__setattr__(self, "rotation_period", to_decimal(self.rotation_period))
        # Lists are accepted but stored as tuples.
        object.__setattr__(self, "satellites", tuple(self.satellites))

    @property
    def is_static(self):
        return isinstance(self.dynamics, StaticDynamics)

    def walk(self):
        """Yield this body and all its descendants in pre-order."""
        yield self
        for satellite in self.satellites:
            yield from satellite.walk()


@dataclass
class SimulatedBody:
    """
    Runtime state of a registered body.

    Attributes
    ----------
    id : int
        Dense index assigned at registration, parents before children.
    body : Body
        The simulation's own copy of the descriptor.
    parent : int or None
        Id of the parent record; None for a root.
    satellites : list of int
        Ids of the direct satellites, in descriptor order.
    position, velocity : Vector3
        Derived state from the last ``update``.
    orientation : Matrix3
        Spin orientation from the last ``update``.
    """
    id: int
    body: Body
    parent: Optional[int] = None
    satellites: List[int] = field(default_factory=list)
    position: Vector3 = field(default_factory=Vector3.zero)
    velocity: Vector3 = field(default_factory=Vector3.zero)
    orientation: Matrix3 = field(default_factory=Matrix3.identity)

    @property
    def name(self):
        return self.body.name

    @property
    def is_static(self):
        return self.body.is_static
