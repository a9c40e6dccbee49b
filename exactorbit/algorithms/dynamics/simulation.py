"""
Hierarchical closed-form orbital kinematics.

This module provides :class:`Simulation`, the engine that turns a tree of
:class:`~exactorbit.models.body.Body` descriptors into flat runtime records and
evaluates them at an absolute time.

Evaluation model
----------------
Orbits are circular and closed-form: a body's offset from its parent depends
only on ``t mod period``, never on previous steps, so ``update(t)`` can be
called with any time in any order and always gives the same state. Positions
are absolute, so a satellite needs its parent's position for the same ``t``;
``update`` therefore visits each hierarchy parent-first, starting from every
static body.

Queries
-------
Once updated, the simulation answers nearest-body lookups, sums the local
gravitational field and gives the spin velocity of a point on a body's
surface. The gravity sum only covers the *local system* (the static body
closest to the query point plus everything orbiting it); other systems are
assumed too far away to matter.
"""

import copy
import logging

from exactorbit.algorithms.core import Matrix3, Vector3
from exactorbit.models.body import OrbitingDynamics, SimulatedBody, StaticDynamics
from exactorbit.utils.constants import G, TWO_PI
from exactorbit.utils.conversions import to_decimal
from exactorbit.utils.errors import InvariantViolation, ViolationKind
from exactorbit.utils.series import fract

# Get logger for this module
logger = logging.getLogger(__name__)


class Simulation:
    """
    Flat, id-indexed collection of simulated bodies.

    Bodies are registered with :meth:`add_hierarchy` and never removed. Ids
    are dense from 0 and equal to the record's index in :attr:`bodies`.

    Notes
    -----
    Not thread safe; a simulation is meant to have one owner at a time.
    ``update`` is not transactional: if it raises, records evaluated before
    the failure keep their new state.
    """

    def __init__(self):
        self._bodies = []
        self._id_counter = 0

    @property
    def bodies(self):
        """Registered records in id order (a copy of the list, same records)."""
        return list(self._bodies)

    def __len__(self):
        return len(self._bodies)

    def __iter__(self):
        return iter(self._bodies)

    def add_hierarchy(self, body, parent=None):
        """
        Register a body and, recursively, all of its satellites.

        Parameters
        ----------
        body : Body
            Root of the tree to register. The simulation keeps a deep copy.
        parent : int, optional
            Id of an already registered parent record.

        Returns
        -------
        int
            Id assigned to ``body``. Its satellites get the following ids in
            pre-order.
        """
        if parent is not None:
            self.get_body_by_id(parent)

        new_id = self._id_counter
        self._id_counter += 1
        record = SimulatedBody(id=new_id, body=copy.deepcopy(body), parent=parent)
        self._bodies.append(record)
        logger.debug(f"Registered body '{body.name}' with id {new_id} (parent={parent})")

        if parent is not None:
            self._bodies[parent].satellites.append(new_id)

        for satellite in record.body.satellites:
            self.add_hierarchy(satellite, new_id)
        return new_id

    def get_body(self, name):
        """
        Look up a record by body name.

        Raises
        ------
        InvariantViolation
            With kind ``LOOKUP_MISS`` if no body has that name.
        """
        for record in self._bodies:
            if record.body.name == name:
                return record
        raise InvariantViolation(ViolationKind.LOOKUP_MISS, f"No body named '{name}'")

    def get_body_by_id(self, body_id):
        """
        Look up a record by id.

        Raises
        ------
        InvariantViolation
            With kind ``LOOKUP_MISS`` if the id was never assigned.
        """
        if isinstance(body_id, int) and 0 <= body_id < len(self._bodies):
            return self._bodies[body_id]
        raise InvariantViolation(ViolationKind.LOOKUP_MISS, f"No body with id {body_id!r}")

    def resolve_hierarchy_up(self, body):
        """Ancestors of ``body``, nearest first; empty for a root."""
        result = []
        current = body
        while current.parent is not None:
            current = self.get_body_by_id(current.parent)
            result.append(current)
        return result

    def resolve_hierarchy_down(self, body):
        """
        All descendants of ``body`` in depth-first pre-order.

        Each satellite is followed by its own subtree before its next sibling,
        so every record comes after its parent.
        """
        result = []
        for satellite_id in body.satellites:
            satellite = self.get_body_by_id(satellite_id)
            result.append(satellite)
            result.extend(self.resolve_hierarchy_down(satellite))
        return result

    def get_body_position(self, time, body):
        """
        Absolute position of ``body`` at ``time``.

        Static bodies return their fixed position. Orbiting bodies are placed
        at ``(orbit_radius, 0, 0)`` rotated about the orbit normal by the
        current orbital phase, then offset by the parent's *current* runtime
        position, so the parent must already be updated for ``time``.

        Raises
        ------
        InvariantViolation
            With kind ``UNREACHABLE_PARENT`` if an orbiting body has no
            registered parent.
        """
        dynamics = body.body.dynamics
        if isinstance(dynamics, StaticDynamics):
            return dynamics.position.copy()
        if not isinstance(dynamics, OrbitingDynamics):
            raise TypeError(f"Unsupported dynamics {type(dynamics).__name__}")

        if body.parent is None or not 0 <= body.parent < len(self._bodies):
            raise InvariantViolation(
                ViolationKind.UNREACHABLE_PARENT,
                f"Orbiting body '{body.body.name}' has no registered parent",
            )
        parent = self._bodies[body.parent]

        time = to_decimal(time)
        angle = TWO_PI * fract(time / dynamics.orbit_period)
        rotation = Matrix3.axis_angle(dynamics.orbit_plane_normal, angle)
        offset = rotation.apply(Vector3(dynamics.orbit_radius, 0, 0))
        return offset + parent.position

    def get_body_orientation(self, time, body):
        """Spin orientation of ``body`` at ``time`` about its rotation axis."""
        time = to_decimal(time)
        angle = TWO_PI * fract(time / body.body.rotation_period)
        return Matrix3.axis_angle(body.body.rotation_axis, angle)

    def _schedule(self):
        schedule = []
        seen = set()
        for record in self._bodies:
            if not record.is_static:
                continue
            for scheduled in [record] + self.resolve_hierarchy_down(record):
                if scheduled.id not in seen:
                    seen.add(scheduled.id)
                    schedule.append(scheduled)
        return schedule

    def update(self, time):
        """
        Evaluate every body reachable from a static body at ``time``.

        For each scheduled body the position, a one-second backward difference
        velocity ``p(t) - p(t - 1)`` and the spin orientation are computed and
        then stored together. Calling ``update`` twice with the same time
        leaves the same state as calling it once.

        Parameters
        ----------
        time : Decimal, integer (numpy included), str or float
            Absolute simulation time in seconds.

        Notes
        -----
        Hierarchies whose root is an orbiting body have no static anchor and
        are skipped; their records keep their previous state. A warning is
        logged listing them.

        Static bodies are scheduled themselves, ahead of their descendants,
        so their runtime position is their declared position. This is a
        change of behavior: previously only the descendants were scheduled
        and static records stayed at the origin.
        """
        time = to_decimal(time)
        previous = time - 1
        schedule = self._schedule()
        logger.debug(f"Updating {len(schedule)} of {len(self._bodies)} bodies at t={time}")

        for record in schedule:
            position = self.get_body_position(time, record)
            velocity = position - self.get_body_position(previous, record)
            orientation = self.get_body_orientation(time, record)
            record.position = position
            record.velocity = velocity
            record.orientation = orientation

        if len(schedule) < len(self._bodies):
            scheduled_ids = {record.id for record in schedule}
            skipped = [record.body.name for record in self._bodies if record.id not in scheduled_ids]
            logger.warning(f"Bodies without a static root were not updated: {', '.join(skipped)}")

    def get_surface_velocity(self, name, relative_point):
        """
        Spin velocity of a point fixed to a body's surface.

        Parameters
        ----------
        name : str
            Body name.
        relative_point : Vector3
            Point relative to the body's center (m).

        Returns
        -------
        Vector3
            ``omega × relative_point`` with ``omega = axis * 2π / period``.
            The body's orbital velocity is not included.
        """
        body = self.get_body(name).body
        angular_speed = TWO_PI / body.rotation_period
        angular_velocity = body.rotation_axis * angular_speed
        return angular_velocity.cross(relative_point)

    def find_closest_static(self, point):
        """
        Static body nearest to ``point``; the first registered wins ties.

        Raises
        ------
        InvariantViolation
            With kind ``LOOKUP_MISS`` if the simulation has no static body.
        """
        closest = None
        min_distance = None
        for record in self._bodies:
            if not record.is_static:
                continue
            distance = record.position.distance_to(point)
            if min_distance is None or distance < min_distance:
                closest = record
                min_distance = distance
        if closest is None:
            raise InvariantViolation(ViolationKind.LOOKUP_MISS, "Simulation has no static body")
        return closest

    def find_closest_body(self, point):
        """
        Body nearest to ``point`` within the closest local system.

        The closest static body is found first; the search then only looks at
        its descendants. A static body without satellites is returned as is.
        """
        closest_static = self.find_closest_static(point)
        candidates = self.resolve_hierarchy_down(closest_static)
        if not candidates:
            return closest_static

        closest = candidates[0]
        min_distance = closest.position.distance_to(point)
        for record in candidates[1:]:
            distance = record.position.distance_to(point)
            if distance < min_distance:
                closest = record
                min_distance = distance
        return closest

    def calculate_gravity_flux(self, point):
        """
        Gravitational field at ``point`` from the local system.

        Sums ``G * m / r^2`` along the unit direction towards each body of the
        closest static body's hierarchy (the static body included).

        Returns
        -------
        Vector3
            Field vector in m/s^2.

        Raises
        ------
        InvariantViolation
            With kind ``DEGENERATE_NORMALIZE`` if ``point`` coincides with a
            body's center.
        """
        closest_static = self.find_closest_static(point)
        local_system = self.resolve_hierarchy_down(closest_static) + [closest_static]

        flux = Vector3.zero()
        for record in local_system:
            relative = record.position - point
            direction = relative.normalized()
            strength = G * record.body.mass / relative.length_squared()
            flux += direction * strength
        return flux
