"""
Sun-Earth-Moon demo.

Builds a three-level hierarchy, evaluates it once and prints the gravitational
field at the Earth's surface and the spin velocity of a point on the equator.

Run with ``python -m exactorbit.main``.
"""

import logging
import time

from exactorbit.algorithms import Simulation, Vector3
from exactorbit.logging_config import setup_logging
from exactorbit.models import Body, OrbitingDynamics, StaticDynamics
from exactorbit.utils.constants import DAY, M_earth, M_moon, M_sun, R_earth, R_earth_moon
from exactorbit.utils.conversions import au_to_meters


def build_sun_earth_moon():
    """Sun (static) with Earth orbiting it and the Moon orbiting the Earth."""
    moon = Body(
        name="moon",
        dynamics=OrbitingDynamics(
            orbit_radius=R_earth_moon,
            orbit_period=27 * DAY,
            orbit_plane_normal=Vector3.from_f64(0.0, 1.0, 0.1).normalized(),
        ),
        mass=M_moon,
        rotation_axis=Vector3.from_f64(0.3, 1.0, 0.2).normalized(),
        rotation_period=27 * DAY,
    )
    earth = Body(
        name="earth",
        dynamics=OrbitingDynamics(
            orbit_radius=au_to_meters(1.0),
            orbit_period=365 * DAY,
            orbit_plane_normal=Vector3.from_f64(0.1, 1.0, 0.0).normalized(),
        ),
        mass=M_earth,
        rotation_axis=Vector3.from_f64(0.0, 1.0, 0.0).normalized(),
        rotation_period=DAY,
        satellites=(moon,),
    )
    sun = Body(
        name="sun",
        dynamics=StaticDynamics(
            position=Vector3.from_str("64959787070023434667", "23454569021239234304", "29349283489"),
        ),
        mass=M_sun,
        rotation_axis=Vector3.from_f64(0.0, 1.0, 0.0).normalized(),
        rotation_period=7 * DAY,
        satellites=(earth,),
    )
    return sun


if __name__ == "__main__":
    setup_logging()
    logger = logging.getLogger("exactorbit.main")

    sim = Simulation()
    sim.add_hierarchy(build_sun_earth_moon())
    sim.update(123123.0)

    surface_point = Vector3(R_earth, 0, 0)
    earth_now = sim.get_body("earth")

    start = time.perf_counter()
    flux = sim.calculate_gravity_flux(earth_now.position + surface_point)
    elapsed = time.perf_counter() - start
    surface_velocity = sim.get_surface_velocity("earth", surface_point)

    logger.info(f"Gravity flux computed in {elapsed:.4f} s")
    print(f"Gravity at earth surface: {flux.length()} m/s^2")
    print(f"Surface velocity: {surface_velocity.length()} m/s")
