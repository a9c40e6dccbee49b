import decimal
import logging
import threading
from decimal import Decimal

import pytest

from exactorbit.algorithms.core import Matrix3, Vector3
from exactorbit.algorithms.dynamics.simulation import Simulation
from exactorbit.models import Body, OrbitingDynamics, StaticDynamics
from exactorbit.utils.constants import DAY, DECIMAL_PRECISION, G, TWO_PI
from exactorbit.utils.errors import InvariantViolation, ViolationKind

Y_AXIS = Vector3(0, 1, 0)


def make_static(name, position=(0, 0, 0), mass=Decimal("1e24"), satellites=()):
    return Body(
        name=name,
        dynamics=StaticDynamics(position=Vector3(*position)),
        mass=mass,
        rotation_axis=Y_AXIS,
        rotation_period=DAY,
        satellites=satellites,
    )


def make_orbiting(name, radius, period, normal=Y_AXIS, mass=Decimal("1e20"), satellites=()):
    return Body(
        name=name,
        dynamics=OrbitingDynamics(orbit_radius=radius, orbit_period=period, orbit_plane_normal=normal),
        mass=mass,
        rotation_axis=Y_AXIS,
        rotation_period=DAY,
        satellites=satellites,
    )


@pytest.fixture
def tree_sim():
    """a(static) -> [b -> [c], d]"""
    c = make_orbiting("c", 1000, 100)
    b = make_orbiting("b", 1000000, 1000, satellites=(c,))
    d = make_orbiting("d", 5000000, 5000)
    a = make_static("a", position=(10, 20, 30), satellites=(b, d))
    sim = Simulation()
    sim.add_hierarchy(a)
    return sim


def test_ids_are_assigned_in_pre_order(tree_sim):
    assert len(tree_sim) == 4
    assert [record.body.name for record in tree_sim] == ["a", "b", "c", "d"]
    assert [record.id for record in tree_sim] == [0, 1, 2, 3]
    assert tree_sim.get_body("a").satellites == [1, 3]
    assert tree_sim.get_body("b").satellites == [2]
    assert tree_sim.get_body("c").parent == 1
    assert tree_sim.get_body("a").parent is None


def test_add_hierarchy_returns_root_id(tree_sim):
    second = make_static("e", satellites=(make_orbiting("f", 10, 10),))
    assert tree_sim.add_hierarchy(second) == 4
    assert tree_sim.get_body("f").id == 5


def test_add_hierarchy_under_existing_parent(tree_sim):
    new_id = tree_sim.add_hierarchy(make_orbiting("g", 10, 10), parent=2)
    assert tree_sim.get_body("g").parent == 2
    assert new_id in tree_sim.get_body("c").satellites


def test_add_hierarchy_unknown_parent(tree_sim):
    with pytest.raises(InvariantViolation) as excinfo:
        tree_sim.add_hierarchy(make_orbiting("g", 10, 10), parent=42)
    assert excinfo.value.kind is ViolationKind.LOOKUP_MISS


def test_lookup_misses(tree_sim):
    with pytest.raises(InvariantViolation) as excinfo:
        tree_sim.get_body("pluto")
    assert excinfo.value.kind is ViolationKind.LOOKUP_MISS
    with pytest.raises(InvariantViolation):
        tree_sim.get_body_by_id(99)
    with pytest.raises(InvariantViolation):
        tree_sim.get_body_by_id(-1)
    assert tree_sim.get_body_by_id(2).body.name == "c"


def test_resolve_hierarchy(tree_sim):
    a, b, c, d = tree_sim.bodies
    assert tree_sim.resolve_hierarchy_up(c) == [b, a]
    assert tree_sim.resolve_hierarchy_up(a) == []
    assert tree_sim.resolve_hierarchy_down(a) == [b, c, d]
    assert tree_sim.resolve_hierarchy_down(c) == []


def test_hierarchy_up_and_down_agree(tree_sim):
    for record in tree_sim:
        if record.parent is None:
            continue
        parent = tree_sim.get_body_by_id(record.parent)
        assert record in tree_sim.resolve_hierarchy_down(parent)
        ancestor_ids = [ancestor.id for ancestor in tree_sim.resolve_hierarchy_up(record)]
        assert ancestor_ids.count(record.parent) == 1


def test_descriptor_is_copied_on_registration():
    position = Vector3(1, 2, 3)
    sim = Simulation()
    sim.add_hierarchy(make_static("a", position=(1, 2, 3)))
    body = Body(
        name="b",
        dynamics=StaticDynamics(position=position),
        mass=1,
        rotation_axis=Y_AXIS,
        rotation_period=DAY,
    )
    sim.add_hierarchy(body)
    position += 100
    sim.update(0)
    assert sim.get_body("b").position == Vector3(1, 2, 3)


def test_initial_state_is_zero(tree_sim):
    record = tree_sim.get_body("c")
    assert record.position == Vector3.zero()
    assert record.velocity == Vector3.zero()
    assert record.orientation == Matrix3.identity()


def test_update_places_static_and_orbiting_bodies(tree_sim):
    tree_sim.update(0)
    assert tree_sim.get_body("a").position == Vector3(10, 20, 30)
    assert tree_sim.get_body("a").velocity == Vector3.zero()
    # phase zero puts each satellite at +x from its parent
    assert tree_sim.get_body("b").position == Vector3(1000010, 20, 30)
    assert tree_sim.get_body("c").position == Vector3(1001010, 20, 30)
    assert tree_sim.get_body("d").position == Vector3(5000010, 20, 30)


def test_quarter_orbit_about_y(tree_sim):
    tree_sim.update(250)
    expected = Vector3(10, 20, 30 - 1000000)
    assert tree_sim.get_body("b").position.is_close(expected, Decimal("1e-40"))


def test_orbit_is_periodic(tree_sim):
    tree_sim.update(123)
    first = tree_sim.get_body("b").position.copy()
    tree_sim.update(123 + 1000 * 7)
    assert tree_sim.get_body("b").position.is_close(first, Decimal("1e-40"))


def test_velocity_is_backward_difference(tree_sim):
    tree_sim.update(777)
    for name in ["b", "c", "d"]:
        record = tree_sim.get_body(name)
        expected = record.position - tree_sim.get_body_position(776, record)
        assert record.velocity == expected


def test_velocity_approximates_orbital_speed(tree_sim):
    tree_sim.update(400)
    speed = tree_sim.get_body("d").velocity.length()
    circular_speed = TWO_PI * 5000000 / 5000
    assert abs(speed - circular_speed) / circular_speed < Decimal("1e-6")


def test_orientation_follows_rotation_period(tree_sim):
    tree_sim.update(0)
    assert tree_sim.get_body("b").orientation == Matrix3.identity()
    tree_sim.update(DAY // 4)
    record = tree_sim.get_body("b")
    assert record.orientation == tree_sim.get_body_orientation(DAY // 4, record)
    turned = record.orientation.apply(Vector3(1, 0, 0))
    assert turned.is_close(Vector3(0, 0, -1), Decimal("1e-50"))


def test_update_is_idempotent(tree_sim):
    tree_sim.update(98765)
    once = [(r.position.copy(), r.velocity.copy(), r.orientation) for r in tree_sim]
    tree_sim.update(98765)
    twice = [(r.position, r.velocity, r.orientation) for r in tree_sim]
    assert once == twice


def test_update_accepts_any_time_type(tree_sim):
    results = []
    for t in [Decimal("4321"), 4321, "4321", 4321.0]:
        tree_sim.update(t)
        results.append(tree_sim.get_body("c").position.copy())
    assert all(result == results[0] for result in results)


def test_orbiting_root_is_not_updated(caplog):
    sim = Simulation()
    sim.add_hierarchy(make_static("anchor", satellites=(make_orbiting("moonlet", 10, 10),)))
    sim.add_hierarchy(make_orbiting("drifter", 100, 100))

    with caplog.at_level(logging.WARNING):
        sim.update(3)

    assert sim.get_body("drifter").position == Vector3.zero()
    assert sim.get_body("moonlet").position != Vector3.zero()
    assert "drifter" in caplog.text


def test_orbiting_root_position_raises():
    sim = Simulation()
    sim.add_hierarchy(make_orbiting("drifter", 100, 100))
    with pytest.raises(InvariantViolation) as excinfo:
        sim.get_body_position(0, sim.get_body("drifter"))
    assert excinfo.value.kind is ViolationKind.UNREACHABLE_PARENT


def test_nested_static_is_scheduled_once():
    inner = make_static("inner", position=(5, 5, 5), satellites=(make_orbiting("ring", 1, 10),))
    sim = Simulation()
    sim.add_hierarchy(make_static("outer", satellites=(inner,)))
    assert [record.body.name for record in sim._schedule()] == ["outer", "inner", "ring"]
    sim.update(0)
    assert sim.get_body("ring").position == Vector3(6, 5, 5)


@pytest.fixture
def two_systems():
    sim = Simulation()
    sim.add_hierarchy(make_static("near", position=(0, 0, 0), satellites=(
        make_orbiting("near-1", 100, 1000),
        make_orbiting("near-2", 300, 1000),
    )))
    sim.add_hierarchy(make_static("far", position=(10000, 0, 0), satellites=(
        make_orbiting("far-1", 100, 1000),
    )))
    sim.add_hierarchy(make_static("lonely", position=(0, 50000, 0)))
    sim.update(0)
    return sim


def test_find_closest_static(two_systems):
    assert two_systems.find_closest_static(Vector3(1, 2, 3)).body.name == "near"
    assert two_systems.find_closest_static(Vector3(9000, 0, 0)).body.name == "far"
    assert two_systems.find_closest_static(Vector3(0, 40000, 0)).body.name == "lonely"


def test_find_closest_static_tie_goes_to_first(two_systems):
    assert two_systems.find_closest_static(Vector3(5000, 0, 0)).body.name == "near"


def test_find_closest_static_without_static_bodies():
    sim = Simulation()
    with pytest.raises(InvariantViolation) as excinfo:
        sim.find_closest_static(Vector3.zero())
    assert excinfo.value.kind is ViolationKind.LOOKUP_MISS

    sim.add_hierarchy(make_orbiting("drifter", 1, 1))
    with pytest.raises(InvariantViolation):
        sim.find_closest_static(Vector3.zero())


def test_find_closest_body(two_systems):
    assert two_systems.find_closest_body(Vector3(290, 0, 0)).body.name == "near-2"
    assert two_systems.find_closest_body(Vector3(110, 0, 0)).body.name == "near-1"
    assert two_systems.find_closest_body(Vector3(10090, 0, 0)).body.name == "far-1"
    # only descendants of the closest static body are candidates
    assert two_systems.find_closest_body(Vector3(1, 0, 0)).body.name == "near-1"
    # a static body without satellites is its own answer
    assert two_systems.find_closest_body(Vector3(0, 49000, 0)).body.name == "lonely"


def test_closest_queries_return_registered_bodies(two_systems):
    records = two_systems.bodies
    for point in [Vector3(0, 0, 0), Vector3(-5e6, 3e6, 1), Vector3(10000, 1, 1)]:
        assert two_systems.find_closest_static(point) in records
        assert two_systems.find_closest_body(point) in records


def test_gravity_flux_single_body():
    sim = Simulation()
    sim.add_hierarchy(make_static("planet", mass=Decimal("1e24")))
    sim.update(0)

    flux = sim.calculate_gravity_flux(Vector3(1000000, 0, 0))

    expected = Vector3(-(G * Decimal("1e24") / Decimal("1e12")), 0, 0)
    assert flux.is_close(expected, Decimal("1e-50"))
    assert abs(flux.x + Decimal("66.7408")) < Decimal("1e-50")


def test_gravity_flux_ignores_other_systems(two_systems):
    local = Simulation()
    local.add_hierarchy(make_static("near", position=(0, 0, 0), satellites=(
        make_orbiting("near-1", 100, 1000),
        make_orbiting("near-2", 300, 1000),
    )))
    local.update(0)

    point = Vector3(0, 1000, 0)
    assert two_systems.calculate_gravity_flux(point) == local.calculate_gravity_flux(point)


def test_gravity_flux_at_body_center_raises(two_systems):
    with pytest.raises(InvariantViolation) as excinfo:
        two_systems.calculate_gravity_flux(Vector3(0, 0, 0))
    assert excinfo.value.kind is ViolationKind.DEGENERATE_NORMALIZE


def test_surface_velocity(tree_sim):
    velocity = tree_sim.get_surface_velocity("b", Vector3(6371000, 0, 0))
    expected = -(TWO_PI / DAY) * 6371000
    assert velocity.x == 0
    assert velocity.y == 0
    assert abs(velocity.z - expected) < Decimal("1e-50")


def test_surface_velocity_unknown_body(tree_sim):
    with pytest.raises(InvariantViolation):
        tree_sim.get_surface_velocity("nobody", Vector3(1, 0, 0))


def test_worker_thread_uses_working_precision():
    def build():
        sim = Simulation()
        sim.add_hierarchy(make_static(
            "sun",
            position=("64959787070023434667", "23454569021239234304", "29349283489"),
            satellites=(make_orbiting("earth", 149597870691, 365 * DAY),),
        ))
        return sim

    main = build()
    main.update(123123)

    results = {}

    def work():
        worker = build()
        worker.update(123123)
        results["earth"] = worker.get_body("earth").position
        results["prec"] = decimal.getcontext().prec

    thread = threading.Thread(target=work)
    thread.start()
    thread.join()

    assert results["prec"] == DECIMAL_PRECISION
    assert results["earth"] == main.get_body("earth").position
