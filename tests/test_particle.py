import math
from unittest import mock

import numpy as np
import pytest

import particle as particle_module
from errors import InvalidArgumentError, PreconditionViolation
from particle import Behavior, BehaviorChange, Particle

FAST_TRAVEL = {"arrival_threshold": 1, "travel_divisor": {"x": 2, "y": 2}}


def make_traveler(rng, destination=(10, 10), position=(0, 0), motion=FAST_TRAVEL):
    return Particle(
        position=position, radius=2, color="#673C4F",
        behavior=Behavior.TRAVELING, destination=destination, rng=rng, motion=motion,
    )


def frames_to_arrive(distance, threshold, divisor):
    """Upper bound on frames for geometric easing to get within threshold."""
    return math.ceil(math.log(distance / threshold) / math.log(divisor / (divisor - 1)))


# --- Construction ---

def test_traveling_requires_destination(rng):
    with pytest.raises(InvalidArgumentError):
        Particle(position=(0, 0), radius=1, color="#fff", behavior=Behavior.TRAVELING, rng=rng)


def test_ambient_has_no_destination_or_orbit(rng):
    p = Particle(position=(5, 5), radius=1, color="#fff", velocity=(1, -1), destination=(9, 9), rng=rng)
    assert p.behavior is Behavior.AMBIENT
    assert p.destination is None
    assert p.orbit is None
    np.testing.assert_allclose(p.velocity, (1, -1))


def test_orbiting_at_construction_owns_an_orbit(rng):
    p = Particle(position=(5, 5), radius=2, color="#fff", behavior=Behavior.ORBITING, rng=rng)
    assert p.orbit is not None
    np.testing.assert_allclose(p.orbit.center, (5, 5))
    assert p.destination is not None


def test_every_behavior_has_an_update_handler():
    assert set(particle_module._UPDATE_HANDLERS) == set(Behavior)
    assert all(callable(handler) for handler in particle_module._UPDATE_HANDLERS.values())


# --- Traveling ---

def test_traveling_reaches_orbiting_within_bounded_frames(rng):
    p = make_traveler(rng)
    limit = frames_to_arrive(np.hypot(10, 10), threshold=1, divisor=2)

    changes = []
    for _ in range(limit):
        change = p.update()
        if change is not None:
            changes.append(change)

    assert changes == [BehaviorChange(p, Behavior.TRAVELING, Behavior.ORBITING)]
    assert p.behavior is Behavior.ORBITING


def test_traveling_moves_by_fraction_of_remaining_distance(rng):
    motion = {"arrival_threshold": 1, "travel_divisor": {"x": 4, "y": 8}}
    p = make_traveler(rng, destination=(80, 80), motion=motion)
    p.update()
    np.testing.assert_allclose(p.position, (20, 10))


def test_arrival_starts_orbit_at_current_position(rng):
    p = make_traveler(rng)
    while p.update() is None:
        pass

    orbit = p.orbit
    assert orbit is not None
    np.testing.assert_allclose(orbit.center, p.position)
    assert orbit.angle_index == 1
    np.testing.assert_allclose(p.destination, orbit.center + (orbit.radius, 0))
    scalar = p.motion["orbit_radius_scalar"]
    assert scalar["min"] * p.radius <= orbit.radius <= scalar["max"] * p.radius
    travel = p.motion["orbit_travel_factor"]
    assert travel["min"] <= orbit.travel_factor <= travel["max"]


def test_traveling_distance_never_increases(rng):
    p = make_traveler(rng, destination=(400, -250), position=(3, 7), motion=None)
    distance = p.distance_to_destination()
    while p.behavior is Behavior.TRAVELING:
        p.update()
        if p.behavior is Behavior.TRAVELING:
            new_distance = p.distance_to_destination()
            assert new_distance < distance
            distance = new_distance


def test_traveling_without_destination_fails_loudly(rng):
    p = make_traveler(rng)
    p.destination = None
    with pytest.raises(PreconditionViolation):
        p.update()


# --- Orbiting ---

def test_orbiting_approaches_or_advances_target(rng):
    p = Particle(position=(50, 50), radius=3, color="#fff", behavior=Behavior.ORBITING, rng=rng)
    for _ in range(500):
        target = p.destination.copy()
        before = p.distance_to_destination()
        assert p.update() is None
        if np.array_equal(target, p.destination):
            assert p.distance_to_destination() < before
        else:
            assert np.linalg.norm(p.position - target) < p.threshold
    assert p.behavior is Behavior.ORBITING


def test_orbiting_cycles_through_all_sample_points(rng):
    p = Particle(position=(0, 0), radius=3, color="#fff", behavior=Behavior.ORBITING, rng=rng)
    seen = set()
    for _ in range(5000):
        p.update()
        seen.add(p.orbit.angle_index)
    assert seen == set(range(16))


def test_orbiting_without_orbit_fails_loudly(rng):
    p = Particle(position=(0, 0), radius=3, color="#fff", behavior=Behavior.ORBITING, rng=rng)
    p.orbit = None
    with pytest.raises(PreconditionViolation):
        p.update()


# --- Ambient ---

def test_ambient_requires_bounds(rng):
    p = Particle(position=(5, 5), radius=1, color="#fff", velocity=(1, 1), rng=rng)
    with pytest.raises(PreconditionViolation):
        p.update()


def test_ambient_bounces_off_each_axis_independently(rng):
    p = Particle(position=(99, 50), radius=1, color="#fff", velocity=(2, 3), rng=rng)
    p.update((100, 100))
    np.testing.assert_allclose(p.velocity, (-2, 3))
    np.testing.assert_allclose(p.position, (97, 53))


def test_ambient_moves_by_velocity(rng):
    p = Particle(position=(40, 40), radius=2, color="#fff", velocity=(1.5, -0.5), rng=rng)
    assert p.update((100, 100)) is None
    np.testing.assert_allclose(p.position, (41.5, 39.5))


def test_ambient_never_escapes_bounds(rng):
    bounds = np.array((120.0, 80.0))
    particles = [
        Particle(
            position=rng.uniform(3, bounds - 3), radius=3, color="#fff",
            velocity=(rng.random(2) - 0.5) * 20, rng=rng,
        )
        for _ in range(50)
    ]
    for _ in range(1000):
        for p in particles:
            p.update(bounds)
            assert np.all(p.position >= p.radius)
            assert np.all(p.position <= bounds - p.radius)


# --- set_behavior / travel_to ---

@pytest.mark.parametrize("bad", ["BOGUS", "ambient", 3, None])
def test_set_behavior_rejects_unknown_tags(rng, bad):
    p = Particle(position=(0, 0), radius=1, color="#fff", rng=rng)
    with pytest.raises(InvalidArgumentError):
        p.set_behavior(bad)


def test_set_behavior_accepts_names(rng):
    p = Particle(position=(0, 0), radius=1, color="#fff", rng=rng)
    p.set_behavior("ORBITING")
    assert p.behavior is Behavior.ORBITING
    assert p.orbit is not None


def test_reset_orbit_recenters_on_current_position(rng):
    p = Particle(position=(0, 0), radius=2, color="#fff", behavior=Behavior.ORBITING, rng=rng)
    old_orbit = p.orbit

    p.position = np.array([30.0, 40.0])
    p.set_behavior(Behavior.ORBITING)
    assert p.orbit is old_orbit

    p.set_behavior(Behavior.ORBITING, reset_orbit=True)
    assert p.orbit is not old_orbit
    np.testing.assert_allclose(p.orbit.center, (30, 40))


def test_switching_to_ambient_drops_destination_and_orbit(rng):
    p = Particle(position=(0, 0), radius=2, color="#fff", behavior=Behavior.ORBITING, rng=rng)
    p.set_behavior(Behavior.AMBIENT)
    assert p.destination is None
    assert p.orbit is None


def test_traveling_without_destination_is_refused(rng):
    p = Particle(position=(0, 0), radius=2, color="#fff", rng=rng)
    with pytest.raises(PreconditionViolation):
        p.set_behavior(Behavior.TRAVELING)


def test_travel_to_abandons_orbit(rng):
    p = Particle(position=(0, 0), radius=2, color="#fff", behavior=Behavior.ORBITING, rng=rng)
    p.travel_to((100, 100))
    assert p.behavior is Behavior.TRAVELING
    assert p.orbit is None
    np.testing.assert_allclose(p.destination, (100, 100))


def test_draw_uses_canvas_circle(rng):
    canvas = mock.Mock()
    p = Particle(position=(12.5, 7), radius=3, color="#7F557D", rng=rng)
    p.draw(canvas)
    canvas.draw_filled_circle.assert_called_once_with(12.5, 7, 3, "#7F557D")
