import math

import pytest

from astralink.orbits import (
    GLOBE_ISS_ORBIT,
    HUBBLE_ORBIT,
    STARLINK_ORBIT,
    CircularOrbit,
)


@pytest.mark.parametrize("orbit", [HUBBLE_ORBIT, STARLINK_ORBIT, GLOBE_ISS_ORBIT])
def test_orbit_stays_on_its_circle(orbit):
    for t in (0.0, 1.3, 17.0, 250.0):
        p = orbit.position(t)
        assert math.hypot(p.x, p.z) == pytest.approx(orbit.radius)
        assert abs(p.y - orbit.height) <= orbit.tilt + 1e-12


@pytest.mark.parametrize("orbit", [HUBBLE_ORBIT, STARLINK_ORBIT, GLOBE_ISS_ORBIT])
def test_orbit_is_periodic(orbit):
    a = orbit.position(3.0)
    b = orbit.position(3.0 + orbit.period)
    for u, v in zip(a.as_tuple(), b.as_tuple()):
        assert u == pytest.approx(v, abs=1e-9)


def test_hubble_height():
    assert HUBBLE_ORBIT.position(42.0).y == 55.0


def test_globe_iss_starts_on_x_axis():
    p = GLOBE_ISS_ORBIT.position(0.0)
    assert p.x == pytest.approx(2.65)
    assert p.z == pytest.approx(0.0, abs=1e-12)


def test_stationary_orbit_has_infinite_period():
    orbit = CircularOrbit(radius=1.0, angular_speed=0.0, phase=0.5)
    assert orbit.period == math.inf
    assert orbit.position(0.0) == orbit.position(1e6)


@pytest.mark.parametrize("t", [0.0, 2.0, 7.5, 31.0])
def test_globe_iss_follows_mission_control_path(t):
    # x = cos(0.4t)·r, y = sin(0.4t)·tilt, z = sin(0.4t)·r
    a = 0.4 * t
    p = GLOBE_ISS_ORBIT.position(t)
    assert p.x == pytest.approx(math.cos(a) * 2.65, abs=1e-9)
    assert p.y == pytest.approx(math.sin(a) * 0.25, abs=1e-9)
    assert p.z == pytest.approx(math.sin(a) * 2.65, abs=1e-9)


def test_vertical_bob_is_in_step_with_z():
    orbit = CircularOrbit(radius=2.0, angular_speed=1.0, height=1.0, tilt=0.5)
    for t in (0.3, 1.9, 4.4):
        p = orbit.position(t)
        assert (p.y - orbit.height) / orbit.tilt == pytest.approx(p.z / orbit.radius)
