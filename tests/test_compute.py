import math
from datetime import datetime, timedelta, timezone

import pytest

from astralink.catalog import load_constellation_edges, load_star_catalog
from astralink.compute import (
    DOME_RADIUS,
    compute_sky_frame,
    constellation_positions,
    constellation_segments,
    dome_point,
    horizontal_coordinates,
    render_opacity,
    render_size,
    visible_stars,
)
from astralink.geo import InvalidObserverError
from astralink.models import (
    CatalogStar,
    ConstellationEdge,
    HorizontalCoordinate,
    Observer,
    ScenePoint,
)
from astralink.sidereal import local_sidereal_time

LANCASTER = Observer(latitude=34.6868, longitude=-118.1542)
WHEN = datetime(2025, 1, 10, 3, 0, tzinfo=timezone.utc)


def _star(name: str, ra_hours: float, dec_deg: float, magnitude: float = 1.0) -> CatalogStar:
    return CatalogStar(name=name, ra_hours=ra_hours, dec_deg=dec_deg, magnitude=magnitude)


# --- Horizontal coordinates ---


def test_star_on_meridian_culminates_due_south():
    star = _star("south", ra_hours=6.0, dec_deg=0.0)
    h = horizontal_coordinates(star, LANCASTER, lst_deg=90.0)
    assert h.alt_deg == pytest.approx(90.0 - LANCASTER.latitude)
    assert h.az_deg == pytest.approx(180.0)
    p = dome_point(h)
    assert p.z > 0
    assert p.x == pytest.approx(0.0, abs=1e-4)


def test_rising_star_is_east_and_setting_star_is_west():
    rising = horizontal_coordinates(_star("r", 4.0, 0.0), LANCASTER, lst_deg=0.0)
    setting = horizontal_coordinates(_star("s", 20.0, 0.0), LANCASTER, lst_deg=0.0)
    assert 0.0 < rising.az_deg < 180.0
    assert 180.0 < setting.az_deg < 360.0
    assert dome_point(rising).x > 0
    assert dome_point(setting).x < 0


def test_transit_altitude():
    for dec in (-20.0, 0.0, 20.0, 60.0):
        star = _star("t", ra_hours=3.0, dec_deg=dec)
        h = horizontal_coordinates(star, LANCASTER, lst_deg=45.0)
        assert h.alt_deg == pytest.approx(90.0 - abs(dec - LANCASTER.latitude), abs=1e-9)


def test_zenith_star_has_finite_azimuth():
    star = _star("zenith", ra_hours=3.0, dec_deg=LANCASTER.latitude)
    h = horizontal_coordinates(star, LANCASTER, lst_deg=45.0)
    assert h.alt_deg == pytest.approx(90.0)
    assert math.isfinite(h.az_rad)
    p = dome_point(h)
    assert all(math.isfinite(c) for c in p.as_tuple())


@pytest.mark.parametrize("latitude", [90.0, -90.0])
def test_polar_observer_has_finite_coordinates(latitude):
    pole = Observer(latitude=latitude, longitude=0.0)
    for star in load_star_catalog():
        h = horizontal_coordinates(star, pole, lst_deg=123.4)
        assert math.isfinite(h.alt_rad)
        assert math.isfinite(h.az_rad)
        # At a pole altitude equals (signed) declination
        assert h.alt_deg == pytest.approx(math.copysign(1, latitude) * star.dec_deg, abs=1e-6)


def test_dome_point_radius():
    h = HorizontalCoordinate(alt_rad=0.3, az_rad=4.0)
    assert dome_point(h).distance() == pytest.approx(DOME_RADIUS)
    assert dome_point(h, radius=10.0).distance() == pytest.approx(10.0)


def test_dome_zenith_and_north():
    assert dome_point(HorizontalCoordinate(math.pi / 2, 0.0)).y == pytest.approx(DOME_RADIUS)
    north = dome_point(HorizontalCoordinate(0.0, 0.0))
    assert north.z == pytest.approx(-DOME_RADIUS)


# --- Size and opacity ---


def test_sirius_renders_larger_than_phecda():
    assert render_size(-1.46) > render_size(2.44)
    assert render_opacity(-1.46) > render_opacity(2.44)


def test_size_and_opacity_bounds():
    assert render_size(10.0) == 0.3
    assert render_opacity(-5.0) == 1.0


def test_size_and_opacity_non_increasing():
    mags = [m / 10.0 for m in range(-30, 70)]
    sizes = [render_size(m) for m in mags]
    opacities = [render_opacity(m) for m in mags]
    assert all(a >= b for a, b in zip(sizes, sizes[1:]))
    assert all(a >= b for a, b in zip(opacities, opacities[1:]))


# --- Visibility ---


def test_visibility_matches_altitude_sign():
    catalog = load_star_catalog()
    for hours in range(0, 24, 3):
        when = WHEN + timedelta(hours=hours)
        lst = local_sidereal_time(when, LANCASTER.longitude)
        expected = {
            s.name for s in catalog if horizontal_coordinates(s, LANCASTER, lst).alt_rad > 0
        }
        got = {v.name for v in visible_stars(catalog, LANCASTER, when)}
        assert got == expected


def test_visible_stars_are_above_horizon_on_dome():
    for v in visible_stars(load_star_catalog(), LANCASTER, WHEN):
        assert v.horizontal.alt_rad > 0
        assert v.point.y > 0
        assert v.point.distance() == pytest.approx(DOME_RADIUS)
        assert v.size == render_size(v.magnitude)


def test_circumpolar_and_never_rising_from_lancaster():
    catalog = [_star("Polaris-like", 2.53, 89.0), _star("deep-south", 12.0, -80.0)]
    for step in range(48):
        when = WHEN + timedelta(minutes=30 * step)
        names = [v.name for v in visible_stars(catalog, LANCASTER, when)]
        assert names == ["Polaris-like"]


def test_visible_stars_accepts_epoch_ms():
    ms = WHEN.timestamp() * 1000.0
    a = visible_stars(load_star_catalog(), LANCASTER, ms)
    b = visible_stars(load_star_catalog(), LANCASTER, WHEN)
    assert a == b


def test_visible_stars_rejects_invalid_observer():
    with pytest.raises(InvalidObserverError):
        visible_stars(load_star_catalog(), Observer(latitude=95.0, longitude=0.0), WHEN)
    with pytest.raises(InvalidObserverError):
        visible_stars(load_star_catalog(), Observer(latitude=0.0, longitude=math.nan), WHEN)


# --- Constellation linking ---

A = ScenePoint(1.0, 2.0, 3.0)
B = ScenePoint(4.0, 5.0, 6.0)
C = ScenePoint(7.0, 8.0, 9.0)


def test_segments_drop_edges_with_invisible_endpoint():
    edges = [
        ConstellationEdge("A", "B", "Fig"),
        ConstellationEdge("B", "C", "Fig"),
        ConstellationEdge("C", "A", "Fig"),
        ConstellationEdge("C", "D", "Fig"),
        ConstellationEdge("D", "A", "Fig"),
    ]
    segments = constellation_segments(edges, {"A": A, "B": B, "C": C})
    assert len(segments) == 3
    assert [(s.start, s.end) for s in segments] == [(A, B), (B, C), (C, A)]


def test_segments_skip_unknown_star():
    edges = [ConstellationEdge("A", "Nope"), ConstellationEdge("A", "B")]
    segments = constellation_segments(edges, {"A": A, "B": B}, known_names=["A", "B"])
    assert [s.edge for s in segments] == [ConstellationEdge("A", "B")]


def test_segments_accept_visible_star_records():
    stars = visible_stars(load_star_catalog(), LANCASTER, WHEN)
    by_name = {s.name: s.point for s in stars}
    assert constellation_segments(load_constellation_edges(), stars) == constellation_segments(
        load_constellation_edges(), by_name
    )


def test_segments_empty_when_nothing_visible():
    assert constellation_segments(load_constellation_edges(), {}) == []


# --- Frame pipeline ---


@pytest.mark.parametrize("hours", [0, 4, 8, 12, 16, 20])
def test_frame_segments_match_visible_set(hours):
    frame = compute_sky_frame(LANCASTER, WHEN + timedelta(hours=hours))
    visible = {s.name for s in frame.stars}
    expected = [
        e
        for e in load_constellation_edges()
        if e.star_from in visible and e.star_to in visible
    ]
    assert [s.edge for s in frame.segments] == expected
    assert 0.0 <= frame.lst_deg < 360.0


def test_frame_is_recomputed_after_observer_change():
    first = compute_sky_frame(LANCASTER, WHEN)
    other = compute_sky_frame(Observer(latitude=-33.87, longitude=151.21), WHEN)
    again = compute_sky_frame(LANCASTER, WHEN)
    assert first == again
    assert {s.name for s in first.stars} != {s.name for s in other.stars}


def test_frame_cassiopeia_from_lancaster_is_always_drawn():
    # Cassiopeia stars sit above dec 59°, circumpolar from 34.7°N
    for hours in range(0, 24, 2):
        frame = compute_sky_frame(LANCASTER, WHEN + timedelta(hours=hours))
        cas = [s for s in frame.segments if s.edge.constellation == "Cassiopeia"]
        assert len(cas) == 4


def test_frame_rejects_invalid_observer():
    with pytest.raises(InvalidObserverError):
        compute_sky_frame(Observer(latitude=0.0, longitude=-200.0), WHEN)


def test_constellation_positions_follow_visible_figures():
    frame = compute_sky_frame(LANCASTER, WHEN)
    drawn = {s.edge.constellation for s in frame.segments}
    names = [p.name for p in frame.constellation_positions]
    assert set(names) == drawn
    for p in frame.constellation_positions:
        assert 0.0 <= p.az_deg < 360.0
        assert 0.0 <= p.alt_deg <= 90.0


def test_constellation_position_is_weighted_towards_brighter_star():
    # Both stars on the meridian at WHEN: transit altitudes ~84.7° and ~64.7°
    ra = local_sidereal_time(WHEN, LANCASTER.longitude) / 15.0
    stars = visible_stars(
        [_star("Bright", ra, 40.0, magnitude=-1.0), _star("Faint", ra, 60.0, magnitude=3.0)],
        LANCASTER,
        WHEN,
    )
    assert len(stars) == 2
    (pos,) = constellation_positions(stars, [ConstellationEdge("Bright", "Faint", "Pair")])
    bright = next(s for s in stars if s.name == "Bright").horizontal.alt_deg
    faint = next(s for s in stars if s.name == "Faint").horizontal.alt_deg
    midpoint = (bright + faint) / 2
    assert abs(pos.alt_deg - bright) < abs(midpoint - bright) + 0.1


def test_catalog_edges_reference_catalog_stars():
    by_name = {s.name: s for s in load_star_catalog()}
    assert by_name["Sirius"].magnitude == -1.46
    for edge in load_constellation_edges():
        assert edge.star_from in by_name and edge.star_to in by_name
