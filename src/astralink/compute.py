"""Sky computation layer — visibility transform, constellation linking, and the per-frame pipeline."""

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

from astralink.catalog import load_constellation_edges, load_star_catalog
from astralink.geo import ensure_observer
from astralink.models import (
    CatalogStar,
    ConstellationEdge,
    ConstellationPosition,
    ConstellationSegment,
    HorizontalCoordinate,
    Observer,
    ScenePoint,
    SkyFrame,
    VisibleStar,
)
from astralink.sidereal import Instant, instant_to_epoch_ms, local_sidereal_time

LOG = logging.getLogger(__name__)

DOME_RADIUS = 180.0

# Pogson ratio: one magnitude step is a brightness factor of 2.512
_POGSON = 2.512
_MIN_SIZE = 0.3
_SIZE_SCALE = 1.2
_OPACITY_SCALE = 0.8
_DEGENERATE_EPS = 1e-9


def horizontal_coordinates(
    star: CatalogStar, observer: Observer, lst_deg: float
) -> HorizontalCoordinate:
    """Convert a star's RA/Dec to altitude/azimuth for an observer.

    Azimuth runs from north through east. When cos(alt)·cos(lat) vanishes
    (star at the zenith, observer at a pole) the azimuth is undefined and
    is reported as 0.
    """
    ha = math.radians(lst_deg - star.ra_hours * 15.0)
    dec = math.radians(star.dec_deg)
    lat = math.radians(observer.latitude)

    sin_alt = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    alt = math.asin(max(-1.0, min(1.0, sin_alt)))

    denom = math.cos(alt) * math.cos(lat)
    if abs(denom) < _DEGENERATE_EPS:
        LOG.debug("Degenerate azimuth for %r (alt=%.6f rad)", star.name, alt)
        return HorizontalCoordinate(alt_rad=alt, az_rad=0.0)

    cos_az = (math.sin(dec) - math.sin(alt) * math.sin(lat)) / denom
    az = math.acos(max(-1.0, min(1.0, cos_az)))
    if math.sin(ha) > 0:
        az = 2 * math.pi - az
    return HorizontalCoordinate(alt_rad=alt, az_rad=az)


def dome_point(horizontal: HorizontalCoordinate, radius: float = DOME_RADIUS) -> ScenePoint:
    """Project horizontal coordinates onto a dome: +y zenith, -z north, +x east."""
    alt, az = horizontal.alt_rad, horizontal.az_rad
    return ScenePoint(
        x=radius * math.cos(alt) * math.sin(az),
        y=radius * math.sin(alt),
        z=-radius * math.cos(alt) * math.cos(az),
    )


def render_size(magnitude: float) -> float:
    """Marker radius: inverse power of magnitude, floored to stay visible."""
    return max(_MIN_SIZE, math.pow(_POGSON, -magnitude) * _SIZE_SCALE)


def render_opacity(magnitude: float) -> float:
    """Marker opacity: inverse power of magnitude, capped at fully opaque."""
    return min(1.0, math.pow(_POGSON, -magnitude) * _OPACITY_SCALE)


def visible_stars(
    catalog: Iterable[CatalogStar],
    observer: Observer,
    instant: Instant,
    radius: float = DOME_RADIUS,
) -> list[VisibleStar]:
    """Project every star above the horizon onto the dome.

    Args:
        catalog: Static catalog entries.
        observer: Observer location; validated before any projection.
        instant: Datetime or epoch milliseconds.
        radius: Dome radius in scene units.

    Returns:
        VisibleStar records in catalog order, altitude strictly above 0.

    Raises:
        InvalidObserverError: If the observer is out of range or non-finite.
    """
    observer = ensure_observer(observer)
    lst = local_sidereal_time(instant, observer.longitude)
    return _visible_stars_at(catalog, observer, lst, radius)


def _visible_stars_at(
    catalog: Iterable[CatalogStar],
    observer: Observer,
    lst_deg: float,
    radius: float,
) -> list[VisibleStar]:
    records: list[VisibleStar] = []
    for star in catalog:
        horizontal = horizontal_coordinates(star, observer, lst_deg)
        if horizontal.alt_rad <= 0:
            continue
        records.append(
            VisibleStar(
                star=star,
                point=dome_point(horizontal, radius),
                horizontal=horizontal,
                size=render_size(star.magnitude),
                opacity=render_opacity(star.magnitude),
            )
        )
    return records


def star_positions(stars: Iterable[VisibleStar]) -> dict[str, ScenePoint]:
    """Name → dome position for named visible stars."""
    return {s.name: s.point for s in stars if s.name}


def constellation_segments(
    edges: Iterable[ConstellationEdge],
    positions: Mapping[str, ScenePoint] | Sequence[VisibleStar],
    known_names: Iterable[str] | None = None,
) -> list[ConstellationSegment]:
    """Resolve constellation edges into line segments between visible stars.

    An edge is all-or-nothing: it is emitted only when both endpoints are
    present in ``positions``. Edges naming a star absent from ``known_names``
    (when given) are authoring errors and are skipped as well.
    """
    if not isinstance(positions, Mapping):
        positions = star_positions(positions)
    known = set(known_names) if known_names is not None else None

    segments: list[ConstellationSegment] = []
    missing = 0
    for edge in edges:
        if known is not None and (edge.star_from not in known or edge.star_to not in known):
            missing += 1
            continue
        start = positions.get(edge.star_from)
        end = positions.get(edge.star_to)
        if start is None or end is None:
            continue
        segments.append(ConstellationSegment(edge=edge, start=start, end=end))

    if missing:
        LOG.debug("Skipped %d constellation edge(s) with unknown endpoints", missing)
    return segments


def constellation_positions(
    stars: Sequence[VisibleStar],
    edges: Iterable[ConstellationEdge],
) -> tuple[ConstellationPosition, ...]:
    """Compute brightness-weighted mean az/alt for each visible constellation.

    A constellation counts as visible when at least one of its edges has both
    endpoints above the horizon. Azimuth uses a circular mean (sin/cos
    components) to handle the 0°/360° wrap.
    """
    by_name = {s.name: s for s in stars if s.name}

    # Group visible stars by figure via edges; figure order follows the edge table
    figure_stars: dict[str, dict[str, VisibleStar]] = defaultdict(dict)
    visible_figures: list[str] = []
    for edge in edges:
        if not edge.constellation:
            continue
        a = by_name.get(edge.star_from)
        b = by_name.get(edge.star_to)
        for s in (a, b):
            if s is not None:
                figure_stars[edge.constellation][s.name] = s
        if a is not None and b is not None and edge.constellation not in visible_figures:
            visible_figures.append(edge.constellation)

    positions: list[ConstellationPosition] = []
    for name in visible_figures:
        members = list(figure_stars[name].values())
        # Brighter (lower magnitude) stars pull the label towards them
        weights = [1.0 / max(s.magnitude + 3.0, 0.1) for s in members]
        total_w = sum(weights)
        sin_sum = sum(w * math.sin(s.horizontal.az_rad) for w, s in zip(weights, members))
        cos_sum = sum(w * math.cos(s.horizontal.az_rad) for w, s in zip(weights, members))
        az_mean = math.degrees(math.atan2(sin_sum / total_w, cos_sum / total_w)) % 360
        az_mean = round(az_mean, 1) % 360
        alt_mean = sum(w * s.horizontal.alt_deg for w, s in zip(weights, members)) / total_w
        positions.append(
            ConstellationPosition(name=name, az_deg=az_mean, alt_deg=round(alt_mean, 1))
        )
    return tuple(positions)


def compute_sky_frame(
    observer: Observer,
    instant: Instant,
    catalog: Sequence[CatalogStar] | None = None,
    edges: Sequence[ConstellationEdge] | None = None,
    radius: float = DOME_RADIUS,
) -> SkyFrame:
    """Top-level entry point: compute everything a sky renderer needs for one frame.

    Order is fixed: sidereal time, then visibility, then constellation
    linking, which depends on the current visible set.

    Args:
        observer: Observer location.
        instant: Datetime or epoch milliseconds.
        catalog: Star catalog; the built-in catalog if None.
        edges: Constellation edges; the built-in figures if None.
        radius: Dome radius in scene units.

    Returns:
        Fully computed SkyFrame.

    Raises:
        InvalidObserverError: If the observer is out of range or non-finite.
    """
    observer = ensure_observer(observer)
    if catalog is None:
        catalog = load_star_catalog()
    if edges is None:
        edges = load_constellation_edges()

    instant_ms = instant_to_epoch_ms(instant)
    lst = local_sidereal_time(instant_ms, observer.longitude)
    stars = _visible_stars_at(catalog, observer, lst, radius)
    segments = constellation_segments(
        edges, star_positions(stars), known_names=(s.name for s in catalog)
    )
    LOG.debug(
        "Sky frame lat=%.4f lon=%.4f lst=%.3f: %d stars, %d segments",
        observer.latitude,
        observer.longitude,
        lst,
        len(stars),
        len(segments),
    )
    return SkyFrame(
        observer=observer,
        instant_ms=instant_ms,
        lst_deg=lst,
        stars=tuple(stars),
        segments=tuple(segments),
        constellation_positions=constellation_positions(stars, edges),
    )
