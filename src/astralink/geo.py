"""Observer validation and lat/lon placement on a sphere.

Every lat/lon placed in a scene (observer marker, ISS ground point, camera
target) goes through ``project`` so that all objects share one frame:
polar angle phi = 90 - latitude, azimuthal angle theta = longitude + 180.
"""

import logging
import math

from astralink.models import Observer, ScenePoint

LOG = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


class InvalidObserverError(ValueError):
    """Latitude/longitude out of range or non-finite."""


def validate_observer(latitude: float, longitude: float) -> Observer:
    """Validate a latitude/longitude pair and return an Observer.

    Out-of-range values are rejected, never clamped.

    Raises:
        InvalidObserverError: If either value is non-finite, latitude is
            outside [-90, 90] or longitude outside [-180, 180].
    """
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError) as e:
        raise InvalidObserverError(
            f"Observer coordinates must be numbers: {latitude!r}, {longitude!r}"
        ) from e
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidObserverError(f"Observer coordinates must be finite: {lat}, {lon}")
    if not -90.0 <= lat <= 90.0:
        raise InvalidObserverError(f"Latitude must be between -90 and 90: {lat}")
    if not -180.0 <= lon <= 180.0:
        raise InvalidObserverError(f"Longitude must be between -180 and 180: {lon}")
    return Observer(latitude=lat, longitude=lon)


def ensure_observer(observer: Observer) -> Observer:
    """Re-validate an Observer built without validate_observer."""
    return validate_observer(observer.latitude, observer.longitude)


def project(latitude_deg: float, longitude_deg: float, radius: float) -> ScenePoint:
    """Place a latitude/longitude on a sphere of the given radius.

    Args:
        latitude_deg: Latitude (degrees); the north pole maps to +y.
        longitude_deg: Longitude (degrees, east positive).
        radius: Sphere radius in scene units.

    Returns:
        ScenePoint at distance ``radius`` from the origin.

    Raises:
        InvalidObserverError: On NaN or infinite latitude/longitude. Range is
            the caller's responsibility (see validate_observer).
    """
    if not (math.isfinite(latitude_deg) and math.isfinite(longitude_deg)):
        raise InvalidObserverError(
            f"Cannot project non-finite coordinates: {latitude_deg}, {longitude_deg}"
        )
    phi = math.radians(90.0 - latitude_deg)
    theta = math.radians(longitude_deg + 180.0)
    return ScenePoint(
        x=-(radius * math.sin(phi) * math.cos(theta)),
        y=radius * math.cos(phi),
        z=radius * math.sin(phi) * math.sin(theta),
    )


def project_observer(observer: Observer, radius: float) -> ScenePoint:
    return project(observer.latitude, observer.longitude, radius)


def altitude_radius(
    base_radius: float,
    altitude_km: float,
    earth_radius_km: float = EARTH_RADIUS_KM,
    scale: float = 1.0,
) -> float:
    """Scene radius for a point ``altitude_km`` above a globe of ``base_radius``.

    ``scale`` exaggerates the altitude so low orbits stay visible off the surface.
    """
    if altitude_km < 0:
        LOG.debug("Negative altitude %.1f km placed on the surface", altitude_km)
        altitude_km = 0.0
    return base_radius * (1.0 + scale * altitude_km / earth_radius_km)
