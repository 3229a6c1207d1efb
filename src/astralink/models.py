"""Frozen value types passed between the compute, animation and render layers."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Observer:
    """Geographic observer location. Validated by geo.validate_observer."""

    latitude: float  # Latitude (decimal degrees, north positive)
    longitude: float  # Longitude (decimal degrees, east positive)


@dataclass(frozen=True)
class CatalogStar:
    """Static catalog entry. Loaded once, never mutated."""

    name: str  # Display name; empty for unlabeled background stars
    ra_hours: float  # Right ascension (hours, [0, 24))
    dec_deg: float  # Declination (degrees)
    magnitude: float  # Apparent magnitude
    color: str = "#ffffff"  # Opaque color hint passed through to renderers
    constellation: str = ""  # Grouping tag ("Orion", "BigDipper", ...)


@dataclass(frozen=True)
class HorizontalCoordinate:
    """Observer-relative coordinates. Recomputed on every Observer/Instant change."""

    alt_rad: float  # Altitude above the horizon (radians)
    az_rad: float  # Azimuth (radians, 0=N, pi/2=E)

    @property
    def alt_deg(self) -> float:
        return math.degrees(self.alt_rad)

    @property
    def az_deg(self) -> float:
        return math.degrees(self.az_rad)


@dataclass(frozen=True)
class ScenePoint:
    """Cartesian position in the scene frame (y up)."""

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def distance(self) -> float:
        """Euclidean distance from the scene origin."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def lerp(self, other: "ScenePoint", t: float) -> "ScenePoint":
        """Linear interpolation towards other; t=0 is self, t=1 is other."""
        return ScenePoint(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
            z=self.z + (other.z - self.z) * t,
        )


@dataclass(frozen=True)
class VisibleStar:
    """A catalog star above the horizon, projected onto the dome."""

    star: CatalogStar
    point: ScenePoint  # Dome position
    horizontal: HorizontalCoordinate
    size: float  # Render radius in scene units
    opacity: float  # Render opacity in [0, 1]

    @property
    def name(self) -> str:
        return self.star.name

    @property
    def magnitude(self) -> float:
        return self.star.magnitude


@dataclass(frozen=True)
class ConstellationEdge:
    """A single constellation line. A pair of catalog star names."""

    star_from: str
    star_to: str
    constellation: str = ""  # Figure name ("Orion", "Cassiopeia", ...)


@dataclass(frozen=True)
class ConstellationSegment:
    """A renderable edge: both endpoints are currently visible."""

    edge: ConstellationEdge
    start: ScenePoint
    end: ScenePoint


@dataclass(frozen=True)
class ConstellationPosition:
    """Representative sky position for a single constellation (label anchor)."""

    name: str  # Figure name
    az_deg: float  # Brightness-weighted mean azimuth (0=N, 90=E, 180=S, 270=W)
    alt_deg: float  # Brightness-weighted mean altitude (degrees)


@dataclass(frozen=True)
class SkyFrame:
    """The sole input to sky renderers. Fully computed state for one frame."""

    observer: Observer
    instant_ms: float  # Epoch milliseconds the frame was computed for
    lst_deg: float  # Local sidereal time (degrees)
    stars: tuple[VisibleStar, ...]  # Only stars with altitude > 0
    segments: tuple[ConstellationSegment, ...]
    constellation_positions: tuple[ConstellationPosition, ...]


@dataclass(frozen=True)
class ViewSample:
    """Camera state at one instant of a view transition."""

    position: ScenePoint
    progress: float  # Linear progress, clamped to [0, 1]
    eased: float  # Eased progress used for interpolation
    is_complete: bool
