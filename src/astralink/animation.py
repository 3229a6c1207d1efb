"""Geodesic view animation — eased camera flights between two observer locations."""

import logging
import math
from dataclasses import dataclass

from astralink.geo import ensure_observer, project_observer
from astralink.models import Observer, ScenePoint, ViewSample

LOG = logging.getLogger(__name__)

CAMERA_DISTANCE = 6.0
DEFAULT_TRANSITION_MS = 2000.0
AUTO_ROTATE_DEG_PER_S = 12.0
FOCAL_POINT = ScenePoint(0.0, 0.0, 0.0)


def ease_in_out_cubic(p: float) -> float:
    """Cubic ease-in-out on [0, 1]."""
    if p < 0.5:
        return 4 * p * p * p
    return 1 - math.pow(-2 * p + 2, 3) / 2


def auto_rotate_step(
    position: ScenePoint,
    elapsed_ms: float,
    speed_deg_per_s: float = AUTO_ROTATE_DEG_PER_S,
) -> ScenePoint:
    """Orbit a camera position about the vertical axis through the focal point."""
    angle = math.radians(speed_deg_per_s * elapsed_ms / 1000.0)
    c, s = math.cos(angle), math.sin(angle)
    return ScenePoint(
        x=position.x * c + position.z * s,
        y=position.y,
        z=-position.x * s + position.z * c,
    )


@dataclass(frozen=True)
class ViewTransition:
    """A single camera flight. Discarded by its owner once progress reaches 1."""

    start: ScenePoint
    end: ScenePoint
    start_ms: float
    duration_ms: float

    def progress(self, now_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        p = (now_ms - self.start_ms) / self.duration_ms
        return max(0.0, min(1.0, p))

    def sample(self, now_ms: float) -> ViewSample:
        p = self.progress(now_ms)
        if p >= 1.0:
            return ViewSample(position=self.end, progress=1.0, eased=1.0, is_complete=True)
        eased = ease_in_out_cubic(p)
        return ViewSample(
            position=self.start.lerp(self.end, eased),
            progress=p,
            eased=eased,
            is_complete=False,
        )


class GeodesicViewAnimator:
    """
    Camera controller for one viewer.

    At most one transition is active: starting another replaces it and its
    progress is discarded, never blended. Ambient auto-rotation is suspended
    while a transition runs and resumes when it completes. The camera always
    looks at FOCAL_POINT.

    Parameters
    ----------
    camera_distance : distance from the focal point to the camera
    position : initial camera position (default: on +z at camera_distance)
    auto_rotate : whether ambient rotation is enabled when idle
    """

    def __init__(
        self,
        camera_distance: float = CAMERA_DISTANCE,
        position: ScenePoint | None = None,
        auto_rotate: bool = True,
    ):
        self._distance = camera_distance
        self._position = position or ScenePoint(0.0, 0.0, camera_distance)
        self._auto_rotate_enabled = auto_rotate
        self._transition: ViewTransition | None = None

    # ── Properties ─────────────────────────────────────────────────────────

    @property
    def position(self) -> ScenePoint:
        return self._position

    @property
    def look_at(self) -> ScenePoint:
        return FOCAL_POINT

    @property
    def camera_distance(self) -> float:
        return self._distance

    @property
    def transition(self) -> ViewTransition | None:
        return self._transition

    @property
    def is_animating(self) -> bool:
        return self._transition is not None

    @property
    def auto_rotate(self) -> bool:
        """True when ambient rotation is currently allowed to move the camera."""
        return self._auto_rotate_enabled and self._transition is None

    # ── Control ────────────────────────────────────────────────────────────

    def start_transition(
        self,
        from_observer: Observer,
        to_observer: Observer,
        now_ms: float,
        duration_ms: float = DEFAULT_TRANSITION_MS,
    ) -> ViewTransition:
        """Fly from above one observer location to above another.

        Raises:
            InvalidObserverError: If either observer is invalid.
        """
        start = project_observer(ensure_observer(from_observer), self._distance)
        return self._begin(start, to_observer, now_ms, duration_ms)

    def start_transition_to(
        self,
        to_observer: Observer,
        now_ms: float,
        duration_ms: float = DEFAULT_TRANSITION_MS,
    ) -> ViewTransition:
        """Fly from wherever the camera currently is to above ``to_observer``."""
        return self._begin(self._position, to_observer, now_ms, duration_ms)

    def _begin(
        self,
        start: ScenePoint,
        to_observer: Observer,
        now_ms: float,
        duration_ms: float,
    ) -> ViewTransition:
        end = project_observer(ensure_observer(to_observer), self._distance)
        if self._transition is not None:
            LOG.debug("Abandoning active transition started at %.0f ms", self._transition.start_ms)
        self._transition = ViewTransition(
            start=start, end=end, start_ms=now_ms, duration_ms=duration_ms
        )
        self._position = start
        return self._transition

    def sample(self, now_ms: float) -> ViewSample:
        """Advance the active transition to ``now_ms`` and return the camera state."""
        if self._transition is None:
            return ViewSample(position=self._position, progress=1.0, eased=1.0, is_complete=True)
        s = self._transition.sample(now_ms)
        self._position = s.position
        if s.is_complete:
            self._transition = None
        return s

    def idle(self, elapsed_ms: float) -> ScenePoint:
        """Apply ambient auto-rotation for ``elapsed_ms`` when no transition is active."""
        if self.auto_rotate:
            self._position = auto_rotate_step(self._position, elapsed_ms)
        return self._position
