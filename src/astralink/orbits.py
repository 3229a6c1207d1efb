"""Decorative satellite paths: fixed periodic motion, not orbit determination."""

import math
from dataclasses import dataclass

from astralink.models import ScenePoint


@dataclass(frozen=True)
class CircularOrbit:
    """Circle of ``radius`` about the y axis at ``height``, bobbing by ``tilt`` in step with z."""

    radius: float
    angular_speed: float  # Radians per second
    phase: float = 0.0  # Radians at t=0
    height: float = 0.0  # Constant y offset
    tilt: float = 0.0  # Amplitude of the vertical oscillation

    def angle(self, t_seconds: float) -> float:
        return self.angular_speed * t_seconds + self.phase

    def position(self, t_seconds: float) -> ScenePoint:
        a = self.angle(t_seconds)
        return ScenePoint(
            x=math.sin(a) * self.radius,
            y=self.height + math.cos(a) * self.tilt,
            z=math.cos(a) * self.radius,
        )

    @property
    def period(self) -> float:
        """Seconds per revolution; infinite when stationary."""
        if self.angular_speed == 0:
            return math.inf
        return 2 * math.pi / abs(self.angular_speed)


# Sky dome (radius 180) decorations
HUBBLE_ORBIT = CircularOrbit(radius=90.0, angular_speed=0.12, phase=1.0, height=55.0)
STARLINK_ORBIT = CircularOrbit(radius=110.0, angular_speed=0.2, phase=2.0, height=65.0)

# Globe (radius 2.5) decoration: x = cos(0.4t)·r, y = sin(0.4t)·tilt, z = sin(0.4t)·r
GLOBE_ISS_ORBIT = CircularOrbit(radius=2.65, angular_speed=-0.4, phase=math.pi / 2, tilt=0.25)

DOME_SATELLITES: dict[str, CircularOrbit] = {
    "Hubble": HUBBLE_ORBIT,
    "Starlink": STARLINK_ORBIT,
}
