"""
Simulated clock that supplies instants to the sky view.

The simulated time advances by ``speed`` simulated seconds per wall-clock
second: 0 pauses, 1 is real time, negative runs backwards. Changing the
speed re-anchors the clock so simulated time never jumps.
"""

import time
from collections.abc import Callable
from datetime import datetime, timezone

from astralink.sidereal import Instant, instant_to_epoch_ms

# Paused, real time, 1 min/s, 10 min/s, 1 h/s
SPEED_PRESETS = (0, 1, 60, 600, 3600)


class SimulatedClock:
    def __init__(
        self,
        start: Instant | None = None,
        speed: float = 0,
        time_source: Callable[[], float] = time.time,
    ):
        self._time_source = time_source
        self._speed = float(speed)
        self._anchor_wall_ms = self._wall_ms()
        self._anchor_sim_ms = (
            self._anchor_wall_ms if start is None else instant_to_epoch_ms(start)
        )

    def _wall_ms(self) -> float:
        return self._time_source() * 1000.0

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def paused(self) -> bool:
        return self._speed == 0

    def now_ms(self) -> float:
        """Current simulated instant in epoch milliseconds."""
        elapsed = self._wall_ms() - self._anchor_wall_ms
        return self._anchor_sim_ms + elapsed * self._speed

    def now(self) -> datetime:
        return datetime.fromtimestamp(self.now_ms() / 1000.0, tz=timezone.utc)

    def set_speed(self, speed: float) -> None:
        self._reanchor()
        self._speed = float(speed)

    def reset(self, instant: Instant | None = None) -> None:
        """Jump to ``instant`` (default: the wall clock), keeping the speed."""
        self._anchor_wall_ms = self._wall_ms()
        self._anchor_sim_ms = (
            self._anchor_wall_ms if instant is None else instant_to_epoch_ms(instant)
        )

    def _reanchor(self) -> None:
        now = self.now_ms()
        self._anchor_wall_ms = self._wall_ms()
        self._anchor_sim_ms = now
