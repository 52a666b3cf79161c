"""Small numeric helpers shared by the control loops."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass

_TWO_PI = 2.0 * math.pi
_WRAP_THRESHOLD = 3.0


def rad_format(ang: float) -> float:
    """Wrap an angle in radians into the range [-pi, pi)."""
    ans = math.fmod(ang + math.pi, _TWO_PI)
    return ans + math.pi if ans < 0.0 else ans - math.pi


def sleep_ms(dur: float) -> None:
    """Sleep for ``dur`` milliseconds."""
    time.sleep(dur / 1000.0)


@dataclass
class RealRad:
    """Unwraps an angle that jumps between -pi and pi into a continuous value."""

    count: int = 0
    now: float = 0.0
    last: float = 0.0

    def update(self, ref: float) -> None:
        """Feed a new wrapped angle and refresh the continuous angle ``now``."""
        if self.last < -_WRAP_THRESHOLD and ref > _WRAP_THRESHOLD:
            self.count -= 1
        elif self.last > _WRAP_THRESHOLD and ref < -_WRAP_THRESHOLD:
            self.count += 1
        self.last = ref
        self.now = self.count * _TWO_PI + ref