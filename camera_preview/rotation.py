import logging
from enum import Enum
from typing import Optional

from .config import Config
from .errors import UnclassifiedRotation

logger = logging.getLogger(__name__)


class Rotation(Enum):
    """The four right-angle device orientations, each with a narrow acceptance window."""

    ZERO = 0
    NINETY = 90
    ONE_EIGHTY = 180
    TWO_SEVENTY = 270

    @property
    def degrees(self) -> int:
        return self.value

    @property
    def lower_bound(self) -> int:
        return (self.value - Config.ROTATION_DELTA + 360) % 360

    @property
    def upper_bound(self) -> int:
        return (self.value + Config.ROTATION_DELTA) % 360

    def test(self, degrees: int) -> bool:
        """Whether a raw orientation reading falls in this rotation's window."""
        degrees %= 360
        lower, upper = self.lower_bound, self.upper_bound
        if lower < upper:
            return lower <= degrees <= upper
        # Window wraps across 0/360 (ZERO only).
        return degrees >= lower or degrees <= upper


def classify(degrees: int) -> Optional[Rotation]:
    """Bucket a raw orientation reading, or None if it sits in a dead zone."""
    for rotation in Rotation:
        if rotation.test(degrees):
            return rotation
    return None


def require_rotation(degrees: int) -> Rotation:
    rotation = classify(degrees)
    if rotation is None:
        raise UnclassifiedRotation(degrees)
    return rotation


# Platform surface rotation constants (ROTATION_0 .. ROTATION_270) to degrees.
_SURFACE_ROTATION_DEGREES = {0: 0, 1: 90, 2: 180, 3: 270}


def display_rotation_degrees(surface_rotation: int) -> int:
    """Counter-clockwise rotation of the screen in degrees; unknown values read as 0."""
    return _SURFACE_ROTATION_DEGREES.get(surface_rotation, 0)


class OrientationTracker:
    """
    Turns a stream of raw orientation readings into rotation transitions.
    Readings in the dead zones between windows keep the last rotation, so the
    host only recomputes orientation-dependent state on a real change.
    """

    def __init__(self, initial: Optional[Rotation] = None):
        self.rotation = initial

    def update(self, degrees: int) -> Optional[Rotation]:
        """Feed one reading; return the new rotation only when it changed."""
        if degrees == Config.ORIENTATION_UNKNOWN:
            return None

        rotation = classify(degrees)
        if rotation is None or rotation is self.rotation:
            return None

        logger.debug(f"Rotation changed: {self.rotation} -> {rotation} (reading {degrees})")
        self.rotation = rotation
        return rotation

    def reset(self):
        self.rotation = None
