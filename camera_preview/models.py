from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .rotation import Rotation

Point = Tuple[float, float]


class Facing(Enum):
    BACK = "back"
    FRONT = "front"


@dataclass(frozen=True)
class Resolution:
    """One sensor-supported preview size, in the sensor's native orientation."""

    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in either display pixels or sensor units.

    A rect carries no coordinate space of its own; callers track which one
    it is in.
    """

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        return self.left >= self.right or self.top >= self.bottom

    def contains(self, x, y) -> bool:
        # Half-open like a platform view rect: right and bottom edges are outside.
        return not self.is_empty and self.left <= x < self.right and self.top <= y < self.bottom

    def sorted(self) -> "Rect":
        """Return the same rect with left <= right and top <= bottom."""
        return Rect(
            min(self.left, self.right),
            min(self.top, self.bottom),
            max(self.left, self.right),
            max(self.top, self.bottom),
        )


EMPTY_RECT = Rect(0, 0, 0, 0)


@dataclass(frozen=True)
class SensorInfo:
    """Everything the geometry core needs to know about an attached camera."""

    facing: Facing
    orientation: int
    supported_sizes: Tuple[Resolution, ...] = ()

    @property
    def is_front(self) -> bool:
        return self.facing is Facing.FRONT


@dataclass(frozen=True)
class OrientationState:
    """Display rotation plus the attached sensor's mount and facing."""

    display_rotation: int = 0
    sensor_orientation: int = 0
    is_front: bool = False

    @property
    def display_orientation(self) -> int:
        degrees = self.display_rotation % 360
        if self.is_front:
            result = (self.sensor_orientation + degrees) % 360
            # Compensation for mirroring of front cameras.
            return (360 - result) % 360
        return (self.sensor_orientation - degrees + 360) % 360


@dataclass(frozen=True)
class Face:
    """A detected face. Coordinates are in sensor or display space depending on the stage."""

    rect: Rect
    score: int
    left_eye: Optional[Point] = None
    right_eye: Optional[Point] = None
    mouth: Optional[Point] = None


@dataclass(frozen=True)
class PreviewState:
    """Everything a preview instance remembers between host events."""

    sensor: Optional[SensorInfo] = None
    orientation: OrientationState = OrientationState()
    surface: Optional[Tuple[int, int]] = None
    preview_size: Optional[Resolution] = None
    bounds: Rect = EMPTY_RECT
    focus_area_active: bool = False
    metering_area_active: bool = False
    face_detection_active: bool = False
    rotation: Optional[Rotation] = None
    faces: Tuple[Face, ...] = field(default_factory=tuple)
    faces_updated_at: float = 0.0

    @property
    def has_camera(self) -> bool:
        return self.sensor is not None

    @property
    def display_rotation(self) -> int:
        return self.orientation.display_rotation

    @property
    def display_orientation(self) -> int:
        return self.orientation.display_orientation
