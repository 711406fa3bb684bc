import math
from typing import Tuple

from .config import Config
from .errors import DegenerateBounds
from .models import Face, OrientationState, Rect, Resolution

SENSOR_SPAN = Config.SENSOR_MAX - Config.SENSOR_MIN

# Exact (cos, sin) for quarter turns so right-angle rotations stay on the integer grid.
_QUARTER_TURNS = {0: (1, 0), 90: (0, 1), 180: (-1, 0), 270: (0, -1)}


def _clamp(value, low, high):
    return max(low, min(high, value))


def _clamp_sensor(value):
    return _clamp(value, Config.SENSOR_MIN, Config.SENSOR_MAX)


def round_half_up(value):
    # Ties round towards +inf, as the camera API's area math does; round() goes to even.
    return math.floor(value + 0.5)


class GeometryEngine:
    """
    Handles preview orientation, coordinate mapping and preview layout.
    Translates between display pixels (relative to the preview bounds) and the
    camera sensor's normalized [-1000, 1000] area coordinates.
    """
    @staticmethod
    def display_orientation(display_rotation, sensor_orientation, is_front):
        # Clockwise rotation to apply to the sensor stream so it renders upright.
        return OrientationState(display_rotation, sensor_orientation, is_front).display_orientation

    @staticmethod
    def rotate_point(x, y, degrees, cx=0.0, cy=0.0):
        # Rotates a coordinate point (x, y) clockwise (on a y-down screen)
        # around a specific center point.
        turn = _QUARTER_TURNS.get(degrees % 360)
        if turn is not None:
            cos_a, sin_a = turn
        else:
            rads = math.radians(degrees)
            cos_a = math.cos(rads)
            sin_a = math.sin(rads)

        # Translate point to origin.
        tx = x - cx
        ty = y - cy

        # Perform rotation using the standard 2D rotation matrix.
        rx = tx * cos_a - ty * sin_a
        ry = tx * sin_a + ty * cos_a

        # Translate point back.
        return rx + cx, ry + cy

    @staticmethod
    def to_sensor_coordinates(x, y, bounds: Rect, display_orientation, is_front):
        # Maps a display-space point inside the preview bounds to sensor space.
        if bounds.width == 0 or bounds.height == 0:
            raise DegenerateBounds("Trying to map into sensor space from 0-dimensioned preview bounds.")

        # 1. Center on the preview bounds and scale to the sensor range.
        sx = (x - bounds.left) / bounds.width * SENSOR_SPAN + Config.SENSOR_MIN
        sy = (y - bounds.top) / bounds.height * SENSOR_SPAN + Config.SENSOR_MIN

        # 2. Undo the display orientation (counter-clockwise).
        sx, sy = GeometryEngine.rotate_point(sx, sy, -display_orientation)

        # 3. Front sensors see a laterally reversed image.
        if is_front:
            sx = -sx

        # 4. Constrain to the sensor range.
        return _clamp_sensor(sx), _clamp_sensor(sy)

    @staticmethod
    def to_view_coordinates(x, y, bounds: Rect, display_orientation, is_front):
        # Maps a sensor-space point to display pixels; exact inverse of to_sensor_coordinates.

        # 0. Mirror first so the rotation below sees what the user sees.
        if is_front:
            x = -x

        # 1. Apply the display orientation (clockwise).
        rx, ry = GeometryEngine.rotate_point(x, y, display_orientation)

        # 2. Scale from the sensor range into the preview bounds.
        vx = bounds.left + (rx - Config.SENSOR_MIN) / SENSOR_SPAN * bounds.width
        vy = bounds.top + (ry - Config.SENSOR_MIN) / SENSOR_SPAN * bounds.height

        # 3. Constrain to the preview bounds.
        return _clamp(vx, bounds.left, bounds.right), _clamp(vy, bounds.top, bounds.bottom)

    @staticmethod
    def map_rect_to_sensor(rect: Rect, bounds: Rect, display_orientation, is_front) -> Rect:
        x1, y1 = GeometryEngine.to_sensor_coordinates(
            rect.left, rect.top, bounds, display_orientation, is_front)
        x2, y2 = GeometryEngine.to_sensor_coordinates(
            rect.right, rect.bottom, bounds, display_orientation, is_front)
        # Rotation and mirroring can swap which corner is min/max.
        return Rect(round_half_up(x1), round_half_up(y1), round_half_up(x2), round_half_up(y2)).sorted()

    @staticmethod
    def map_rect_to_view(rect: Rect, bounds: Rect, display_orientation, is_front) -> Rect:
        x1, y1 = GeometryEngine.to_view_coordinates(
            rect.left, rect.top, bounds, display_orientation, is_front)
        x2, y2 = GeometryEngine.to_view_coordinates(
            rect.right, rect.bottom, bounds, display_orientation, is_front)
        return Rect(round_half_up(x1), round_half_up(y1), round_half_up(x2), round_half_up(y2)).sorted()

    @staticmethod
    def map_face_to_view(face: Face, bounds: Rect, display_orientation, is_front) -> Face:
        def point(p):
            if p is None:
                return None
            vx, vy = GeometryEngine.to_view_coordinates(p[0], p[1], bounds, display_orientation, is_front)
            return round_half_up(vx), round_half_up(vy)

        return Face(
            rect=GeometryEngine.map_rect_to_view(face.rect, bounds, display_orientation, is_front),
            score=face.score,
            left_eye=point(face.left_eye),
            right_eye=point(face.right_eye),
            mouth=point(face.mouth),
        )

    @staticmethod
    def area_at(x, y, area_width, area_height, bounds: Rect, display_orientation, is_front) -> Rect:
        """Sensor-space focus/metering area centered on a display-space touch point.

        Args:
            x, y: Touch point in display pixels
            area_width, area_height: Area size in display pixels
            bounds: Current preview bounds in display pixels
            display_orientation: Angle from display_orientation()
            is_front: Whether the attached sensor faces the user

        Raises:
            DegenerateBounds: The preview has not been laid out yet.
        """
        if bounds.width == 0 or bounds.height == 0:
            raise DegenerateBounds("Trying to create camera area from 0-dimensioned preview area.")

        cx, cy = GeometryEngine.to_sensor_coordinates(x, y, bounds, display_orientation, is_front)

        # Display pixels -> sensor units, per axis.
        half_w = area_width * 0.5 * SENSOR_SPAN / bounds.width
        half_h = area_height * 0.5 * SENSOR_SPAN / bounds.height
        # A quarter turn puts the display's x axis on the sensor's y axis.
        if display_orientation % 180 == 90:
            half_w, half_h = half_h, half_w

        return Rect(
            max(round_half_up(cx - half_w), Config.SENSOR_MIN),
            max(round_half_up(cy - half_h), Config.SENSOR_MIN),
            min(round_half_up(cx + half_w), Config.SENSOR_MAX),
            min(round_half_up(cy + half_h), Config.SENSOR_MAX),
        )

    @staticmethod
    def fit_preview(width, height, preview_size: Resolution) -> Tuple[int, int]:
        # Largest size with the preview's aspect ratio that fits in width x height.
        preview_width = preview_size.width
        preview_height = preview_size.height

        # Preview sizes are landscape; a portrait container shows them rotated.
        if width < height:
            preview_width, preview_height = preview_height, preview_width

        aspect = preview_width / preview_height
        preview_width = round_half_up(height * aspect)
        if preview_width > width:
            preview_width = width
            preview_height = round_half_up(width / aspect)
        else:
            preview_height = height
        return preview_width, preview_height

    @staticmethod
    def center_bounds(container_width, container_height, view_width, view_height) -> Rect:
        left = round_half_up((container_width - view_width) * 0.5)
        top = round_half_up((container_height - view_height) * 0.5)
        return Rect(left, top, left + view_width, top + view_height)

    @staticmethod
    def thirds_grid(bounds: Rect):
        # Positions of the two vertical and two horizontal "rule of thirds" lines.
        xs = (bounds.left + round_half_up(bounds.width / 3), bounds.left + round_half_up(bounds.width * 2 / 3))
        ys = (bounds.top + round_half_up(bounds.height / 3), bounds.top + round_half_up(bounds.height * 2 / 3))
        return xs, ys
