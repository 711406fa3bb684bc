import logging
import time
from dataclasses import replace
from typing import Iterable, Optional

from .config import Config
from .errors import DegenerateBounds
from .geometry import GeometryEngine, round_half_up
from .models import EMPTY_RECT, Face, OrientationState, PreviewState, SensorInfo
from .rotation import OrientationTracker
from .sizing import select_preview_size

logger = logging.getLogger(__name__)

# Touch actions reported by on_touch().
FOCUS_AREA = "FOCUS_AREA"
METERING_AREA = "METERING_AREA"
AUTO_FOCUS = "AUTO_FOCUS"


class PreviewController:
    """
    Owns the geometry state of one camera preview.
    The host calls in with snapshots of what changed (camera attached, display
    rotated, surface laid out, screen touched, faces detected) and gets back
    the values to push to the camera or draw on screen. Each instance is
    independent; call it from the thread that owns the preview.
    """
    def __init__(self, area_size=None):
        self.state = PreviewState()
        self.tracker = OrientationTracker()
        self.area_width, self.area_height = area_size or Config.area_size()

    # --- Camera attach / orientation ---

    def attach_camera(self, sensor: SensorInfo, display_rotation=0):
        """Attach a sensor and compute its display orientation."""
        self.state = replace(
            self.state,
            sensor=sensor,
            orientation=OrientationState(display_rotation, sensor.orientation, sensor.is_front),
        )
        orientation = self.state.display_orientation
        logger.info(f"Camera attached: {sensor.facing.value} facing, mount {sensor.orientation}, "
                    f"display orientation {orientation}")

        # Re-select the preview size if the surface already has a layout.
        if self.state.surface is not None:
            self.layout(*self.state.surface)
        return orientation

    def detach_camera(self):
        self.state = replace(
            self.state,
            sensor=None,
            orientation=OrientationState(self.state.display_rotation),
            preview_size=None,
            faces=(),
            faces_updated_at=0.0,
        )
        logger.info("Camera detached")

    def set_display_rotation(self, display_rotation):
        """Recompute the display orientation if the display rotation changed."""
        if display_rotation == self.state.display_rotation:
            return self.state.display_orientation

        self.state = replace(
            self.state, orientation=replace(self.state.orientation, display_rotation=display_rotation))
        orientation = self.state.display_orientation
        if self.state.sensor is not None:
            logger.info(f"Display rotated to {display_rotation}, display orientation {orientation}")
        return orientation

    def on_orientation_changed(self, degrees):
        """Feed a raw orientation reading; returns the new Rotation on a transition."""
        rotation = self.tracker.update(degrees)
        if rotation is not None:
            self.state = replace(self.state, rotation=rotation)
        return rotation

    # --- Layout ---

    def layout(self, width, height):
        """
        Layout Pipeline:
        1. Select the preview size for the surface (keep the old one if none fits).
        2. Letterbox the preview into the surface.
        3. Center it and remember the bounds for touch and face mapping.
        """
        self.state = replace(self.state, surface=(width, height))
        preview_size = self.state.preview_size

        # --- 1. Preview Size ---
        sensor = self.state.sensor
        if sensor is not None:
            selected = select_preview_size(sensor.supported_sizes, width, height)
            if selected is None:
                logger.warning(f"No suitable preview size for {width}x{height}, keeping {preview_size}")
            elif selected != preview_size:
                logger.info(f"Preview size: {selected.width}x{selected.height} for surface {width}x{height}")
                preview_size = selected

        if preview_size is None:
            self.state = replace(self.state, preview_size=None, bounds=EMPTY_RECT)
            return EMPTY_RECT

        # --- 2. & 3. Fit and Center ---
        view_width, view_height = GeometryEngine.fit_preview(width, height, preview_size)
        bounds = GeometryEngine.center_bounds(width, height, view_width, view_height)
        self.state = replace(self.state, preview_size=preview_size, bounds=bounds)
        return bounds

    # --- Focus and metering areas ---

    def start_focus_area_selection(self):
        self.state = replace(self.state, focus_area_active=True, metering_area_active=False)

    def stop_focus_area_selection(self):
        self.state = replace(self.state, focus_area_active=False)

    def start_metering_area_selection(self):
        self.state = replace(self.state, metering_area_active=True, focus_area_active=False)

    def stop_metering_area_selection(self):
        self.state = replace(self.state, metering_area_active=False)

    def area_at(self, x, y):
        """Sensor-space area at a display point. Raises DegenerateBounds with no camera or before layout."""
        sensor = self.state.sensor
        if sensor is None:
            raise DegenerateBounds("Preview has no camera attached yet.")
        return GeometryEngine.area_at(
            x, y, self.area_width, self.area_height,
            self.state.bounds, self.state.display_orientation, sensor.is_front)

    def on_touch(self, x, y) -> Optional[dict]:
        """Translate a touch into a focus area, metering area or plain auto-focus request."""
        state = self.state
        if state.sensor is None:
            return None

        if ((state.focus_area_active or state.metering_area_active)
                and state.bounds.contains(round_half_up(x), round_half_up(y))):
            action = FOCUS_AREA if state.focus_area_active else METERING_AREA
            return {"action": action, "area": self.area_at(x, y), "weight": Config.AREA_WEIGHT}

        return {"action": AUTO_FOCUS, "area": None, "weight": 0}

    # --- Face detection ---

    def start_face_detection(self):
        self.state = replace(self.state, face_detection_active=True)

    def stop_face_detection(self):
        self.state = replace(self.state, face_detection_active=False, faces=(), faces_updated_at=0.0)

    def on_faces(self, faces: Iterable[Face], now=None):
        """Map sensor-space faces into display space for the overlay."""
        faces = list(faces)
        state = self.state
        # Empty updates let the previous faces expire on their own.
        if not faces or state.sensor is None or not state.face_detection_active:
            return list(state.faces)

        mapped = tuple(
            GeometryEngine.map_face_to_view(
                face, state.bounds, state.display_orientation, state.sensor.is_front)
            for face in faces
        )
        self.state = replace(
            state,
            faces=mapped,
            faces_updated_at=time.time() if now is None else now,
        )
        return list(mapped)

    def visible_faces(self, now=None):
        """Faces to draw; cleared once no face has been reported for a short delay."""
        state = self.state
        if not state.faces:
            return []
        now = time.time() if now is None else now
        if now - state.faces_updated_at > Config.NO_FACE_DETECTED_DELAY:
            self.state = replace(state, faces=(), faces_updated_at=0.0)
            return []
        return list(state.faces)
