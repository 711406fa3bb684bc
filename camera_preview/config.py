import math

import cv2


class Config:
    """Central configuration for the camera preview geometry and demo host.

    The sensor-space and rotation constants follow the camera hardware
    convention and should not normally be changed. Camera and UI settings
    are tuned for a laptop/integrated webcam.
    """

    # --- Camera Settings ---
    CAMERA_INDEX = 0
    WIDTH = 640
    HEIGHT = 480
    FPS = 30
    CAMERA_FACING = "front"         # Integrated webcams face the user
    CAMERA_ORIENTATION = 0          # Sensor mount angle relative to natural orientation

    # Resolutions probed on the webcam, in the order they are offered to the selector.
    CANDIDATE_RESOLUTIONS = (
        (1920, 1080),
        (1280, 720),
        (1024, 768),
        (800, 600),
        (640, 480),
        (320, 240),
    )

    # --- Sensor Space ---
    SENSOR_MIN = -1000              # Focus/metering area range mandated by the camera API
    SENSOR_MAX = 1000

    # --- Rotation ---
    ROTATION_DELTA = 5              # Acceptance window around each right angle (degrees)
    ORIENTATION_UNKNOWN = -1        # Reported when the device lies flat

    # --- Preview Sizing ---
    ASPECT_TOLERANCE = 0.1          # Max aspect ratio difference for a "matching" preview
    ASPECT_TOLERANCE_START = 0.01
    ASPECT_TOLERANCE_STEP = 10
    ASPECT_TOLERANCE_LIMIT = 1.0

    # --- Focus & Metering Areas ---
    AREA_WIDTH_DP = 48              # Recommended minimum touch target
    AREA_HEIGHT_DP = 48
    DENSITY = 1.0                   # Pixels per DP on the host display
    AREA_WEIGHT = 10

    # --- Face Detection ---
    NO_FACE_DETECTED_DELAY = 0.08   # Seconds without faces before the overlay clears
    FACE_CONFIDENCE = 0.6
    FACE_MODEL_PATH = "assets/blaze_face_short_range.tflite"

    # --- Demo Window ---
    WINDOW_NAME = "Camera Preview"
    WINDOW_WIDTH = 960
    WINDOW_HEIGHT = 640

    # --- UI Theme (BGR format) ---
    UI_BG = (15, 15, 15)            # Dark background
    UI_GRID = (200, 200, 200)       # Light gray thirds grid
    UI_FACE = (0, 0, 255)           # Red face bounds
    UI_FOCUS = (120, 255, 0)        # Bright green focus area
    UI_METERING = (0, 200, 255)     # Amber metering area
    UI_TEXT = (240, 240, 240)       # Off-white text
    FONT = cv2.FONT_HERSHEY_SIMPLEX

    @classmethod
    def area_size(cls):
        """Focus/metering area size in display pixels."""
        # Ties round up, like the platform density conversion.
        width = math.floor(cls.AREA_WIDTH_DP * cls.DENSITY + 0.5)
        height = math.floor(cls.AREA_HEIGHT_DP * cls.DENSITY + 0.5)
        return width, height

    @classmethod
    def validate(cls):
        """Validate all configuration parameters."""
        assert 0 < cls.WIDTH <= 1920, "Width must be between 0 and 1920"
        assert 0 < cls.HEIGHT <= 1080, "Height must be between 0 and 1080"
        assert 0 < cls.FPS <= 120, "FPS must be between 0 and 120"
        assert cls.CAMERA_FACING in ("front", "back"), "Facing must be 'front' or 'back'"
        assert 0 <= cls.CAMERA_ORIENTATION < 360, "Orientation must be 0-359"
        assert cls.CAMERA_ORIENTATION % 90 == 0, "Orientation must be a right angle"
        assert cls.SENSOR_MIN < cls.SENSOR_MAX, "Sensor range is empty"
        assert 0 < cls.ROTATION_DELTA < 45, "Rotation delta should be 0-45"
        assert 0 < cls.ASPECT_TOLERANCE < 1.0, "Aspect tolerance should be 0-1.0"
        assert cls.ASPECT_TOLERANCE_STEP > 1, "Tolerance step must widen the search"
        assert 0 < cls.DENSITY <= 4.0, "Density should be 0-4.0"
        assert 0 < cls.NO_FACE_DETECTED_DELAY <= 1.0, "Face delay should be 0-1.0s"
        assert 0 < cls.FACE_CONFIDENCE <= 1.0, "Confidence must be 0-1.0"
        assert cls.WINDOW_WIDTH > 0 and cls.WINDOW_HEIGHT > 0, "Window must have an area"
