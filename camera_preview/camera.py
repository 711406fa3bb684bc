import cv2
import threading
import logging

from .config import Config
from .models import Facing, Resolution, SensorInfo

logger = logging.getLogger(__name__)

class ThreadedCamera:
    """Thread-safe webcam handler that also describes its sensor."""

    def __init__(self, src=0, width=640, height=480, fps=30, facing="front", orientation=0):
        self.src = src
        self.width = width
        self.height = height
        self.fps = fps
        self.facing = Facing(facing)
        self.orientation = orientation

        self.cap = None
        self.frame = None
        self.success = False
        self.stopped = True
        self.lock = threading.Lock()
        self.cap_lock = threading.Lock()  # Device access; frames use self.lock
        self.thread = None
        self.supported_sizes = ()

        # Initialize camera
        if not self._init_camera():
            logger.warning("Camera initialization failed, will retry on start")

    def _init_camera(self):
        """Initialize camera with proper error handling."""
        try:
            self.cap = cv2.VideoCapture(self.src)
            if not self.cap.isOpened():
                logger.error(f"Failed to open camera {self.src}")
                return False

            self._apply_size(self.width, self.height)
            self.cap.set(cv2.CAP_PROP_FPS, self.fps)
            self.cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)

            # Read initial frame
            self.success, self.frame = self.cap.read()
            return self.success
        except Exception as e:
            logger.error(f"Camera initialization error: {e}")
            return False

    def _apply_size(self, width, height):
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        return int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH)), int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

    def probe_resolutions(self, candidates=Config.CANDIDATE_RESOLUTIONS):
        """Ask the device for each candidate size and keep what it actually delivers.

        Must run before start(); the capture size is restored afterwards.
        """
        if self.cap is None or not self.cap.isOpened():
            return ()

        sizes = []
        with self.cap_lock:
            for width, height in candidates:
                actual = Resolution(*self._apply_size(width, height))
                if actual.width > 0 and actual.height > 0 and actual not in sizes:
                    sizes.append(actual)
            self._apply_size(self.width, self.height)

        self.supported_sizes = tuple(sizes)
        logger.info(f"Supported preview sizes: {', '.join(f'{s.width}x{s.height}' for s in sizes)}")
        return self.supported_sizes

    def sensor_info(self):
        """Sensor descriptor for the geometry core."""
        return SensorInfo(
            facing=self.facing,
            orientation=self.orientation,
            supported_sizes=self.supported_sizes,
        )

    def set_preview_size(self, size: Resolution):
        with self.cap_lock:
            self.width, self.height = self._apply_size(size.width, size.height)
        logger.info(f"Capture size set to {self.width}x{self.height}")

    def apply_parameters(self, params):
        """Push the parameters a webcam exposes through OpenCV (zoom only)."""
        if not params.zoom_supported:
            return False
        with self.cap_lock:
            accepted = self.cap.set(cv2.CAP_PROP_ZOOM, params.zoom)
        if not accepted:
            logger.warning(f"Camera rejected zoom {params.zoom}")
        return accepted

    def start(self):
        """Start the camera thread."""
        if self.cap is None or not self.cap.isOpened():
            if not self._init_camera():
                raise RuntimeError("Failed to initialize camera")

        self.stopped = False
        self.thread = threading.Thread(target=self._update_loop, daemon=True)
        self.thread.start()
        logger.info(f"Camera started: {self.width}x{self.height}@{self.fps}fps")
        return self

    def _update_loop(self):
        """Main camera update loop."""
        while not self.stopped:
            try:
                with self.cap_lock:
                    success, frame = self.cap.read()
                if success:
                    with self.lock:
                        self.success = True
                        self.frame = frame
                else:
                    logger.warning("Failed to read frame")
                    break
            except Exception as e:
                logger.error(f"Error in camera loop: {e}")
                break

    def read(self):
        """Get current frame safely."""
        with self.lock:
            if self.frame is not None and self.success:
                return True, self.frame.copy()
            return False, None

    def is_running(self):
        """Check if camera is actively running."""
        return not self.stopped and self.cap is not None and self.cap.isOpened()

    def release(self):
        """Safely release camera resources."""
        self.stopped = True
        if self.thread is not None:
            self.thread.join(timeout=2.0)
        if self.cap is not None:
            self.cap.release()
        logger.info("Camera released")
