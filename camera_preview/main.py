import cv2
import numpy as np
import os
import time
import logging

from .camera import ThreadedCamera
from .config import Config
from .controller import AUTO_FOCUS, FOCUS_AREA, PreviewController
from .geometry import GeometryEngine
from .models import Facing, SensorInfo
from .overlay import PreviewOverlay
from .parameters import CameraParameters, find_camera_id

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

_ROTATE_CODES = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def render_preview(canvas, frame, bounds, display_orientation, is_front):
    """Orient the raw sensor frame like the display would and letterbox it into bounds."""
    if bounds.is_empty:
        return
    # Same order as the coordinate mapping: mirror, then rotate clockwise.
    if is_front:
        frame = cv2.flip(frame, 1)
    if display_orientation in _ROTATE_CODES:
        frame = cv2.rotate(frame, _ROTATE_CODES[display_orientation])
    canvas[bounds.top:bounds.bottom, bounds.left:bounds.right] = cv2.resize(
        frame, (bounds.width, bounds.height))


def window_size(display_rotation):
    # A rotated "device" turns the window portrait.
    if display_rotation % 180 == 90:
        return Config.WINDOW_HEIGHT, Config.WINDOW_WIDTH
    return Config.WINDOW_WIDTH, Config.WINDOW_HEIGHT


def load_face_detector():
    if not os.path.exists(Config.FACE_MODEL_PATH):
        logger.warning(f"Face model not found at {Config.FACE_MODEL_PATH}. Run download_model.py to enable faces.")
        return None
    try:
        from .detector import FaceDetector
        return FaceDetector()
    except Exception as e:
        logger.error(f"Failed to initialize MediaPipe FaceDetector: {e}")
        return None


def main():
    """
    Camera preview demo.
    Drives the preview geometry core from a webcam, mouse clicks and key presses.
    """
    # Validate configuration
    try:
        Config.validate()
    except AssertionError as e:
        logger.error(f"Configuration validation failed: {e}")
        return

    # Initialize Core Modules
    try:
        cam = ThreadedCamera(
            src=Config.CAMERA_INDEX, width=Config.WIDTH, height=Config.HEIGHT, fps=Config.FPS,
            facing=Config.CAMERA_FACING, orientation=Config.CAMERA_ORIENTATION,
        )
        cam.probe_resolutions()
        cam.start()
        time.sleep(0.5)  # Wait for camera to stabilize
        if not cam.is_running():
            logger.error("Camera failed to start")
            return
    except Exception as e:
        logger.error(f"Failed to initialize camera: {e}")
        return

    detector = load_face_detector()

    # One physical webcam, offered as both a back and a front sensor so switching can be tried.
    webcam = cam.sensor_info()
    sensors = [
        SensorInfo(Facing.BACK, webcam.orientation, webcam.supported_sizes),
        SensorInfo(Facing.FRONT, webcam.orientation, webcam.supported_sizes),
    ]
    camera_id = find_camera_id(sensors, front=webcam.is_front)

    controller = PreviewController()
    params = CameraParameters(
        supported_white_balance=("auto", "daylight", "fluorescent", "incandescent"),
        white_balance="auto",
        min_exposure_compensation=-2,
        max_exposure_compensation=2,
        max_zoom=4,
    )
    display_rotation = 0
    controller.attach_camera(sensors[camera_id], display_rotation)
    width, height = window_size(display_rotation)
    controller.layout(width, height)
    if controller.state.preview_size is not None:
        cam.set_preview_size(controller.state.preview_size)

    ui = {"grid": False, "status": "Ready", "detail": "Click to focus", "area": None}

    def on_mouse(event, x, y, flags, param):
        if event != cv2.EVENT_LBUTTONDOWN:
            return
        result = controller.on_touch(x, y)
        if result is None:
            return
        if result["action"] == AUTO_FOCUS:
            ui["area"] = None
            ui["status"], ui["detail"] = "Auto focus", f"Touch at ({x}, {y})"
            return
        state = controller.state
        area = result["area"]
        ui["area"] = (result["action"], GeometryEngine.map_rect_to_view(
            area, state.bounds, state.display_orientation, state.sensor.is_front))
        label = "Focus area" if result["action"] == FOCUS_AREA else "Metering area"
        ui["status"] = label
        ui["detail"] = f"Sensor ({area.left}, {area.top}, {area.right}, {area.bottom})"
        logger.info(f"{label}: {area}")

    cv2.namedWindow(Config.WINDOW_NAME)
    cv2.setMouseCallback(Config.WINDOW_NAME, on_mouse)

    logger.info("=" * 50)
    logger.info("  CAMERA PREVIEW GEOMETRY DEMO")
    logger.info("=" * 50)
    logger.info("Press [F] focus area, [M] metering area, [D] faces, [G] grid")
    logger.info("Press [R] rotate display, [S] switch camera")
    logger.info("Press [W] white balance, [E] exposure, [Z] zoom")
    logger.info("Press [Q] to quit")
    logger.info("-" * 50)

    p_time = 0
    frame_count = 0
    try:
        while True:
            success, raw_frame = cam.read()
            if not success:
                continue
            frame_count += 1

            if detector is not None and controller.state.face_detection_active:
                controller.on_faces(detector.find_faces(raw_frame))

            state = controller.state
            canvas = np.zeros((height, width, 3), dtype=np.uint8)
            canvas[:] = Config.UI_BG
            render_preview(canvas, raw_frame, state.bounds, state.display_orientation, state.sensor.is_front)

            if ui["grid"]:
                PreviewOverlay.draw_grid(canvas, state.bounds)
            PreviewOverlay.draw_faces(canvas, controller.visible_faces())
            if ui["area"] is not None:
                action, rect = ui["area"]
                PreviewOverlay.draw_area(canvas, rect, Config.UI_FOCUS if action == FOCUS_AREA else Config.UI_METERING)

            c_time = time.time()
            fps = 1 / (c_time - p_time) if p_time != 0 else 0
            p_time = c_time
            PreviewOverlay.render_status(canvas, ui["status"], ui["detail"], fps=fps)

            cv2.imshow(Config.WINDOW_NAME, canvas)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                logger.info("Quit command received")
                break
            elif key == ord('f'):
                if state.focus_area_active:
                    controller.stop_focus_area_selection()
                else:
                    controller.start_focus_area_selection()
                ui["status"] = f"Focus area {'on' if controller.state.focus_area_active else 'off'}"
            elif key == ord('m'):
                if state.metering_area_active:
                    controller.stop_metering_area_selection()
                else:
                    controller.start_metering_area_selection()
                ui["status"] = f"Metering area {'on' if controller.state.metering_area_active else 'off'}"
            elif key == ord('d'):
                if detector is None:
                    ui["status"], ui["detail"] = "Faces unavailable", "Run download_model.py"
                elif state.face_detection_active:
                    controller.stop_face_detection()
                    ui["status"] = "Face detection off"
                else:
                    controller.start_face_detection()
                    ui["status"] = "Face detection on"
            elif key == ord('g'):
                ui["grid"] = not ui["grid"]
            elif key == ord('r'):
                # Simulated orientation sensor reading for the next quarter turn.
                rotation = controller.on_orientation_changed((display_rotation + 90) % 360)
                if rotation is not None:
                    display_rotation = rotation.degrees
                    orientation = controller.set_display_rotation(display_rotation)
                    width, height = window_size(display_rotation)
                    controller.layout(width, height)
                    ui["area"] = None
                    ui["status"] = f"Display rotation {display_rotation}"
                    ui["detail"] = f"Display orientation {orientation}"
            elif key == ord('s'):
                camera_id = find_camera_id(sensors, front=not state.sensor.is_front)
                controller.attach_camera(sensors[camera_id], display_rotation)
                ui["area"] = None
                ui["status"] = f"{sensors[camera_id].facing.value.title()} camera"
                ui["detail"] = f"Display orientation {controller.state.display_orientation}"
            elif key == ord('w'):
                params = params.toggle_white_balance()
                ui["status"] = f"White balance {params.white_balance}"
            elif key == ord('e'):
                params = params.toggle_exposure()
                ui["status"] = f"Exposure {params.exposure_compensation:+d}"
            elif key == ord('z'):
                params = params.toggle_zoom()
                cam.apply_parameters(params)
                ui["status"] = f"Zoom {params.zoom}"

            if controller.state.preview_size is not None and controller.state.preview_size != state.preview_size:
                cam.set_preview_size(controller.state.preview_size)

    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    except Exception as e:
        logger.error(f"Unexpected error in main loop: {e}", exc_info=True)
    finally:
        # Cleanup
        logger.info("Shutting down preview...")
        controller.detach_camera()
        try:
            cam.release()
        except Exception as e:
            logger.error(f"Error releasing camera: {e}")
        if detector is not None:
            detector.close()
        cv2.destroyAllWindows()
        logger.info(f"Processed {frame_count} frames total")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
