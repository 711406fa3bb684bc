import cv2
import logging
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from .config import Config
from .geometry import SENSOR_SPAN
from .models import Face, Rect

logger = logging.getLogger(__name__)

# BlazeFace keypoint order: right eye, left eye, nose tip, mouth, right ear, left ear.
RIGHT_EYE, LEFT_EYE, NOSE_TIP, MOUTH = 0, 1, 2, 3


def _to_sensor(value, extent):
    # Frame pixels [0, extent] -> sensor units [-1000, 1000].
    return round(value / extent * SENSOR_SPAN + Config.SENSOR_MIN)


def _keypoint(keypoints, index):
    if keypoints is None or len(keypoints) <= index:
        return None
    kp = keypoints[index]
    return _to_sensor(kp.x, 1.0), _to_sensor(kp.y, 1.0)


def detection_to_face(detection, frame_width, frame_height) -> Face:
    """Convert one MediaPipe detection on a raw sensor frame into a sensor-space Face."""
    box = detection.bounding_box
    rect = Rect(
        max(_to_sensor(box.origin_x, frame_width), Config.SENSOR_MIN),
        max(_to_sensor(box.origin_y, frame_height), Config.SENSOR_MIN),
        min(_to_sensor(box.origin_x + box.width, frame_width), Config.SENSOR_MAX),
        min(_to_sensor(box.origin_y + box.height, frame_height), Config.SENSOR_MAX),
    )
    score = detection.categories[0].score if detection.categories else 0.0
    keypoints = detection.keypoints
    return Face(
        rect=rect,
        score=max(1, min(100, round(score * 100))),
        left_eye=_keypoint(keypoints, LEFT_EYE),
        right_eye=_keypoint(keypoints, RIGHT_EYE),
        mouth=_keypoint(keypoints, MOUTH),
    )


class FaceDetector:
    """
    Interfaces with the MediaPipe face detector.
    Reports faces the way a camera's own face detection does: in sensor space.
    """
    def __init__(self, model_path=Config.FACE_MODEL_PATH, min_detection_confidence=Config.FACE_CONFIDENCE):
        base_options = python.BaseOptions(model_asset_path=model_path)
        options = vision.FaceDetectorOptions(
            base_options=base_options,
            min_detection_confidence=min_detection_confidence,
        )
        self.detector = vision.FaceDetector.create_from_options(options)
        logger.info(f"Face detector loaded from {model_path}")

    def find_faces(self, img):
        # MediaPipe requires RGB color format; convert from OpenCV's BGR.
        img_rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=img_rgb)

        # Execute face detection model.
        results = self.detector.detect(mp_image)

        h, w = img.shape[:2]
        return [detection_to_face(d, w, h) for d in results.detections]

    def close(self):
        self.detector.close()
