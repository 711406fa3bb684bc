import cv2
import numpy as np
import logging
from typing import Iterable, Optional, Tuple

from .config import Config
from .geometry import GeometryEngine
from .models import Face, Rect

logger = logging.getLogger(__name__)

class PreviewOverlay:
    """Draws the preview decorations: thirds grid, faces, selected area, status strip."""

    @staticmethod
    def draw_grid(img: np.ndarray, bounds: Rect, color=Config.UI_GRID, thickness: int = 1) -> None:
        """Draw the "Rule of Thirds" grid inside the preview bounds."""
        if bounds.is_empty:
            return
        xs, ys = GeometryEngine.thirds_grid(bounds)
        for x in xs:
            cv2.line(img, (x, bounds.top), (x, bounds.bottom - 1), color, thickness)
        for y in ys:
            cv2.line(img, (bounds.left, y), (bounds.right - 1, y), color, thickness)

    @staticmethod
    def draw_faces(img: np.ndarray, faces: Iterable[Face], show_score: bool = True,
                   color=Config.UI_FACE) -> None:
        """Draw display-space face bounds, landmarks and optional scores."""
        for face in faces:
            r = face.rect
            cv2.rectangle(img, (r.left, r.top), (r.right, r.bottom), color, 1)
            for point in (face.left_eye, face.right_eye, face.mouth):
                if point is not None:
                    cv2.circle(img, point, 3, color, -1)
            if show_score:
                cv2.putText(img, f"{face.score}", (r.left + 4, r.top + 16), Config.FONT, 0.45, color, 1,
                            cv2.LINE_AA)

    @staticmethod
    def draw_area(img: np.ndarray, area: Optional[Rect], color: Tuple[int, int, int]) -> None:
        """Draw a display-space focus or metering area."""
        if area is None or area.is_empty:
            return
        cv2.rectangle(img, (area.left, area.top), (area.right, area.bottom), color, 2)
        cx = (area.left + area.right) // 2
        cy = (area.top + area.bottom) // 2
        cv2.circle(img, (cx, cy), 3, color, -1)

    @staticmethod
    def render_status(img: np.ndarray, main_text: str, sub_text: str, fps: float = 0) -> None:
        """Render the status strip along the top edge.

        Args:
            img: Frame to render on
            main_text: Primary status text
            sub_text: Secondary status text
            fps: Current FPS for display
        """
        try:
            if img is None or img.size == 0:
                return

            w = img.shape[1]
            strip_h = 50

            overlay = img.copy()
            cv2.rectangle(overlay, (0, 0), (w, strip_h), Config.UI_BG, -1)
            cv2.addWeighted(overlay, 0.8, img, 0.2, 0, img)

            cv2.putText(img, main_text.upper()[:40], (12, 20), Config.FONT, 0.55, Config.UI_TEXT, 1, cv2.LINE_AA)
            cv2.putText(img, sub_text[:70], (12, 40), Config.FONT, 0.42, (180, 180, 180), 1, cv2.LINE_AA)
            cv2.putText(img, f"FPS: {int(fps)}", (w - 80, 20), Config.FONT, 0.4, (100, 100, 100), 1)
        except Exception as e:
            logger.error(f"Status rendering error: {e}")
