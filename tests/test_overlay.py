import numpy as np
import pytest

from camera_preview.config import Config
from camera_preview.models import EMPTY_RECT, Face, Rect
from camera_preview.overlay import PreviewOverlay

GREEN = (0, 255, 0)


@pytest.fixture
def canvas():
    return np.zeros((600, 1000, 3), dtype=np.uint8)


def test_grid_lines_sit_on_thirds(canvas):
    PreviewOverlay.draw_grid(canvas, Rect(100, 0, 900, 600))

    assert tuple(canvas[300, 367]) == Config.UI_GRID
    assert tuple(canvas[300, 633]) == Config.UI_GRID
    assert tuple(canvas[200, 500]) == Config.UI_GRID
    assert tuple(canvas[400, 500]) == Config.UI_GRID
    # Nothing outside the preview.
    assert not canvas[:, :100].any()


def test_empty_bounds_draw_nothing(canvas):
    PreviewOverlay.draw_grid(canvas, EMPTY_RECT)
    PreviewOverlay.draw_area(canvas, None, GREEN)
    PreviewOverlay.draw_area(canvas, EMPTY_RECT, GREEN)
    assert not canvas.any()


def test_area_outline_and_center(canvas):
    PreviewOverlay.draw_area(canvas, Rect(100, 100, 200, 200), GREEN)
    assert tuple(canvas[100, 150]) == GREEN
    assert tuple(canvas[150, 150]) == GREEN
    assert not canvas[120, 120].any()


def test_faces_with_landmarks(canvas):
    face = Face(Rect(100, 100, 300, 300), 80, left_eye=(150, 150), right_eye=(250, 150), mouth=(200, 250))
    PreviewOverlay.draw_faces(canvas, [face], show_score=False)

    assert tuple(canvas[100, 200]) == Config.UI_FACE
    assert tuple(canvas[150, 150]) == Config.UI_FACE
    assert tuple(canvas[250, 200]) == Config.UI_FACE


def test_status_strip_is_blended(canvas):
    PreviewOverlay.render_status(canvas, "Ready", "")
    # 80% of the strip color over black.
    assert tuple(canvas[48, 990]) == tuple(round(c * 0.8) for c in Config.UI_BG)
    assert not canvas[100:].any()


def test_status_ignores_missing_frame():
    PreviewOverlay.render_status(None, "Ready", "")
