import pytest

from camera_preview.errors import DegenerateBounds
from camera_preview.geometry import GeometryEngine, round_half_up
from camera_preview.models import Face, OrientationState, Rect, Resolution

ANGLES = (0, 90, 180, 270)


# --- Display orientation ---

def test_display_orientation_concrete_cases():
    assert GeometryEngine.display_orientation(0, 90, False) == 90
    # Front: (270 + 90) % 360 = 0, mirrored (360 - 0) % 360 = 0.
    assert GeometryEngine.display_orientation(90, 270, True) == 0
    assert GeometryEngine.display_orientation(90, 90, False) == 0
    assert GeometryEngine.display_orientation(0, 270, True) == 90


@pytest.mark.parametrize("mount", ANGLES)
@pytest.mark.parametrize("rotation", ANGLES)
@pytest.mark.parametrize("is_front", (False, True))
def test_display_orientation_is_periodic(mount, rotation, is_front):
    angle = GeometryEngine.display_orientation(rotation, mount, is_front)
    assert angle == GeometryEngine.display_orientation(rotation + 360, mount, is_front)
    assert angle in ANGLES


@pytest.mark.parametrize("mount", ANGLES)
@pytest.mark.parametrize("rotation", ANGLES)
def test_front_orientation_is_mirrored_raw_angle(mount, rotation):
    raw = (mount + rotation) % 360
    assert GeometryEngine.display_orientation(rotation, mount, True) == (360 - raw) % 360


def test_orientation_state_derives_angle():
    assert OrientationState(0, 90, False).display_orientation == 90
    assert OrientationState(90, 270, True).display_orientation == 0


def test_rotate_point_is_clockwise_on_screen():
    assert GeometryEngine.rotate_point(1, 0, 90) == (0, 1)
    assert GeometryEngine.rotate_point(0, 1, 90) == (-1, 0)
    assert GeometryEngine.rotate_point(1, 0, -90) == (0, -1)
    assert GeometryEngine.rotate_point(3, 2, 180, cx=2, cy=2) == (1, 2)


# --- Display -> sensor ---

@pytest.mark.parametrize("angle", ANGLES)
@pytest.mark.parametrize("is_front", (False, True))
def test_preview_center_maps_to_sensor_origin(bounds, angle, is_front):
    x, y = GeometryEngine.to_sensor_coordinates(440, 320, bounds, angle, is_front)
    assert (x, y) == pytest.approx((0, 0))


def test_corners_without_rotation(bounds):
    assert GeometryEngine.to_sensor_coordinates(40, 20, bounds, 0, False) == (-1000, -1000)
    assert GeometryEngine.to_sensor_coordinates(840, 620, bounds, 0, False) == (1000, 1000)


def test_front_sensor_mirrors_horizontally(bounds):
    assert GeometryEngine.to_sensor_coordinates(40, 20, bounds, 0, True) == (1000, -1000)


def test_quarter_turn_puts_top_left_on_sensor_bottom_left(bounds):
    # The sensor image is rotated clockwise onto the display, so the display's
    # top-left corner shows the sensor's bottom-left corner.
    assert GeometryEngine.to_sensor_coordinates(40, 20, bounds, 90, False) == (-1000, 1000)


def test_sensor_coordinates_are_clamped(bounds):
    x, y = GeometryEngine.to_sensor_coordinates(-500, 5000, bounds, 0, False)
    assert (x, y) == (-1000, 1000)


def test_zero_area_bounds_are_rejected():
    with pytest.raises(DegenerateBounds):
        GeometryEngine.to_sensor_coordinates(10, 10, Rect(0, 0, 0, 100), 0, False)


# --- Rectangles ---

@pytest.mark.parametrize("angle", ANGLES)
@pytest.mark.parametrize("is_front", (False, True))
def test_rect_round_trip_within_one_pixel(bounds, angle, is_front):
    rect = Rect(120, 80, 360, 250)
    sensor = GeometryEngine.map_rect_to_sensor(rect, bounds, angle, is_front)
    back = GeometryEngine.map_rect_to_view(sensor, bounds, angle, is_front)

    assert abs(back.left - rect.left) <= 1
    assert abs(back.top - rect.top) <= 1
    assert abs(back.right - rect.right) <= 1
    assert abs(back.bottom - rect.bottom) <= 1


@pytest.mark.parametrize("angle", ANGLES)
@pytest.mark.parametrize("is_front", (False, True))
def test_mapped_rects_are_canonical(bounds, angle, is_front):
    sensor = GeometryEngine.map_rect_to_sensor(Rect(100, 60, 500, 400), bounds, angle, is_front)
    assert sensor.left <= sensor.right
    assert sensor.top <= sensor.bottom


def test_rect_partly_outside_bounds_is_clamped_to_sensor_range(bounds):
    sensor = GeometryEngine.map_rect_to_sensor(Rect(-100, -100, 140, 120), bounds, 0, False)
    assert sensor.left == -1000
    assert sensor.top == -1000
    assert sensor.right == -750
    assert sensor.bottom == -667


def test_sensor_rect_to_view(bounds):
    view = GeometryEngine.map_rect_to_view(Rect(-1000, -1000, 0, 0), bounds, 0, False)
    assert view == Rect(40, 20, 440, 320)


def test_view_coordinates_are_clamped_to_bounds(bounds):
    x, y = GeometryEngine.to_view_coordinates(-1200, 1500, bounds, 0, False)
    assert (x, y) == (40, 620)


def test_face_landmarks_follow_the_rect(bounds):
    face = Face(Rect(-500, -500, 500, 500), 80, left_eye=(-250, -250), right_eye=(250, -250), mouth=(0, 250))
    view = GeometryEngine.map_face_to_view(face, bounds, 0, True)

    assert view.rect == Rect(240, 170, 640, 470)
    assert view.score == 80
    # Mirrored: the sensor's left is the viewer's right.
    assert view.left_eye == (540, 245)
    assert view.right_eye == (340, 245)
    assert view.mouth == (440, 395)


def test_face_without_landmarks(bounds):
    view = GeometryEngine.map_face_to_view(Face(Rect(0, 0, 1000, 1000), 50), bounds, 90, False)
    assert view.left_eye is None and view.mouth is None
    assert view.rect.left <= view.rect.right


# --- Focus / metering areas ---

def test_area_is_scaled_into_sensor_units():
    bounds = Rect(0, 0, 800, 600)
    # 48 px is 120 sensor units across 800 px and 160 across 600 px.
    assert GeometryEngine.area_at(400, 300, 48, 48, bounds, 0, False) == Rect(-60, -80, 60, 80)


def test_area_axes_swap_on_quarter_turn():
    bounds = Rect(0, 0, 800, 600)
    assert GeometryEngine.area_at(400, 300, 48, 48, bounds, 90, False) == Rect(-80, -60, 80, 60)


def test_area_is_clamped_at_the_edges():
    bounds = Rect(0, 0, 800, 600)
    assert GeometryEngine.area_at(0, 0, 48, 48, bounds, 0, False) == Rect(-1000, -1000, -940, -920)


def test_area_edges_round_ties_up():
    bounds = Rect(0, 0, 800, 600)
    # Half extents are 2.5 and 5 sensor units; -2.5 rounds to -2 and 2.5 to 3.
    assert GeometryEngine.area_at(400, 300, 2, 3, bounds, 0, False) == Rect(-2, -5, 3, 5)


def test_mapped_rect_rounds_ties_up():
    # 128 px of 4096 lands on -937.5 sensor units.
    sensor = GeometryEngine.map_rect_to_sensor(Rect(128, 128, 256, 256), Rect(0, 0, 4096, 4096), 0, False)
    assert sensor == Rect(-937, -937, -875, -875)


@pytest.mark.parametrize("value, expected", [(2.5, 3), (-2.5, -2), (-0.5, 0), (1.4, 1), (-1.6, -2)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_area_requires_laid_out_bounds():
    with pytest.raises(DegenerateBounds):
        GeometryEngine.area_at(10, 10, 48, 48, Rect(0, 0, 0, 0), 0, False)


# --- Layout ---

@pytest.mark.parametrize("container, preview, expected", [
    ((960, 640), Resolution(640, 480), (853, 640)),
    ((640, 960), Resolution(640, 480), (640, 853)),
    ((1000, 600), Resolution(640, 480), (800, 600)),
    ((1000, 400), Resolution(1280, 720), (711, 400)),
])
def test_fit_preview_letterboxes(container, preview, expected):
    fitted = GeometryEngine.fit_preview(container[0], container[1], preview)
    assert fitted == expected
    assert fitted[0] <= container[0] and fitted[1] <= container[1]


def test_center_bounds():
    assert GeometryEngine.center_bounds(1000, 600, 800, 600) == Rect(100, 0, 900, 600)
    assert GeometryEngine.center_bounds(640, 960, 640, 852) == Rect(0, 54, 640, 906)


def test_thirds_grid():
    xs, ys = GeometryEngine.thirds_grid(Rect(100, 0, 900, 600))
    assert xs == (367, 633)
    assert ys == (200, 400)
