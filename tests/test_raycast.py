import math

import pytest

from wolfcast.mapfile import parse_map
from wolfcast.raycast import (
    FOV,
    GROUND_COLOR,
    SIDE_X,
    SIDE_Y,
    SKY_COLOR,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Camera,
    Face,
    Frame,
    Texture,
    cast_ray,
    column_span,
    draw_column,
    hit_offset,
    render_frame,
    texture_color,
    wall_face,
)

BOX = (
    "1 1 1 1 1\n"
    "1 0 0 0 1\n"
    "1 0 0 0 1\n"
    "1 0 0 0 1\n"
    "1 1 1 1 1\n"
)

FACE_COLORS = {Face.WEST: 11, Face.EAST: 22, Face.NORTH: 33, Face.SOUTH: 44}


@pytest.fixture
def box():
    return parse_map(BOX)


def _uniform(color):
    return Texture(width=2, height=2, pixels=(color,) * 4)


@pytest.fixture
def textures():
    return {face: _uniform(color) for face, color in FACE_COLORS.items()}


def test_camera_at_spawn_centres_in_cell():
    cam = Camera.at_spawn(2, 3)
    assert (cam.px, cam.py) == (2.5, 3.5)
    assert cam.xdir == -1.0
    assert cam.camy == FOV == 0.66


def test_cast_ray_straight_ahead_hits_adjacent_wall(box):
    hit = cast_ray(box, Camera.at_spawn(1, 1), 0.0)
    assert hit.length == pytest.approx(0.5)
    assert hit.side == SIDE_X
    assert (hit.row, hit.col) == (0, 1)
    assert hit.face is Face.NORTH


def test_cast_ray_length_grows_with_distance(box):
    near = cast_ray(box, Camera.at_spawn(1, 1), 0.0)
    far = cast_ray(box, Camera.at_spawn(3, 1), 0.0)
    assert far.length - near.length == pytest.approx(2.0)


def test_cast_ray_is_symmetric_about_view_axis(box):
    cam = Camera.at_spawn(2, 2)
    left = cast_ray(box, cam, -0.5)
    right = cast_ray(box, cam, 0.5)
    assert left.length == pytest.approx(right.length)
    assert left.ystep == -right.ystep


@pytest.mark.parametrize("ratio", [-1.0, -0.7, -0.25, 0.0, 0.3, 0.9])
@pytest.mark.parametrize("cell", [(1, 1), (1, 3), (2, 2), (3, 1), (3, 3)])
def test_cast_ray_always_ends_in_wall(box, ratio, cell):
    cam = Camera.at_spawn(*cell)
    hit = cast_ray(box, cam, ratio)
    assert box.is_wall(hit.row, hit.col)
    assert hit.length > 0
    assert 0.0 <= hit_offset(hit, cam) < 1.0


def test_cast_ray_along_columns_uses_y_side(box):
    cam = Camera(px=2.5, py=2.5, xdir=0.0, ydir=1.0, camx=0.66, camy=0.0)
    hit = cast_ray(box, cam, 0.0)
    assert hit.side == SIDE_Y
    assert hit.col == 4
    assert hit.face is Face.EAST


def test_hit_offset_at_cell_centre(box):
    cam = Camera.at_spawn(1, 1)
    hit = cast_ray(box, cam, 0.0)
    assert hit_offset(hit, cam) == pytest.approx(0.5)


def test_wall_face_y_side_ignores_xstep():
    assert wall_face(SIDE_Y, 1, -1) == wall_face(SIDE_Y, -1, -1) == Face.WEST
    assert wall_face(SIDE_Y, 1, 1) == wall_face(SIDE_Y, -1, 1) == Face.EAST


def test_wall_face_x_side_ignores_ystep():
    assert wall_face(SIDE_X, -1, 1) == wall_face(SIDE_X, -1, -1) == Face.NORTH
    assert wall_face(SIDE_X, 1, 1) == wall_face(SIDE_X, 1, -1) == Face.SOUTH


def test_wall_face_reaches_all_four_textures():
    faces = {
        wall_face(side, xstep, ystep)
        for side in (SIDE_X, SIDE_Y)
        for xstep in (-1, 1)
        for ystep in (-1, 1)
    }
    assert sorted(face.value for face in faces) == [1, 2, 3, 4]


def test_column_span_unit_length_fills_screen():
    assert column_span(WINDOW_HEIGHT, 1.0) == (WINDOW_HEIGHT, 0, WINDOW_HEIGHT - 1)


def test_column_span_zero_length_is_clamped():
    wall_height, start, end = column_span(WINDOW_HEIGHT, 0.0)
    assert (start, end) == (0, WINDOW_HEIGHT - 1)
    assert wall_height > WINDOW_HEIGHT


@pytest.mark.parametrize("length", [0.3, 1.5, 2.0, 3.7, 10.0, 250.0])
def test_column_span_stays_on_screen(length):
    wall_height, start, end = column_span(WINDOW_HEIGHT, length)
    assert 0 <= start <= end <= WINDOW_HEIGHT - 1
    assert wall_height == int(WINDOW_HEIGHT / length)


def test_column_span_shrinks_with_distance():
    near = column_span(WINDOW_HEIGHT, 1.5)
    far = column_span(WINDOW_HEIGHT, 3.0)
    assert far[0] < near[0]
    assert far[1] > near[1]
    assert far[2] < near[2]


def test_texture_color_maps_slice_ends_to_texture_edges():
    tex = Texture(width=2, height=2, pixels=(1, 2, 3, 4))
    assert texture_color(tex, 0.0, 0, 4, 4) == tex.pixel(0, 0)
    assert texture_color(tex, 0.0, 3, 4, 4) == tex.pixel(0, 1)
    assert texture_color(tex, 0.75, 0, 4, 4) == tex.pixel(1, 0)


def test_texture_color_without_texture_or_height_is_zero():
    tex = _uniform(9)
    assert texture_color(None, 0.5, 0, 4, 4) == 0
    assert texture_color(tex, 0.5, 2, 4, 0) == 0


def test_texture_rejects_wrong_pixel_count():
    with pytest.raises(ValueError):
        Texture(width=2, height=2, pixels=(1, 2, 3))


def test_texture_pixel_outside_raises():
    with pytest.raises(IndexError):
        _uniform(5).pixel(2, 0)


def test_frame_default_size_is_window():
    frame = Frame()
    assert (frame.width, frame.height) == (WINDOW_WIDTH, WINDOW_HEIGHT)
    assert len(frame.pixels) == WINDOW_WIDTH * WINDOW_HEIGHT


def test_frame_put_pixel_round_trip():
    frame = Frame(4, 3)
    frame.put_pixel(2, 1, 0xABCDEF)
    assert frame.pixel(2, 1) == 0xABCDEF
    assert frame.pixel(1, 2) == 0


def test_frame_put_pixel_outside_is_ignored():
    frame = Frame(4, 3)
    frame.put_pixel(4, 0, 7)
    frame.put_pixel(-1, 1, 7)
    frame.put_pixel(0, 3, 7)
    assert frame.pixels == [0] * 12


def test_frame_pixel_outside_raises():
    with pytest.raises(IndexError):
        Frame(4, 3).pixel(0, 3)


def test_draw_column_sky_wall_ground(box, textures):
    cam = Camera.at_spawn(2, 2)
    hit = cast_ray(box, cam, 0.0)
    frame = Frame(3, 40)
    draw_column(frame, 1, hit, cam, textures)
    assert frame.pixel(1, 0) == SKY_COLOR
    assert frame.pixel(1, 39) == GROUND_COLOR
    assert frame.pixel(1, 20) == FACE_COLORS[hit.face]
    assert frame.pixel(0, 20) == 0


def test_draw_column_missing_texture_draws_black(box):
    cam = Camera.at_spawn(2, 2)
    hit = cast_ray(box, cam, 0.0)
    frame = Frame(1, 40)
    draw_column(frame, 0, hit, cam, {}, sky=5, ground=6)
    assert frame.pixel(0, 0) == 5
    assert frame.pixel(0, 20) == 0
    assert frame.pixel(0, 39) == 6


def test_render_frame_draws_every_column(box, textures):
    cam = Camera.at_spawn(2, 2)
    frame = render_frame(Frame(16, 40), box, cam, textures)
    assert all(frame.pixel(x, 0) == SKY_COLOR for x in range(16))
    assert all(frame.pixel(x, 39) == GROUND_COLOR for x in range(16))
    middle = {frame.pixel(x, 20) for x in range(16)}
    assert middle <= set(FACE_COLORS.values())
    assert not math.isnan(sum(frame.pixels))