"""Ray casting of a grid map into a pixel frame."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from wolfcast.mapfile import GameMap

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
FOV = 0.66
MOVE_SPEED = 0.1
ROTATE_ANGLE = 0.10
SKY_COLOR = 0x5A5657
GROUND_COLOR = 0x383334

SIDE_X = 0
SIDE_Y = 1

_MAX_WALL_HEIGHT = 1 << 24


@dataclass
class Camera:
    """Player position, view direction and camera plane.

    ``px`` runs along map rows and ``py`` along map columns.
    """

    px: float
    py: float
    xdir: float = -1.0
    ydir: float = 0.0
    camx: float = 0.0
    camy: float = FOV
    move_speed: float = MOVE_SPEED
    angle_rotate: float = ROTATE_ANGLE

    @classmethod
    def at_spawn(cls, row: int, col: int) -> "Camera":
        """Place a camera at the centre of a map cell."""
        return cls(px=row + 0.5, py=col + 0.5)


class Face(Enum):
    """Which way a ray was heading when it hit a wall; values number the wall textures."""

    WEST = 1
    EAST = 2
    NORTH = 3
    SOUTH = 4


def wall_face(side: int, xstep: int, ystep: int) -> Face:
    """Choose the wall face from the hit side and the ray's step directions."""
    if side == SIDE_Y:
        return Face.WEST if ystep == -1 else Face.EAST
    return Face.NORTH if xstep == -1 else Face.SOUTH


@dataclass(frozen=True)
class RayHit:
    """Where and how a ray met a wall."""

    length: float
    side: int
    xstep: int
    ystep: int
    rayx: float
    rayy: float
    row: int
    col: int

    @property
    def face(self) -> Face:
        return wall_face(self.side, self.xstep, self.ystep)


@dataclass(frozen=True)
class Texture:
    """A wall texture: row-major pixel colours."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture size must be positive")
        pixels = tuple(self.pixels)
        if len(pixels) != self.width * self.height:
            raise ValueError("texture pixel count does not match its size")
        object.__setattr__(self, "pixels", pixels)

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y); raise IndexError outside the texture."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"texel ({x}, {y}) is outside the texture")
        return self.pixels[y * self.width + x]


@dataclass
class Frame:
    """An image being drawn, one integer colour per pixel."""

    width: int = WINDOW_WIDTH
    height: int = WINDOW_HEIGHT
    pixels: list[int] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame size must be positive")
        if self.pixels is None:
            self.pixels = [0] * (self.width * self.height)
        elif len(self.pixels) != self.width * self.height:
            raise ValueError("frame pixel count does not match its size")

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set a pixel; coordinates outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color

    def pixel(self, x: int, y: int) -> int:
        """Return a pixel's colour; raise IndexError outside the frame."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return self.pixels[y * self.width + x]


def _delta(a: float, b: float) -> float:
    """Distance a ray travels between two grid lines along the ``a`` axis."""
    if a == 0:
        return math.inf
    return math.hypot(a, b) / abs(a)


def _div(num: float, den: float) -> float:
    return num / den if den != 0 else math.inf


def cast_ray(game_map: GameMap, camera: Camera, ratio: float) -> RayHit:
    """Walk a ray through the grid until it enters a wall cell.

    ``ratio`` runs from -1 (left edge of the view) to 1 (right edge).
    The returned length is the distance projected onto the view direction.
    """
    rayx = camera.xdir + camera.camx * ratio
    rayy = camera.ydir + camera.camy * ratio
    vstepx = _delta(rayx, rayy)
    vstepy = _delta(rayy, rayx)
    row = int(camera.px)
    col = int(camera.py)

    if rayx < 0:
        xstep = -1
        sidex = (camera.px - row) * vstepx
    else:
        xstep = 1
        sidex = (row + 1 - camera.px) * vstepx
    if rayy < 0:
        ystep = -1
        sidey = (camera.py - col) * vstepy
    else:
        ystep = 1
        sidey = (col + 1 - camera.py) * vstepy

    while True:
        if sidex < sidey:
            sidex += vstepx
            row += xstep
            side = SIDE_X
        else:
            sidey += vstepy
            col += ystep
            side = SIDE_Y
        if game_map.is_wall(row, col):
            break

    if side == SIDE_X:
        length = _div(row - camera.px + (1 - xstep) * 0.5, rayx)
    else:
        length = _div(col - camera.py + (1 - ystep) * 0.5, rayy)
    return RayHit(
        length=length,
        side=side,
        xstep=xstep,
        ystep=ystep,
        rayx=rayx,
        rayy=rayy,
        row=row,
        col=col,
    )


def hit_offset(hit: RayHit, camera: Camera) -> float:
    """Return where along the wall cell the ray struck, in [0, 1)."""
    if hit.side == SIDE_X:
        coord = camera.py + hit.length * hit.rayy
    else:
        coord = camera.px + hit.length * hit.rayx
    return coord - math.floor(coord)


def _wall_height(height: int, length: float) -> int:
    if length > 0:
        value = height / length
        if math.isfinite(value):
            return int(min(value, _MAX_WALL_HEIGHT))
    return _MAX_WALL_HEIGHT


def column_span(height: int, length: float) -> tuple[int, int, int]:
    """Return (wall_height, first wall row, last wall row) for a column."""
    wall_height = _wall_height(height, length)
    start = int(-wall_height * 0.5 + height * 0.5)
    if start < 0:
        start = 0
    end = int(wall_height * 0.5 + height * 0.5)
    if end >= height:
        end = height - 1
    return wall_height, start, end


def texture_color(
    texture: Texture | None,
    offset: float,
    row: int,
    height: int,
    wall_height: int,
) -> int:
    """Sample a wall texture for one screen row of a wall slice; 0 when nothing fits."""
    if texture is None or wall_height <= 0 or not math.isfinite(offset):
        return 0
    tx = int(offset * texture.width) % texture.width
    ty = int(((row - height * 0.5 + wall_height * 0.5) * texture.height) / wall_height)
    if 0 <= ty < texture.height:
        return texture.pixel(tx, ty)
    return 0


def draw_column(
    frame: Frame,
    x: int,
    hit: RayHit,
    camera: Camera,
    textures: Mapping[Face, Texture],
    sky: int = SKY_COLOR,
    ground: int = GROUND_COLOR,
) -> None:
    """Draw sky, textured wall and ground for one screen column."""
    wall_height, start, end = column_span(frame.height, hit.length)
    for y in range(start):
        frame.put_pixel(x, y, sky)
    texture = textures.get(hit.face)
    offset = hit_offset(hit, camera)
    for y in range(start, end + 1):
        frame.put_pixel(
            x, y, texture_color(texture, offset, y, frame.height, wall_height)
        )
    for y in range(end + 1, frame.height):
        frame.put_pixel(x, y, ground)


def render_frame(
    frame: Frame,
    game_map: GameMap,
    camera: Camera,
    textures: Mapping[Face, Texture],
    sky: int = SKY_COLOR,
    ground: int = GROUND_COLOR,
) -> Frame:
    """Cast one ray per column and draw the whole view into ``frame``."""
    for x in range(frame.width):
        ratio = 2 * x / frame.width - 1
        hit = cast_ray(game_map, camera, ratio)
        draw_column(frame, x, hit, camera, textures, sky, ground)
    return frame