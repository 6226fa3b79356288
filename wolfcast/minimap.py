"""Top-down overview of the map drawn into a frame."""

from __future__ import annotations

from wolfcast.mapfile import CUBE_SIZE, GameMap
from wolfcast.raycast import Camera, Frame

WALL_COLOR = 0x808080
FLOOR_COLOR = 0xFFFFFF
PLAYER_COLOR = 0x000000


def fill_square(frame: Frame, x: int, y: int, size: int, color: int) -> None:
    """Fill a size-by-size square whose top-left corner is (x, y)."""
    for py in range(y, y + size):
        for px in range(x, x + size):
            frame.put_pixel(px, py, color)


def draw_minimap(frame: Frame, game_map: GameMap, cube: int = CUBE_SIZE) -> None:
    """Draw every cell as a square: grey for walls, white for floor."""
    for row, values in enumerate(game_map.cells):
        for col, value in enumerate(values):
            x, y = game_map.tile_origin(row, col, cube)
            if value == 1:
                fill_square(frame, x, y, cube, WALL_COLOR)
            elif value == 0:
                fill_square(frame, x, y, cube, FLOOR_COLOR)


def draw_player(
    frame: Frame, game_map: GameMap, camera: Camera, cube: int = CUBE_SIZE
) -> None:
    """Mark the player's cell with a half-size square centred in it."""
    x, y = game_map.tile_origin(int(camera.px), int(camera.py), cube)
    offset = cube // 4
    fill_square(frame, x + offset, y + offset, cube // 2, PLAYER_COLOR)