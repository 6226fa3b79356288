"""Keyboard codes, player movement and key handling."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from wolfcast.mapfile import GameMap
from wolfcast.raycast import Camera

SPEED_BOOST = 0.45


class Key(IntEnum):
    """Hardware key codes the game reacts to."""

    A = 0
    B = 11
    C = 8
    D = 2
    E = 4
    F = 3
    G = 9
    H = 4
    I = 34  # noqa: E741
    J = 38
    K = 40
    L = 37
    M = 46
    N = 45
    O = 31  # noqa: E741
    P = 35
    Q = 12
    R = 15
    S = 1
    T = 17
    U = 32
    V = 9
    W = 13
    X = 7
    Y = 16
    Z = 6

    PAD_ONE = 83
    PAD_TWO = 84
    PAD_THREE = 85
    PAD_FOUR = 86
    PAD_FIVE = 87
    PAD_SIX = 88
    PAD_SEVEN = 89
    PAD_EIGHT = 91
    PAD_NINE = 92

    LESS = 78
    MORE = 69

    DOWN_ARROW = 125
    UP_ARROW = 126
    LEFT_ARROW = 123
    RIGHT_ARROW = 124

    LEFT_SHIFT = 257
    RIGHT_SHIFT = 258

    ENTER = 36
    SPACEBAR = 49
    ESC = 53


_MOVE_KEYS = frozenset(
    {Key.DOWN_ARROW, Key.UP_ARROW, Key.LEFT_ARROW, Key.RIGHT_ARROW, Key.A, Key.D}
)


def step(camera: Camera, game_map: GameMap, dx: float, dy: float) -> bool:
    """Move the camera by (dx, dy), axis by axis, refusing to enter walls.

    Returns True when the position changed.
    """
    before = (camera.px, camera.py)
    if not game_map.is_wall(int(camera.px + dx), int(camera.py)):
        camera.px += dx
    if not game_map.is_wall(int(camera.px), int(camera.py + dy)):
        camera.py += dy
    return (camera.px, camera.py) != before


def move_forward(camera: Camera, game_map: GameMap, forward: bool) -> bool:
    """Walk along the view direction, forwards or backwards."""
    dx = camera.xdir * camera.move_speed
    dy = camera.ydir * camera.move_speed
    if not forward:
        dx, dy = -dx, -dy
    return step(camera, game_map, dx, dy)


def strafe(camera: Camera, game_map: GameMap, right: bool) -> bool:
    """Walk sideways along the camera plane, to the right or the left."""
    dx = camera.camx * camera.move_speed
    dy = camera.camy * camera.move_speed
    if not right:
        dx, dy = -dx, -dy
    return step(camera, game_map, dx, dy)


def rotate(camera: Camera, angle: float) -> None:
    """Turn the view direction and camera plane by ``angle`` radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    camera.xdir, camera.ydir = (
        camera.xdir * cos_a - camera.ydir * sin_a,
        camera.xdir * sin_a + camera.ydir * cos_a,
    )
    camera.camx, camera.camy = (
        camera.camx * cos_a - camera.camy * sin_a,
        camera.camx * sin_a + camera.camy * cos_a,
    )


class View(Enum):
    """What the window should show."""

    MENU = "menu"
    SCENE = "scene"
    MINIMAP = "minimap"


@dataclass
class Controller:
    """Turns key presses into movement and view changes."""

    camera: Camera
    game_map: GameMap
    menu: int = 0
    boosted: bool = False
    show_options: bool = False
    quit_requested: bool = False
    _map_state: int = field(default=0, init=False, repr=False)
    _minimap: bool = field(default=False, init=False, repr=False)

    @property
    def view(self) -> View:
        """The view the window should currently show."""
        if self.menu == 0:
            return View.MENU
        return View.MINIMAP if self._minimap else View.SCENE

    def _move(self, key: int) -> None:
        if key == Key.LEFT_ARROW:
            strafe(self.camera, self.game_map, right=False)
        elif key == Key.RIGHT_ARROW:
            strafe(self.camera, self.game_map, right=True)
        elif key == Key.DOWN_ARROW:
            move_forward(self.camera, self.game_map, forward=False)
        elif key == Key.UP_ARROW:
            move_forward(self.camera, self.game_map, forward=True)
        elif key == Key.A:
            rotate(self.camera, self.camera.angle_rotate)
        elif key == Key.D:
            rotate(self.camera, -self.camera.angle_rotate)

    def _change_speed(self, key: int) -> None:
        if key == Key.LEFT_SHIFT and not self.boosted:
            self.camera.move_speed += SPEED_BOOST
            self.boosted = True
        if key == Key.RIGHT_SHIFT and self.boosted:
            self.camera.move_speed -= SPEED_BOOST
            self.boosted = False

    def handle_key(self, key: int) -> View:
        """React to one key and return the view to show afterwards."""
        redraw = False
        if key == Key.ENTER:
            self.menu += 1
            self._minimap = False
            redraw = True
        if key == Key.ESC:
            self.quit_requested = True
        if key in _MOVE_KEYS:
            self._move(key)
            self._map_state = 0
            self._minimap = False
            redraw = True
        self._change_speed(key)
        if key == Key.M and self.menu != 0:
            self._minimap = self._map_state in (0, 2)
            self._map_state = 1 if self._map_state == 2 else self._map_state + 1
            redraw = True
        if redraw:
            self.show_options = False
        if key == Key.O:
            self.show_options = True
        return self.view