"""The game window: map loading, textures, drawing and the event loop."""

from __future__ import annotations

import re
import sys
from array import array
from os import PathLike
from pathlib import Path
from typing import Mapping, Sequence

import pygame

from wolfcast.mapfile import CUBE_SIZE, GameMap, MapError, load_map
from wolfcast.minimap import draw_minimap, draw_player
from wolfcast.movement import Controller, Key, View, move_forward, rotate, strafe
from wolfcast.raycast import (
    GROUND_COLOR,
    SKY_COLOR,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Camera,
    Face,
    Frame,
    Texture,
    render_frame,
)

TEXTURE_DIR = "texture"
MENU_FILE = "menu.XPM"
WALL_FILES = {
    Face.WEST: "wall1.xpm",
    Face.EAST: "wall2.xpm",
    Face.NORTH: "wall3.xpm",
    Face.SOUTH: "wall4.xpm",
}

MENU_HINT = "DURING GAME : PRESS O for OPTIONS"
MENU_HINT_COLOR = 0xED2D23
OPTIONS_COLOR = 0xEDE923
OPTIONS = (
    (10, 15, "ESC to QUIT"),
    (10, 35, "M for MAP"),
    (10, 55, "left SHIFT for + SPEED"),
    (10, 75, "right SHIFT for - SPEED"),
)

_FORBIDDEN_PREFIX = "/dev/zer"
_USAGE = "wolfcast\t[map]"
_NO_DISPLAY = "Error:\tconnection to graphical server failed"
_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"')
_XPM_KEYS = ("c", "m", "g4", "g", "s")

_PYGAME_KEYS = {
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_m: Key.M,
    pygame.K_o: Key.O,
    pygame.K_UP: Key.UP_ARROW,
    pygame.K_DOWN: Key.DOWN_ARROW,
    pygame.K_LEFT: Key.LEFT_ARROW,
    pygame.K_RIGHT: Key.RIGHT_ARROW,
    pygame.K_LSHIFT: Key.LEFT_SHIFT,
    pygame.K_RSHIFT: Key.RIGHT_SHIFT,
    pygame.K_RETURN: Key.ENTER,
    pygame.K_KP_ENTER: Key.ENTER,
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_SPACE: Key.SPACEBAR,
}


def check_map_path(path: str | PathLike[str]) -> str:
    """Refuse the zero device as a map; return the path as a string."""
    text = str(path)
    if text.startswith(_FORBIDDEN_PREFIX):
        raise MapError("/dev/zero unvailable")
    return text


def _parse_color(spec: str) -> int:
    spec = spec.strip()
    if spec.lower() == "none":
        return 0
    if spec.startswith("#"):
        digits = spec[1:]
        if not digits or len(digits) % 3:
            raise ValueError(f"bad colour {spec!r}")
        size = len(digits) // 3
        top = 16**size - 1
        red, green, blue = (
            int(digits[i : i + size], 16) * 255 // top
            for i in range(0, len(digits), size)
        )
        return (red << 16) | (green << 8) | blue
    try:
        color = pygame.Color(spec)
    except ValueError as exc:
        raise ValueError(f"unknown colour {spec!r}") from exc
    return (color.r << 16) | (color.g << 8) | color.b


def _color_entry(rest: str) -> int:
    specs: dict[str, list[str]] = {}
    current: list[str] | None = None
    for word in rest.split():
        if word in _XPM_KEYS:
            current = specs.setdefault(word, [])
        elif current is not None:
            current.append(word)
    for key in _XPM_KEYS:
        if specs.get(key):
            return _parse_color(" ".join(specs[key]))
    raise ValueError("colour entry without a colour")


def _parse_xpm(text: str) -> Texture:
    strings = _QUOTED.findall(text)
    if not strings:
        raise ValueError("no XPM data")
    header = strings[0].split()
    if len(header) < 4:
        raise ValueError("bad XPM header")
    width, height, ncolors, cpp = (int(value) for value in header[:4])
    if cpp <= 0:
        raise ValueError("bad XPM header")
    color_lines = strings[1 : 1 + ncolors]
    rows = strings[1 + ncolors : 1 + ncolors + height]
    if len(color_lines) != ncolors or len(rows) != height:
        raise ValueError("truncated XPM data")
    palette = {line[:cpp]: _color_entry(line[cpp:]) for line in color_lines}
    pixels = []
    for row in rows:
        if len(row) < width * cpp:
            raise ValueError("short XPM row")
        for start in range(0, width * cpp, cpp):
            try:
                pixels.append(palette[row[start : start + cpp]])
            except KeyError as exc:
                raise ValueError("XPM pixel not in palette") from exc
    return Texture(width=width, height=height, pixels=tuple(pixels))


def _load_xpm(path: Path) -> Texture | None:
    try:
        return _parse_xpm(path.read_text(encoding="latin-1"))
    except (OSError, ValueError):
        return None


def load_textures(directory: str | PathLike[str] = TEXTURE_DIR) -> dict[Face, Texture]:
    """Load the four wall textures; the ones that cannot be read are left out."""
    base = Path(directory)
    textures = {}
    for face, name in WALL_FILES.items():
        texture = _load_xpm(base / name)
        if texture is not None:
            textures[face] = texture
    return textures


class Game:
    """One game session: a map, a player and what the window shows."""

    def __init__(
        self,
        game_map: GameMap,
        textures: Mapping[Face, Texture] | None = None,
        menu_image: Texture | None = None,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
    ) -> None:
        self.game_map = game_map
        self.textures = dict(textures or {})
        self.menu_image = menu_image
        self.camera = Camera.at_spawn(*game_map.spawn())
        self.controller = Controller(camera=self.camera, game_map=game_map)
        self.frame = Frame(width=width, height=height)

    def handle_key(self, key: int) -> View:
        """Pass a released key to the controller and return the view to show."""
        return self.controller.handle_key(key)

    def _press(self, key: int) -> bool:
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
        else:
            return False
        return True

    def _draw_menu(self) -> None:
        frame = self.frame
        frame.pixels[:] = [0] * len(frame.pixels)
        image = self.menu_image
        if image is None:
            return
        span = min(image.width, frame.width)
        for y in range(min(image.height, frame.height)):
            src = y * image.width
            dst = y * frame.width
            frame.pixels[dst : dst + span] = image.pixels[src : src + span]

    def render(self) -> Frame:
        """Draw the current view into the frame and return it."""
        view = self.controller.view
        if view is View.MENU:
            self._draw_menu()
            return self.frame
        render_frame(
            self.frame, self.game_map, self.camera, self.textures, SKY_COLOR, GROUND_COLOR
        )
        if view is View.MINIMAP:
            draw_minimap(self.frame, self.game_map, CUBE_SIZE)
            draw_player(self.frame, self.game_map, self.camera, CUBE_SIZE)
        return self.frame

    def _overlay(self) -> list[tuple[int, int, int, str]]:
        lines = []
        if self.controller.view is View.MENU:
            lines.append((525, 600, MENU_HINT_COLOR, MENU_HINT))
        if self.controller.show_options:
            lines.extend((x, y, OPTIONS_COLOR, text) for x, y, text in OPTIONS)
        return lines

    def _to_surface(self) -> pygame.Surface:
        data = array("I", ((p & 0xFFFFFF) | 0xFF000000 for p in self.frame.pixels))
        if sys.byteorder == "big":
            data.byteswap()
        size = (self.frame.width, self.frame.height)
        return pygame.image.frombuffer(data.tobytes(), size, "BGRA")

    def _show(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        screen.fill((0, 0, 0))
        screen.blit(self._to_surface(), (0, 0))
        for x, y, color, text in self._overlay():
            rgb = ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
            screen.blit(font.render(text, True, rgb), (x, y))
        pygame.display.flip()

    def run(self) -> None:
        """Open the window and play until the window closes or ESC is released."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.frame.width, self.frame.height))
            pygame.display.set_caption("Wolf")
            font = pygame.font.Font(None, 24)
            pygame.key.set_repeat(200, 30)
            self.render()
            self._show(screen, font)
            while not self.controller.quit_requested:
                event = pygame.event.wait()
                if event.type == pygame.QUIT:
                    break
                key = _PYGAME_KEYS.get(getattr(event, "key", None))
                if key is None:
                    continue
                if event.type == pygame.KEYDOWN:
                    if not self._press(key):
                        continue
                elif event.type == pygame.KEYUP:
                    self.handle_key(key)
                    if self.controller.quit_requested:
                        break
                else:
                    continue
                self.render()
                self._show(screen, font)
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the map file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(_USAGE, file=sys.stderr)
        return 0
    try:
        path = check_map_path(args[0])
    except MapError as exc:
        print(exc)
        return 1
    try:
        game_map = load_map(path)
        base = Path(TEXTURE_DIR)
        game = Game(game_map, load_textures(base), _load_xpm(base / MENU_FILE))
    except MapError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        game.run()
    except pygame.error:
        print(_NO_DISPLAY, file=sys.stderr)
        return 1
    return 0