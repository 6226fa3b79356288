# wolfcast

A small first-person maze explorer. It reads a grid map from a text file
and renders it with a raycaster: textured walls, a flat sky and a flat
ground. A top-down minimap can be laid over the view.

## Installing

```
pip install .
```

## Running

```
wolfcast path/to/level.map
```

The command takes exactly one argument, the map file. With any other
number of arguments it prints a usage line and exits. An invalid map is
reported on standard error and the command exits with status 1; so does
a failure to open the window.

A title screen comes up first; press **Enter** to start.

### Keys

| Key | Action |
|-----|--------|
| Up / Down arrows | move forward / backward |
| Left / Right arrows | strafe left / right |
| A / D | turn left / right |
| Left Shift | speed up |
| Right Shift | back to normal speed |
| M | toggle the minimap (once the game has started) |
| O | show the option list |
| Esc | quit |

The player cannot walk into wall cells; a blocked move is tried axis by
axis, so the player slides along walls.

### Textures

Wall textures are read from a `texture/` directory in the current working
directory: `wall1.xpm` to `wall4.xpm`, one per wall face, and `menu.XPM`
for the title screen. They are XPM text images, read by the package's own
parser. A wall face whose texture is missing or unreadable is drawn black,
and without `menu.XPM` the title screen is black with its hint line.

## Map format

A map is a text file of rows of `1` (wall) and `0` (floor), each cell
separated by a single space:

```
1 1 1 1 1
1 0 0 0 1
1 0 1 0 1
1 0 0 0 1
1 1 1 1 1
```

Rules the loader enforces:

- only `0`, `1` and spaces are allowed, and every row starts with `1`;
- cells are separated by exactly one space, with no leading or trailing spaces;
- the first and last rows are all walls, and every row starts and ends with a wall;
- all rows have the same length;
- every inner row holds at least one floor cell;
- the map is at least 3 by 3 and at most 107 columns by 67 rows.

The player starts at the centre of the first floor cell, reading row by row.

`/dev/zero` is refused as a map path.

## Using it as a library

```python
from wolfcast.mapfile import load_map
from wolfcast.raycast import Camera, Frame, cast_ray, render_frame

game_map = load_map("level.map")
row, col = game_map.spawn()
camera = Camera.at_spawn(row, col)

hit = cast_ray(game_map, camera, 0.0)
print(hit.length, hit.face)

frame = render_frame(Frame(320, 200), game_map, camera, textures={})
print(frame.pixel(160, 100))
```

The modules:

- `wolfcast.mapfile` – `load_map` and `parse_map` build a `GameMap` from a
  file or from text, raising `MapError` with a description of the problem
  when the map is invalid. `GameMap` offers `cell`, `is_wall`,
  `tile_origin` and `spawn`.
- `wolfcast.raycast` – `Camera`, `Frame`, `Texture`, `Face`, `RayHit`,
  `cast_ray`, `render_frame` and the per-column helpers.
- `wolfcast.movement` – `move_forward`, `strafe`, `rotate`, the `Key`
  codes and the `Controller` that turns key presses into movement and
  view changes.
- `wolfcast.minimap` – `draw_minimap` and `draw_player` draw the top-down
  overview into a `Frame`.
- `wolfcast.app` – `Game`, `load_textures`, `check_map_path` and the
  `main` command.
- `wolfcast.textutil` – small text helpers used by the map reader.

## What it does not do

There are no enemies, items, doors, sound or saved games: the game is a
walk through a static maze.