# cubcaster

A small first-person maze explorer in the style of the classic grid raycasters.
A scene is described in a `.cub` file: four wall textures, a floor and a
ceiling colour, and a map of walls, floor and one player start.

## Installing

```
pip install .
```

The window, image loading and input handling use `pygame`.

## Running

```
cubcaster maps/level.cub
```

The argument must be a single path whose file name ends in `.cub`. Any other
argument list prints a message to standard error and exits with status 1.
A broken scene, an unreadable texture or a missing animation frame is
reported on standard error as `Error` followed by the reason, and the
program exits with status 1.

The window is 960 by 640 pixels. The looping animation at the bottom of the
screen is read from the directory `a/` relative to the current working
directory, as the fourteen files `1.png` to `9.png` and `A.png` to `E.png`;
these must be present for the game to start.

### Controls

| Key              | Action                 |
|------------------|------------------------|
| `W` / Up arrow   | walk forward           |
| `S` / Down arrow | walk backward          |
| `A` / `D`        | strafe left / right    |
| Left / Right     | turn                   |
| Mouse            | look left / right      |
| `Esc`            | quit                   |

Walking forward or back takes precedence over strafing. The mouse is hidden
and grabbed while the window is open. A minimap in the top-left corner shows
the walls around the player.

## Scene files

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

* `NO`, `SO`, `WE`, `EA` name the wall textures; each must name a file that
  can be opened.
* `F` and `C` give the floor and ceiling colours as three numbers from 0 to
  255 separated by commas; a doubled or trailing comma is rejected.
* Each element appears exactly once, in any order, before the map. Blank
  lines between elements are ignored.
* The map uses `1` for walls, `0` for floor, spaces for void and exactly one
  of `N`, `S`, `E`, `W` for the player's start and facing.
* The map must be closed: the first and last rows hold only walls and spaces,
  and no floor or start cell may sit in the first column or touch a space or
  the end of a row. Blank lines inside the map are rejected.

Errors found while parsing are raised as `cubcaster.scene.SceneError`.

## Using the library

The scene parser and ray caster work without opening a window:

```python
from cubcaster.scene import parse_scene
from cubcaster.raycast import Grid, cast_all_rays, spawn_angle

with open("maps/level.cub") as handle:
    scene = parse_scene(handle.read(), check_paths=False)

grid = Grid(scene.rows)
column, row, direction = scene.spawn
rays = cast_all_rays(grid, column * 32 + 4, row * 32 + 4,
                     spawn_angle(direction), 960, 1.0472, 960)
```

* `cubcaster.scene` — `parse_scene`, `load_scene` (reads a file and checks the
  texture paths), `validate_map`, `parse_color`, `parse_number`,
  `split_fields`, and the `Scene`, `Color` and `SceneError` types.
* `cubcaster.raycast` — `Grid` (wall and collision tests), `cast_ray` and
  `cast_all_rays` returning `Ray` records with the hit point, distance, wall
  height, side hit and offset along the wall, plus `distance`,
  `normalize_angle`, `rgb` and `spawn_angle`.
* `cubcaster.render` — `Texture`, `choose_texture`, `texture_column`,
  `wall_strip`, `background_split`, `line_steps`, `minimap_bounds` and
  `minimap_walls`, which turn rays into textured wall columns and minimap
  pixels.
* `cubcaster.game` — `Player`, `Animation`, `Game` (whose `run` opens the
  window), `check_name` and `main`.
* `cubcaster.linereader` — `LineReader`, `ReaderPool` and `read_lines` for
  reading streams one line at a time through a fixed-size buffer.
* `cubcaster.charclass`, `cubcaster.textops` and `cubcaster.output` — small
  character, string and stream-writing helpers.

## What it does not do

There is no sound, no enemies, sprites or doors, and no way to save or load
progress: the game is walking around a single static scene.

## Tests

```
pip install .[test]
pytest
```