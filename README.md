# cubraycast

cubraycast is a first-person raycaster. It reads a level from a `.cub` file,
checks it, and opens a resizable window where you walk through the level with
textured walls, two background colours and a minimap.

## Installing

```
pip install .
```

This installs `pygame` (window, input, image loading) and `numpy` (the frame
buffer).

## Running

```
cubraycast path/to/level.cub
```

The command takes exactly one argument, the path to the level file, whose name
must end in `.cub`. With any other arguments it prints a usage line. If the
level is invalid it prints `Error: ` followed by the reason; if a texture
cannot be loaded it prints `Failed to load textures` to standard error. In
every case the command exits with status 0.

The window opens at half the screen size (at least 384×216) and can be
resized.

### Controls

| Input                | Action                                        |
|----------------------|-----------------------------------------------|
| W / S                | move forward / backward                       |
| A / D                | strafe left / right                           |
| Left / Right arrows  | turn                                          |
| Middle mouse button  | switch mouse-look on or off                   |
| Escape               | quit                                          |

Only one movement key acts at a time, checked in the order W, S, D, A. The
player collides with walls and slides along them when only one axis of a step
is blocked. With mouse-look on, the cursor is hidden and put back in the
centre of the window each frame, and the view turns while the cursor is left
or right of the centre.

## The `.cub` format

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0
111111
100101
1000N1
111111
```

- The file starts with six metadata lines, in any order; blank lines among
  them are ignored. Every line after the sixth belongs to the map.
- `NO`, `SO`, `WE`, `EA` give the image for walls facing each direction. Any
  image `pygame` can load will do.
- `F` and `C` give two colours as `R,G,B`, each 0–255. `F` fills the upper
  half of the view and `C` the lower half.
- Each identifier may appear only once.
- Map rows may contain only `1` (wall), `0` (floor), spaces and exactly one of
  `N`, `S`, `E`, `W` (the player's start and facing).
- The area reachable from the player must be closed by walls: it may not touch
  a space or the edge of the map.

A file that breaks any of these rules is rejected with a `MapError` whose
message says what is wrong.

## Using it as a library

```python
from cubraycast.mapfile import load_map, MapError

try:
    level = load_map("level.cub")
except MapError as exc:
    print(exc)
else:
    print(level.width, level.height, level.player)
```

- `cubraycast.mapfile`: `load_map(path)` and `parse_lines(lines)` return a
  `MapData` with the four texture paths, `floor` and `ceiling` as 32-bit RGBA
  integers, the map `grid`, its `width` and `height`, and the `player` start.
  `parse_color(text)` turns `R,G,B` into an RGBA integer.
- `cubraycast.floodfill`: `find_player(grid)` and `is_map_closed(grid, width)`
  locate the spawn point and check enclosure, raising `ValueError`.
- `cubraycast.raycast`: `cast_ray(grid, pos_x, pos_y, angle, view_angle)`
  walks a ray through the grid and returns a `RayHit` (cell, side, direction,
  fisheye-corrected distance, hit fraction `wall_x`); `wall_slice` gives the
  on-screen span of a wall column; `texture_side`, `texture_x`, `texture_y`
  and `texture_color` map a hit onto a texture.
- `cubraycast.player`: `Player` holds position and facing; `Player.move`
  steps with collision and wall sliding, `Player.rotate` turns for a set of
  held key names; `movement_delta`, `is_wall` and `can_move` are available on
  their own.
- `cubraycast.render`: `Frame` is a numpy buffer of RGBA pixels;
  `render_scene` draws background, walls, minimap, player and line of sight
  into it. `resize_target` clamps a window size to the 384×216 minimum.
- `cubraycast.app`: `load_textures`, `Game` and `run_game(path)` tie these
  together into the window and main loop; `main` is the command above.

## What it does not do

There are no enemies, doors, sprites, sound or saved state: the program shows
one level and lets you walk around it until you close the window.

## Tests

```
pip install .[test]
pytest
```