# solong

A small side-scrolling platformer. Each level is a cave carved out by a
random walk over a 64×64 tile grid. Snacks are placed on floor tiles that
sit on top of a wall; eat them all, then reach the exit to move on to a
freshly generated cave.

## Installing

```
pip install .
```

The game draws with pygame and does its pixel work with numpy.

It loads its textures from an `assets` directory under the current working
directory: the empty tile, the wall pieces, the player's idle, walk and dash
animations, the snacks, the exit and a bitmap font sheet. The file name for
each texture is given by `solong.tiles.texture_path`, for example
`assets/wall-top.xpm`, `assets/player_idle_0.xpm`, `assets/snack0.xpm` and
`assets/font.xpm`. If a texture cannot be loaded the game prints an error
and exits with status 1.

## Playing

```
solong
```

Without an argument the map seed is the current time. Give a seed as the
only argument to get a fixed map:

```
solong 1234
```

The seed must be a 32-bit signed integer; anything else is reported as an
invalid seed and the game exits with status 1. When a seed produces a map
with no snacks, the next seed is tried until one works.

### Controls

| Key                         | Action                                        |
|-----------------------------|-----------------------------------------------|
| `A` / `←`                   | move left                                     |
| `D` / `→`                   | move right                                    |
| `W` / `↑` / `Space`         | jump                                          |
| `Shift`                     | dash                                          |
| `Esc`                       | pause / resume; leave the in-game options menu|

Menus are operated with the mouse: a button fires when the left button is
released over it. The main menu offers *continue*, *new game*, *options*,
*credits* and *quit*; the pause menu offers *resume*, *options* and
*main menu*. In the options menus you can cycle the frame rate
(60 → 120 → 30), the gravity preset (normal → high → low) and switch the
hitbox display on or off.

The snack counter (eaten/total) is shown in the top-left corner, and the
number of times the player has moved from one tile to another in the
top-right. While the game runs, the frames drawn in each second are printed
to the terminal.

### What it does not do

The credits screen lists its entries as text only; clicking them does
nothing. Settings are not saved between sessions.

## Using the pieces

The game logic works without a window. To generate a map and print it:

```python
from solong.world import World

world = World(64, 64)
used_seed = world.generate_valid(42)
print(world.render_text())
```

`World.generate` raises `MapGenerationError` when a seed gives a map with no
snacks; `World.generate_valid` keeps trying the following seeds and returns
the one it used.

`solong.physics.Level` runs the player simulation on a `World` with a
`solong.options.Options` and a `solong.hooks.Controls`. Call
`Level.new_map(seed)` to place the player on a fresh map and `Level.update()`
once per frame; it returns `True` when the player's centre moved to another
tile.

`solong.pixels` holds the drawing primitives on numpy pixel arrays: alpha
blending, mirroring, scaling, Gaussian blur, and the `Frame` buffer with
`blit`, `draw_line` and `draw_text`.

## Running the tests

```
pip install .[test]
pytest
```