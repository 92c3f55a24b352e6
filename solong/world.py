"""The tile map: generation, wall queries and per-tile collision boxes."""

from __future__ import annotations

import logging
import random

from solong.hitbox import Hitbox, tile_hitbox
from solong.tiles import Tex, texture_index, texture_mask

log = logging.getLogger(__name__)

WALL = "1"
FLOOR = "0"
SNACK = "C"
EXIT = "E"
PLAYER = "P"


class MapGenerationError(Exception):
    """Raised when a generated map has no snack to collect."""


class World:
    """A rectangular grid of map cells plus the level's counters."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"map size must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self.grid: list[list[str]] = [[WALL] * width for _ in range(height)]
        self.snack_count = 0
        self.snacks_eaten = 0
        self.move_count = 0
        self.player_tile: tuple[int, int] | None = None

    def is_out_of_bounds(self, tx: int, ty: int) -> bool:
        """True if (tx, ty) lies outside the map."""
        return tx < 0 or ty < 0 or tx >= self.width or ty >= self.height

    def is_wall(self, tx: int, ty: int) -> bool:
        """True for wall cells and everything outside the map."""
        return self.is_out_of_bounds(tx, ty) or self.grid[ty][tx] == WALL

    def texture_mask(self, tx: int, ty: int) -> int:
        """Neighbour mask of the tile at (tx, ty)."""
        return texture_mask(self.is_wall, tx, ty)

    def texture_at(self, tx: int, ty: int) -> Tex:
        """Wall texture chosen for the tile at (tx, ty)."""
        return texture_index(self.texture_mask(tx, ty))

    def absolute_hitbox(self, tx: int, ty: int) -> Hitbox:
        """World-space box of the wall texture that fits tile (tx, ty)."""
        return tile_hitbox(self.texture_at(tx, ty), tx, ty)

    def solid_hitbox(self, tx: int, ty: int) -> Hitbox | None:
        """Collision box of tile (tx, ty), or None if it is not a wall."""
        if not self.is_wall(tx, ty):
            return None
        return self.absolute_hitbox(tx, ty)

    def generate(self, seed: int) -> None:
        """Carve a new cave from ``seed`` and place player, snacks and exit.

        Raises MapGenerationError if the map ends up with no snack.
        """
        log.info("Seed %i", seed)
        rng = random.Random(seed)
        w, h = self.width, self.height
        self.grid = [[WALL] * w for _ in range(h)]
        self.move_count = 0
        self.snack_count = -1
        self.snacks_eaten = 0
        self.player_tile = None

        x, y = w // 2, h // 2
        self.grid[y][x] = FLOOR
        for _ in range(w * h):
            direction = rng.getrandbits(32) % 4
            if direction == 0 and x > 1:
                x -= 1
            elif direction == 1 and x < w - 2:
                x += 1
            elif direction == 2 and y > 1:
                y -= 1
            elif direction == 3 and y < h - 2:
                y += 1
            if x >= w - 1 or y >= h - 1:
                log.warning("invalid position %ix%i", x, y)
            if self.grid[y][x] == WALL:
                self.grid[y][x] = FLOOR

        last = (0, 0)
        for ty, (row, below) in enumerate(zip(self.grid, self.grid[1:])):
            for tx, (cell, under) in enumerate(zip(row, below)):
                if cell != FLOOR or under != WALL:
                    continue
                if rng.getrandbits(32) % 5 != 0:
                    continue
                last = (tx, ty)
                if self.player_tile is None:
                    self.player_tile = (tx, ty)
                    row[tx] = PLAYER
                else:
                    row[tx] = SNACK
                    self.snack_count += 1

        lx, ly = last
        self.grid[ly][lx] = EXIT
        if self.snack_count <= 0:
            raise MapGenerationError(f"seed {seed} produced no snacks")

    def generate_valid(self, seed: int) -> int:
        """Generate from ``seed``, trying successive seeds until one works.

        Returns the seed that produced the map.
        """
        while True:
            try:
                self.generate(seed)
            except MapGenerationError:
                seed += 1
            else:
                return seed

    def render_text(self) -> str:
        """The map as text, one line per row."""
        return "".join("".join(row) + "\n" for row in self.grid)