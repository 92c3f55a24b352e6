"""Player movement, tile collisions and item pickup for a running level."""

from __future__ import annotations

import time
from dataclasses import dataclass

from solong.hitbox import TILE_SIZE, Hitbox
from solong.hooks import Controls
from solong.options import Options
from solong.world import EXIT, FLOOR, SNACK, World

PLAYER_WIDTH = 32
PLAYER_HEIGHT = 56


@dataclass
class Player:
    """Position, previous position and velocity of the player's box."""

    x: float = 0.0
    y: float = 0.0
    px: float = 0.0
    py: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    w: int = PLAYER_WIDTH
    h: int = PLAYER_HEIGHT

    def place_at(self, tx: int, ty: int) -> None:
        """Put the player on tile (tx, ty) with no pending movement."""
        self.x = tx * TILE_SIZE + 0.25 * (TILE_SIZE - self.w)
        self.y = ty * TILE_SIZE + 0.25 * (TILE_SIZE - self.h)
        self.px = self.x
        self.py = self.y

    def center_tile(self) -> tuple[int, int]:
        """Tile holding the centre of the player's box."""
        return (
            int((self.x + 0.5 * self.w) / TILE_SIZE),
            int((self.y + 0.5 * self.h) / TILE_SIZE),
        )

    def previous_center_tile(self) -> tuple[int, int]:
        """Tile that held the centre of the box before the last step."""
        return (
            int((self.px + 0.5 * self.w) / TILE_SIZE),
            int((self.py + 0.5 * self.h) / TILE_SIZE),
        )


def _overlaps_horizontally(p: Player, box: Hitbox) -> bool:
    return p.x < box.right and p.x + p.w > box.left


def _overlaps_vertically(p: Player, box: Hitbox) -> bool:
    return p.y < box.bottom and p.y + p.h > box.top


def _push_up_from(p: Player, box: Hitbox) -> None:
    overlap = p.y + p.h - box.top
    previous = p.py + p.h - box.top
    if previous <= 0 < overlap and _overlaps_horizontally(p, box):
        p.vy = 0.0
        p.y = box.top - p.h


def _push_down_from(p: Player, box: Hitbox) -> None:
    overlap = box.bottom - p.y
    previous = box.bottom - p.py
    if previous <= 0 < overlap and _overlaps_horizontally(p, box):
        p.vy = 0.0
        p.y = box.bottom


def _push_left_from(p: Player, box: Hitbox) -> None:
    overlap = p.x + p.w - box.left
    previous = p.px + p.w - box.left
    if previous <= 0 < overlap and _overlaps_vertically(p, box):
        p.vx = 0.0
        p.x = box.left - p.w


def _push_right_from(p: Player, box: Hitbox) -> None:
    overlap = box.right - p.x
    previous = box.right - p.px
    if previous <= 0 < overlap and _overlaps_vertically(p, box):
        p.vx = -1e-10
        p.x = box.right


def collide_x(world: World, player: Player) -> None:
    """Stop horizontal movement that crossed into a wall this step."""
    y0 = int(player.y / TILE_SIZE)
    y1 = int((player.y + player.h) / TILE_SIZE)
    if player.vx > 0:
        for ty in range(y0, y1 + 1):
            box = world.solid_hitbox(int((player.x + player.w) / TILE_SIZE), ty)
            if box is not None:
                _push_left_from(player, box)
    elif player.vx < 0:
        for ty in range(y0, y1 + 1):
            box = world.solid_hitbox(int(player.x / TILE_SIZE), ty)
            if box is not None:
                _push_right_from(player, box)


def collide_y(world: World, player: Player) -> None:
    """Stop vertical movement that crossed into a floor or ceiling this step."""
    x0 = int(player.x / TILE_SIZE)
    x1 = int((player.x + player.w) / TILE_SIZE)
    if player.vy > 0:
        for tx in range(x0, x1 + 1):
            box = world.solid_hitbox(tx, int((player.y + player.h) / TILE_SIZE))
            if box is not None:
                _push_up_from(player, box)
    elif player.vy < 0:
        for tx in range(x0, x1 + 1):
            ty = int(player.y / TILE_SIZE)
            if ty < 0:
                return
            box = world.solid_hitbox(tx, ty)
            if box is not None:
                _push_down_from(player, box)


def _time_seed() -> int:
    return int(time.time())


class Level:
    """A playable level: the world, the player and the rules that move them."""

    def __init__(self, world: World, options: Options, controls: Controls) -> None:
        self.world = world
        self.options = options
        self.controls = controls
        self.player = Player()

    def new_map(self, seed: int) -> int:
        """Generate a fresh map and put the player on its start tile.

        Returns the seed that produced the map.
        """
        used = self.world.generate_valid(seed)
        if self.world.player_tile is not None:
            self.player.place_at(*self.world.player_tile)
        return used

    def update(self) -> bool:
        """Advance the simulation by one frame.

        Returns True if the player's centre moved to another tile, which
        also counts as one move.
        """
        p, opt, ctl = self.player, self.options, self.controls
        p.vx *= opt.friction
        p.vy += opt.gravity
        if ctl.left:
            p.vx = -opt.velocity
        elif ctl.right:
            p.vx = opt.velocity
        if ctl.should_dash:
            if ctl.left or ctl.right:
                p.vx *= opt.dash_multiplier
            ctl.should_dash -= 1
        if ctl.should_jump:
            p.vy = -opt.jump_force
            ctl.should_jump = False
        p.px = p.x
        p.x += p.vx
        collide_x(self.world, p)
        p.py = p.y
        p.y += p.vy
        collide_y(self.world, p)
        self.collect_items()
        moved = p.center_tile() != p.previous_center_tile()
        if moved:
            self.world.move_count += 1
        return moved

    def collect_items(self) -> None:
        """Eat snacks under the player's centre; take the exit once all are eaten."""
        p, world = self.player, self.world
        cx = p.x + 0.5 * p.w
        cy = p.y + 0.5 * p.h
        x0, x1 = int(p.x / TILE_SIZE), int((p.x + p.w) / TILE_SIZE)
        y0, y1 = int(p.y / TILE_SIZE), int((p.y + p.h) / TILE_SIZE)
        for ty in range(y0, y1 + 1):
            for tx in range(x0, x1 + 1):
                if world.is_out_of_bounds(tx, ty):
                    continue
                box = world.absolute_hitbox(tx, ty)
                if cx < box.left or cy < box.top or cx > box.right or cy > box.bottom:
                    continue
                cell = world.grid[ty][tx]
                if cell == SNACK:
                    world.snacks_eaten += 1
                    world.grid[ty][tx] = FLOOR
                    cell = FLOOR
                if cell == EXIT and world.snacks_eaten == world.snack_count:
                    self.new_map(_time_seed())
                    return