"""Collision boxes of tiles and the line helpers used to outline them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from solong.tiles import Tex

TILE_SIZE = 64

Point = tuple[int, int]
Segment = tuple[Point, Point]


@dataclass(frozen=True)
class Hitbox:
    """Axis-aligned box given by its left, top, right and bottom edges."""

    left: int
    top: int
    right: int
    bottom: int

    def offset(self, tx: int, ty: int) -> Hitbox:
        """This box moved from tile-local to world coordinates of tile (tx, ty)."""
        dx = tx * TILE_SIZE
        dy = ty * TILE_SIZE
        return Hitbox(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)


_NO_BOX = Hitbox(0, 0, 0, 0)
_SNACK_BOX = Hitbox(20, 36, 44, 58)

HITBOXES: dict[Tex, Hitbox] = {
    Tex.EMPTY: Hitbox(0, 0, 64, 64),
    Tex.WALL_TOP: Hitbox(0, 0, 64, 48),
    Tex.WALL_BOTTOM: Hitbox(0, 8, 64, 64),
    Tex.WALL_LEFT: Hitbox(0, 0, 48, 64),
    Tex.WALL_RIGHT: Hitbox(16, 0, 64, 64),
    Tex.CORNER_TL: Hitbox(0, 8, 64, 64),
    Tex.CORNER_TR: Hitbox(0, 8, 64, 64),
    Tex.CORNER_BL: Hitbox(0, 0, 64, 48),
    Tex.CORNER_BR: Hitbox(0, 0, 64, 48),
    Tex.CORNER_EXT_TL: Hitbox(16, 8, 64, 64),
    Tex.CORNER_EXT_TR: Hitbox(0, 8, 48, 64),
    Tex.CORNER_EXT_BL: Hitbox(16, 0, 64, 48),
    Tex.CORNER_EXT_BR: Hitbox(0, 0, 48, 48),
    Tex.CORNER_TJUNC_T: Hitbox(0, 8, 64, 64),
    Tex.CORNER_TJUNC_B: Hitbox(0, 0, 64, 48),
    Tex.CORNER_TJUNC_L: Hitbox(16, 0, 64, 64),
    Tex.CORNER_TJUNC_R: Hitbox(0, 0, 48, 64),
    Tex.JUNC_CROSS: Hitbox(16, 8, 48, 48),
    Tex.TJUNC_T: Hitbox(0, 8, 64, 48),
    Tex.TJUNC_B: Hitbox(0, 8, 64, 48),
    Tex.TJUNC_L: Hitbox(16, 0, 48, 64),
    Tex.TJUNC_R: Hitbox(16, 0, 48, 64),
    Tex.LJUNC_TL: Hitbox(0, 8, 48, 48),
    Tex.LJUNC_TR: Hitbox(16, 8, 64, 48),
    Tex.LJUNC_BL: Hitbox(0, 8, 48, 48),
    Tex.LJUNC_BR: Hitbox(16, 8, 64, 48),
    Tex.PLATFORM: Hitbox(16, 8, 48, 48),
    Tex.PLATFORM_T: Hitbox(16, 0, 48, 40),
    Tex.PLATFORM_B: Hitbox(16, 8, 48, 64),
    Tex.PLATFORM_L: Hitbox(0, 8, 16, 48),
    Tex.PLATFORM_R: Hitbox(48, 8, 64, 48),
    Tex.PLATFORM_H: Hitbox(0, 8, 64, 48),
    Tex.PLATFORM_V: Hitbox(16, 0, 48, 64),
    Tex.HLJUNC_TL: Hitbox(0, 8, 64, 48),
    Tex.HLJUNC_TR: Hitbox(0, 8, 64, 48),
    Tex.HLJUNC_BL: Hitbox(0, 8, 64, 48),
    Tex.HLJUNC_BR: Hitbox(0, 8, 64, 48),
    Tex.VLJUNC_TL: Hitbox(0, 8, 48, 64),
    Tex.VLJUNC_TR: Hitbox(16, 0, 48, 64),
    Tex.VLJUNC_BL: Hitbox(0, 0, 48, 48),
    Tex.VLJUNC_BR: Hitbox(16, 0, 64, 48),
    Tex.CORNERS_XTL: Hitbox(0, 8, 64, 48),
    Tex.CORNERS_XTR: Hitbox(0, 8, 64, 48),
    Tex.CORNERS_XBL: Hitbox(0, 8, 48, 64),
    Tex.CORNERS_XBR: Hitbox(16, 8, 64, 64),
    Tex.DIAG_TLBR: Hitbox(0, 8, 64, 48),
    Tex.DIAG_TRBL: Hitbox(0, 8, 64, 48),
    Tex.PLAYER: Hitbox(0, 0, 64, 64),
    Tex.EXIT: Hitbox(12, 12, 52, 52),
    **{
        tex: _SNACK_BOX
        for tex in (
            Tex.SNACK_0, Tex.SNACK_1, Tex.SNACK_2, Tex.SNACK_3,
            Tex.SNACK_4, Tex.SNACK_5, Tex.SNACK_6, Tex.SNACK_7,
        )
    },
}


def tile_hitbox(tex: Tex | int, tx: int, ty: int) -> Hitbox:
    """World-space hitbox of texture ``tex`` drawn at tile (tx, ty).

    Textures without a collision box get an empty box at the tile's corner.
    """
    return HITBOXES.get(Tex(tex), _NO_BOX).offset(tx, ty)


def line_points(p0: tuple[float, float], p1: tuple[float, float]) -> Iterator[Point]:
    """Pixels of the line from p0 towards p1, end point excluded."""
    x, y = int(p0[0]), int(p0[1])
    x1, y1 = int(p1[0]), int(p1[1])
    dx = abs(x1 - x)
    dy = abs(y1 - y)
    sx = 1 if x < x1 else -1
    sy = 1 if y < y1 else -1
    err = dx - dy
    while x != x1 or y != y1:
        yield x, y
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def outline_segments(left: float, top: float, right: float, bottom: float) -> tuple[Segment, ...]:
    """The four edges and two diagonals used to draw a debug box."""
    l, t, r, b = int(left), int(top), int(right), int(bottom)
    return (
        ((l, t), (r, t)),
        ((r, t), (r, b)),
        ((r, b), (l, b)),
        ((l, b), (l, t)),
        ((l, t), (r, b)),
        ((l, b), (r, t)),
    )