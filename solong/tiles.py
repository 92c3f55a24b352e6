"""Texture identifiers, their asset files and the wall auto-tiling lookup."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum


class Tex(IntEnum):
    """Every texture the game loads, in load order."""

    EMPTY = 0
    WALL_TOP = 1
    WALL_BOTTOM = 2
    WALL_LEFT = 3
    WALL_RIGHT = 4
    CORNER_TL = 5
    CORNER_TR = 6
    CORNER_BL = 7
    CORNER_BR = 8
    CORNER_EXT_TL = 9
    CORNER_EXT_TR = 10
    CORNER_EXT_BL = 11
    CORNER_EXT_BR = 12
    CORNER_TJUNC_T = 13
    CORNER_TJUNC_B = 14
    CORNER_TJUNC_L = 15
    CORNER_TJUNC_R = 16
    JUNC_CROSS = 17
    TJUNC_T = 18
    TJUNC_B = 19
    TJUNC_L = 20
    TJUNC_R = 21
    LJUNC_TL = 22
    LJUNC_TR = 23
    LJUNC_BL = 24
    LJUNC_BR = 25
    PLATFORM = 26
    PLATFORM_T = 27
    PLATFORM_B = 28
    PLATFORM_L = 29
    PLATFORM_R = 30
    PLATFORM_H = 31
    PLATFORM_V = 32
    HLJUNC_TL = 33
    HLJUNC_TR = 34
    HLJUNC_BL = 35
    HLJUNC_BR = 36
    VLJUNC_TL = 37
    VLJUNC_TR = 38
    VLJUNC_BL = 39
    VLJUNC_BR = 40
    CORNERS_XTL = 41
    CORNERS_XTR = 42
    CORNERS_XBL = 43
    CORNERS_XBR = 44
    DIAG_TLBR = 45
    DIAG_TRBL = 46
    PLAYER = 47
    PLAYER_IDLE_0 = 48
    PLAYER_IDLE_1 = 49
    PLAYER_IDLE_2 = 50
    PLAYER_IDLE_3 = 51
    PLAYER_IDLE_4 = 52
    PLAYER_IDLE_5 = 53
    PLAYER_IDLE_6 = 54
    PLAYER_IDLE_7 = 55
    PLAYER_IDLE_8 = 56
    PLAYER_IDLE_9 = 57
    PLAYER_IDLE_10 = 58
    PLAYER_IDLE_11 = 59
    PLAYER_IDLE_12 = 60
    PLAYER_IDLE_13 = 61
    PLAYER_IDLE_14 = 62
    PLAYER_IDLE_15 = 63
    PLAYER_IDLE_16 = 64
    PLAYER_IDLE_17 = 65
    PLAYER_IDLE_18 = 66
    PLAYER_IDLE_19 = 67
    PLAYER_WALK_0 = 68
    PLAYER_WALK_1 = 69
    PLAYER_WALK_2 = 70
    PLAYER_WALK_3 = 71
    PLAYER_WALK_4 = 72
    PLAYER_WALK_5 = 73
    PLAYER_WALK_6 = 74
    PLAYER_WALK_7 = 75
    PLAYER_WALK_8 = 76
    PLAYER_WALK_9 = 77
    PLAYER_WALK_10 = 78
    PLAYER_WALK_11 = 79
    PLAYER_WALK_12 = 80
    PLAYER_WALK_13 = 81
    PLAYER_WALK_14 = 82
    PLAYER_WALK_15 = 83
    PLAYER_WALK_16 = 84
    PLAYER_WALK_17 = 85
    PLAYER_WALK_18 = 86
    PLAYER_WALK_19 = 87
    PLAYER_DASH_0 = 88
    PLAYER_DASH_1 = 89
    PLAYER_DASH_2 = 90
    PLAYER_DASH_3 = 91
    PLAYER_DASH_4 = 92
    PLAYER_DASH_5 = 93
    PLAYER_DASH_6 = 94
    PLAYER_DASH_7 = 95
    PLAYER_DASH_8 = 96
    PLAYER_DASH_9 = 97
    PLAYER_DASH_10 = 98
    PLAYER_DASH_11 = 99
    PLAYER_DASH_12 = 100
    PLAYER_DASH_13 = 101
    PLAYER_DASH_14 = 102
    PLAYER_DASH_15 = 103
    EXIT = 104
    LOADING_0 = 105
    LOADING_1 = 106
    LOADING_2 = 107
    LOADING_3 = 108
    LOADING_4 = 109
    LOADING_5 = 110
    LOADING_6 = 111
    LOADING_7 = 112
    LOADING_8 = 113
    LOADING_9 = 114
    LOADING_10 = 115
    LOADING_11 = 116
    LOADING_12 = 117
    LOADING_13 = 118
    SNACK_0 = 119
    SNACK_1 = 120
    SNACK_2 = 121
    SNACK_3 = 122
    SNACK_4 = 123
    SNACK_5 = 124
    SNACK_6 = 125
    SNACK_7 = 126
    FONT = 127


TEX_COUNT = len(Tex)

ASSET_DIR = "assets"


def _build_lookup() -> tuple[Tex, ...]:
    T = Tex
    rows: list[list[Tex]] = [
        [T.PLATFORM] * 16,
        [T.PLATFORM_R] * 16,
        [T.PLATFORM_L] * 16,
        [T.PLATFORM_H] * 16,
        [T.PLATFORM_B] * 16,
        [T.LJUNC_BR, T.CORNER_EXT_TL] * 8,
        [T.LJUNC_BL, T.LJUNC_BL, T.CORNER_EXT_TR, T.CORNER_EXT_TR] * 4,
        [T.TJUNC_B, T.HLJUNC_BL, T.HLJUNC_BR, T.WALL_BOTTOM] * 4,
        [T.PLATFORM_T] * 16,
        ([T.LJUNC_TR] * 4 + [T.CORNER_EXT_BL] * 4) * 2,
        [T.LJUNC_TL] * 8 + [T.CORNER_EXT_BR] * 8,
        [T.TJUNC_T] * 4 + [T.HLJUNC_TL] * 4 + [T.HLJUNC_TR] * 4 + [T.WALL_TOP] * 4,
        [T.PLATFORM_V] * 16,
        [
            T.TJUNC_R, T.VLJUNC_TR, T.TJUNC_R, T.VLJUNC_TR,
            T.VLJUNC_BR, T.WALL_RIGHT, T.VLJUNC_BR, T.WALL_RIGHT,
        ] * 2,
        [
            T.TJUNC_L, T.TJUNC_L, T.VLJUNC_TL, T.VLJUNC_TL,
            T.VLJUNC_BL, T.VLJUNC_BL, T.WALL_LEFT, T.WALL_LEFT,
        ] * 2,
        [
            T.JUNC_CROSS, T.CORNERS_XBR, T.CORNERS_XBL, T.CORNER_TJUNC_T,
            T.CORNERS_XTR, T.CORNER_TJUNC_L, T.DIAG_TRBL, T.CORNER_TL,
            T.CORNERS_XTL, T.DIAG_TLBR, T.CORNER_TJUNC_R, T.CORNER_TR,
            T.CORNER_TJUNC_B, T.CORNER_BL, T.CORNER_BR, T.EMPTY,
        ],
    ]
    return tuple(tex for row in rows for tex in row)


_LOOKUP = _build_lookup()


def texture_index(mask: int) -> Tex:
    """Wall texture chosen for an 8-bit neighbour mask."""
    if not 0 <= mask < len(_LOOKUP):
        raise ValueError(f"texture mask out of range: {mask}")
    return _LOOKUP[mask]


def _file_stem(tex: Tex) -> str:
    name = tex.name
    if name.startswith("PLAYER_"):
        return name.lower()
    if name.startswith("LOADING_"):
        return f"loading_{int(name.rsplit('_', 1)[1]):02d}"
    if name.startswith("SNACK_"):
        return "snack" + name.rsplit("_", 1)[1]
    return name.lower().replace("_", "-")


def texture_path(tex: Tex | int) -> str:
    """Relative path of the image file for a texture."""
    return f"{ASSET_DIR}/{_file_stem(Tex(tex))}.xpm"


def texture_mask(is_wall: Callable[[int, int], bool], x: int, y: int) -> int:
    """Neighbour mask of tile (x, y): bit set where the neighbour is a wall.

    Bits from high to low: top, bottom, left, right, top-left, top-right,
    bottom-left, bottom-right.
    """
    neighbours = (
        (x, y - 1),
        (x, y + 1),
        (x - 1, y),
        (x + 1, y),
        (x - 1, y - 1),
        (x + 1, y - 1),
        (x - 1, y + 1),
        (x + 1, y + 1),
    )
    mask = 0
    for nx, ny in neighbours:
        mask = (mask << 1) | bool(is_wall(nx, ny))
    return mask