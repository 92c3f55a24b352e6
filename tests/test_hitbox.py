import pytest

from solong.hitbox import (
    HITBOXES,
    TILE_SIZE,
    Hitbox,
    line_points,
    outline_segments,
    tile_hitbox,
)
from solong.tiles import Tex


def test_empty_tile_hitbox_covers_whole_tile():
    assert tile_hitbox(Tex.EMPTY, 0, 0) == Hitbox(0, 0, 64, 64)


def test_exit_hitbox_from_table():
    assert tile_hitbox(Tex.EXIT, 0, 0) == Hitbox(12, 12, 52, 52)


def test_offset_shifts_by_tile_size():
    base = tile_hitbox(Tex.WALL_TOP, 0, 0)
    moved = tile_hitbox(Tex.WALL_TOP, 2, 3)
    assert moved.left - base.left == 2 * TILE_SIZE
    assert moved.right - base.right == 2 * TILE_SIZE
    assert moved.top - base.top == 3 * TILE_SIZE
    assert moved.bottom - base.bottom == 3 * TILE_SIZE


def test_offset_negative_tiles():
    box = Hitbox(1, 2, 3, 4)
    assert box.offset(-1, 0).offset(1, 0) == box


def test_texture_without_box_is_degenerate():
    box = tile_hitbox(Tex.FONT, 1, 1)
    assert box == Hitbox(TILE_SIZE, TILE_SIZE, TILE_SIZE, TILE_SIZE)


def test_all_snack_boxes_equal():
    snacks = [HITBOXES[Tex(Tex.SNACK_0 + i)] for i in range(8)]
    assert all(box == snacks[0] for box in snacks)
    assert snacks[0] == Hitbox(20, 36, 44, 58)


def test_hitboxes_are_well_formed():
    for box in HITBOXES.values():
        assert box.left <= box.right
        assert box.top <= box.bottom


def test_line_same_point_is_empty():
    assert list(line_points((5, 5), (5, 5))) == []


@pytest.mark.parametrize(
    "p0,p1",
    [((0, 0), (10, 0)), ((0, 0), (0, -7)), ((3, 4), (-5, 9)), ((0, 0), (6, 6)), ((2, 1), (9, 20))],
)
def test_line_invariants(p0, p1):
    points = list(line_points(p0, p1))
    assert points[0] == p0
    assert p1 not in points
    assert len(points) == max(abs(p1[0] - p0[0]), abs(p1[1] - p0[1]))
    for a, b in zip(points, points[1:] + [p1]):
        assert abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1


def test_line_truncates_floats():
    assert list(line_points((0.9, 0.2), (2.7, 0.0)))[0] == (0, 0)


def test_outline_segments_has_edges_and_diagonals():
    segments = outline_segments(1, 2, 30, 40)
    assert len(segments) == 6
    assert ((1, 2), (30, 2)) in segments
    assert ((1, 2), (30, 40)) in segments
    assert ((1, 40), (30, 2)) in segments
    corners = {p for seg in segments for p in seg}
    assert corners == {(1, 2), (30, 2), (30, 40), (1, 40)}