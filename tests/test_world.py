import pytest

from solong.hitbox import tile_hitbox
from solong.tiles import Tex
from solong.world import MapGenerationError, World


def _open_center():
    world = World(3, 3)
    world.grid[1][1] = "0"
    return world


def test_new_world_is_all_walls():
    world = World(4, 2)
    assert world.render_text() == "1111\n1111\n"


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        World(0, 5)


@pytest.mark.parametrize("tx,ty", [(-1, 0), (0, -1), (3, 0), (0, 3)])
def test_out_of_bounds_is_wall(tx, ty):
    world = _open_center()
    assert world.is_out_of_bounds(tx, ty)
    assert world.is_wall(tx, ty)


def test_open_cell_is_not_wall():
    world = _open_center()
    assert not world.is_wall(1, 1)
    assert world.is_wall(0, 0)
    assert world.solid_hitbox(1, 1) is None


def test_fully_enclosed_tile_uses_empty_texture():
    world = World(3, 3)
    assert world.texture_mask(1, 1) == 0xFF
    assert world.texture_at(1, 1) is Tex.EMPTY
    assert world.solid_hitbox(1, 1) == tile_hitbox(Tex.EMPTY, 1, 1)


def test_isolated_wall_gets_platform():
    world = World(3, 3)
    world.grid = [list("000"), list("010"), list("000")]
    assert world.texture_mask(1, 1) == 0
    assert world.texture_at(1, 1) is Tex.PLATFORM
    assert world.absolute_hitbox(1, 1) == tile_hitbox(Tex.PLATFORM, 1, 1)


def test_wall_below_open_cell():
    world = _open_center()
    mask = world.texture_mask(1, 2)
    assert mask & 0x80 == 0
    assert world.solid_hitbox(1, 2) == world.absolute_hitbox(1, 2)


def test_tiny_map_never_has_snacks():
    with pytest.raises(MapGenerationError):
        World(3, 3).generate(1)


@pytest.mark.parametrize("seed", [0, 1, 7, 12345])
def test_generated_map_invariants(seed):
    world = World(20, 16)
    used = world.generate_valid(seed)
    assert used >= seed
    text = world.render_text()
    cells = text.replace("\n", "")
    assert cells.count("E") == 1
    assert cells.count("P") <= 1
    assert cells.count("C") == world.snack_count
    assert world.snack_count > 0
    assert world.snacks_eaten == 0 and world.move_count == 0
    lines = text.splitlines()
    assert len(lines) == 16
    assert all(len(line) == 20 for line in lines)
    assert set(lines[0]) == {"1"} and set(lines[-1]) == {"1"}
    assert all(line[0] == "1" and line[-1] == "1" for line in lines)


def test_player_tile_recorded_and_standing_on_wall():
    world = World(24, 24)
    world.generate_valid(3)
    assert world.player_tile is not None
    px, py = world.player_tile
    assert world.grid[py][px] in ("P", "E")
    assert world.is_wall(px, py + 1)


def test_snacks_sit_on_walls():
    world = World(24, 24)
    world.generate_valid(99)
    for y, row in enumerate(world.grid):
        for x, cell in enumerate(row):
            if cell in "CE":
                assert world.grid[y + 1][x] == "1"


def test_generation_is_deterministic():
    first = World(18, 18)
    second = World(18, 18)
    seed = first.generate_valid(42)
    second.generate(seed)
    assert first.render_text() == second.render_text()
    assert first.snack_count == second.snack_count


def test_regenerate_resets_counters():
    world = World(20, 20)
    seed = world.generate_valid(5)
    world.snacks_eaten = 3
    world.move_count = 10
    world.generate(seed)
    assert (world.snacks_eaten, world.move_count) == (0, 0)