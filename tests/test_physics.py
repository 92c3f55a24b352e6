import pytest

from solong.hooks import Controls, Scene
from solong.options import Options
from solong.physics import Level, Player, collide_x, collide_y
from solong.world import EXIT, FLOOR, PLAYER, SNACK, WALL, World


def _room(size=8):
    world = World(size, size)
    edge = (0, size - 1)
    world.grid = [
        [WALL if tx in edge or ty in edge else FLOOR for tx in range(size)]
        for ty in range(size)
    ]
    return world


def _level(world=None):
    return Level(world or _room(), Options(), Controls(scene=Scene.LEVEL))


def test_place_at_centres_player_in_tile_and_resets_previous():
    player = Player()
    player.place_at(2, 3)
    assert player.px == player.x
    assert player.py == player.y
    assert player.center_tile() == (2, 3)
    assert player.previous_center_tile() == (2, 3)


def test_landing_on_floor_stops_fall():
    world = _room()
    box = world.solid_hitbox(3, 7)
    player = Player(x=200.0, vy=5.0)
    player.py = box.top - player.h - 1
    player.y = box.top - player.h + 4
    collide_y(world, player)
    assert player.y == box.top - player.h
    assert player.vy == 0


def test_hitting_ceiling_stops_rise():
    world = _room()
    box = world.solid_hitbox(3, 0)
    player = Player(x=200.0, vy=-4.0)
    player.py = box.bottom + 1
    player.y = box.bottom - 3
    collide_y(world, player)
    assert player.y == box.bottom
    assert player.vy == 0


def test_moving_right_into_wall_is_blocked():
    world = _room()
    box = world.solid_hitbox(7, 3)
    player = Player(y=200.0, vx=3.0)
    player.px = box.left - player.w - 1
    player.x = box.left - player.w + 3
    collide_x(world, player)
    assert player.x == box.left - player.w
    assert player.vx == 0


def test_moving_left_into_wall_is_blocked():
    world = _room()
    box = world.solid_hitbox(0, 3)
    player = Player(y=200.0, vx=-5.0)
    player.px = box.right + 2
    player.x = box.right - 3
    collide_x(world, player)
    assert player.x == box.right
    assert player.vx < 0


def test_box_already_inside_wall_is_left_alone():
    world = _room()
    box = world.solid_hitbox(7, 3)
    player = Player(y=200.0, vx=3.0)
    player.px = box.left - player.w + 1
    player.x = box.left - player.w + 4
    start = player.x
    collide_x(world, player)
    assert player.x == start
    assert player.vx == 3.0


def test_update_applies_gravity_in_open_space():
    level = _level()
    level.player.place_at(3, 3)
    start_y = level.player.y
    level.update()
    assert level.player.vy == pytest.approx(level.options.gravity)
    assert level.player.y == pytest.approx(start_y + level.options.gravity)
    assert level.player.vx == 0


def test_update_walks_left():
    level = _level()
    level.player.place_at(3, 3)
    level.controls.left = True
    level.update()
    assert level.player.vx == pytest.approx(-level.options.velocity)


def test_update_dash_multiplies_velocity_and_counts_down():
    level = _level()
    level.player.place_at(3, 3)
    level.controls.right = True
    level.controls.should_dash = 16
    level.update()
    opt = level.options
    assert level.player.vx == pytest.approx(opt.velocity * opt.dash_multiplier)
    assert level.controls.should_dash == 15


def test_update_jump_sets_upward_velocity_once():
    level = _level()
    level.player.place_at(3, 4)
    level.controls.should_jump = True
    level.update()
    assert level.player.vy == pytest.approx(-level.options.jump_force)
    assert level.controls.should_jump is False


def test_update_counts_move_when_centre_tile_changes():
    level = _level()
    level.player.place_at(3, 2)
    level.player.vy = 64.0
    assert level.update() is True
    assert level.world.move_count == 1
    assert level.update() is False
    assert level.world.move_count == 1


def test_new_map_places_player_on_start_tile():
    level = _level(World(16, 16))
    used = level.new_map(7)
    assert used >= 7
    tile = level.world.player_tile
    assert level.player.center_tile() == tile
    assert level.world.grid[tile[1]][tile[0]] in (PLAYER, EXIT)


def test_collect_snack_under_player():
    level = _level()
    level.world.grid[3][3] = SNACK
    level.world.snack_count = 1
    level.player.place_at(3, 3)
    level.collect_items()
    assert level.world.snacks_eaten == 1
    assert level.world.grid[3][3] == FLOOR


def test_exit_ignored_while_snacks_remain():
    level = _level()
    level.world.grid[3][3] = EXIT
    level.world.snack_count = 2
    level.player.place_at(3, 3)
    level.collect_items()
    assert level.world.grid[3][3] == EXIT
    assert level.world.snacks_eaten == 0


def test_exit_with_all_snacks_eaten_starts_new_map():
    level = _level()
    level.world.grid[3][3] = EXIT
    level.world.snack_count = 0
    level.world.snacks_eaten = 0
    level.player.place_at(3, 3)
    level.collect_items()
    assert level.world.snacks_eaten == 0
    assert level.world.snack_count > 0
    assert level.player.center_tile() == level.world.player_tile