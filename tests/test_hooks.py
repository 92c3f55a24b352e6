import pytest

from solong.hooks import Controls, Key, Mouse, Scene


def test_default_scene_is_main_menu():
    assert Controls().scene is Scene.MAIN_MENU


def test_escape_keysym_value_pauses_level():
    controls = Controls(scene=Scene.LEVEL)
    controls.key_press(0xFF1B)
    assert controls.scene is Scene.PAUSE_MENU


@pytest.mark.parametrize(
    "start,expected",
    [
        (Scene.LEVEL, Scene.PAUSE_MENU),
        (Scene.PAUSE_MENU, Scene.LEVEL),
        (Scene.OPTIONS_MENU, Scene.PAUSE_MENU),
        (Scene.MAIN_MENU, Scene.MAIN_MENU),
        (Scene.CREDITS, Scene.CREDITS),
        (Scene.MAIN_OPTIONS_MENU, Scene.MAIN_OPTIONS_MENU),
    ],
)
def test_escape_transitions(start, expected):
    controls = Controls(scene=start)
    controls.key_press(Key.ESCAPE)
    assert controls.scene is expected


@pytest.mark.parametrize("key", [Key.A, Key.LEFT])
def test_left_keys_work_in_any_scene(key):
    controls = Controls(scene=Scene.MAIN_MENU)
    controls.key_press(key)
    assert controls.left is True
    controls.key_release(key)
    assert controls.left is False


@pytest.mark.parametrize("key", [Key.D, Key.RIGHT])
def test_right_keys(key):
    controls = Controls(scene=Scene.LEVEL)
    controls.key_press(key)
    assert controls.right is True
    controls.key_release(key)
    assert controls.right is False


@pytest.mark.parametrize("key", [Key.W, Key.UP, Key.SPACE])
def test_jump_only_in_level(key):
    menu = Controls(scene=Scene.PAUSE_MENU)
    menu.key_press(key)
    assert menu.should_jump is False
    level = Controls(scene=Scene.LEVEL)
    level.key_press(key)
    assert level.should_jump is True


@pytest.mark.parametrize("key", [Key.SHIFT_L, Key.SHIFT_R])
def test_dash_sets_frames(key):
    controls = Controls(scene=Scene.LEVEL, dash_frames=7)
    controls.key_press(key)
    assert controls.should_dash == 7


def test_escape_from_pause_then_jump_in_same_press_is_ignored():
    controls = Controls(scene=Scene.LEVEL)
    controls.key_press(Key.ESCAPE)
    controls.key_press(Key.SPACE)
    assert controls.should_jump is False


def test_plain_int_keysym_accepted():
    controls = Controls(scene=Scene.LEVEL)
    controls.key_press(int(Key.W))
    assert controls.should_jump is True


def test_mouse_down_replaces_flags():
    controls = Controls()
    controls.mouse_down(1, 10, 20)
    assert controls.mouse == Mouse(10, 20, True, False)
    controls.mouse_down(3, 11, 21)
    assert controls.mouse == Mouse(11, 21, False, True)


def test_mouse_up_toggles_matching_flag():
    controls = Controls()
    controls.mouse_down(1, 0, 0)
    controls.mouse_up(2, 5, 6)
    assert controls.mouse.left is True
    controls.mouse_up(1, 7, 8)
    assert controls.mouse == Mouse(7, 8, False, False)


def test_mouse_move_keeps_buttons():
    controls = Controls()
    controls.mouse_down(1, 0, 0)
    controls.mouse_move(42, 43)
    assert (controls.mouse.x, controls.mouse.y, controls.mouse.left) == (42, 43, True)