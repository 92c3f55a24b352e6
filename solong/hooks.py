"""Scenes and the keyboard and mouse state the game reacts to."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class Scene(Enum):
    """Screens the game can show."""

    MAIN_MENU = 0
    LEVEL = 1
    PAUSE_MENU = 2
    OPTIONS_MENU = 3
    MAIN_OPTIONS_MENU = 4
    CREDITS = 5


class Key(IntEnum):
    """Keys the game listens to, by X11 keysym value."""

    SPACE = 0x0020
    A = 0x0061
    D = 0x0064
    W = 0x0077
    ESCAPE = 0xFF1B
    LEFT = 0xFF51
    UP = 0xFF52
    RIGHT = 0xFF53
    SHIFT_L = 0xFFE1
    SHIFT_R = 0xFFE2


_LEFT_KEYS = (Key.A, Key.LEFT)
_RIGHT_KEYS = (Key.D, Key.RIGHT)
_JUMP_KEYS = (Key.W, Key.UP, Key.SPACE)
_DASH_KEYS = (Key.SHIFT_L, Key.SHIFT_R)

_ESCAPE_TARGETS = {
    Scene.PAUSE_MENU: Scene.LEVEL,
    Scene.LEVEL: Scene.PAUSE_MENU,
    Scene.OPTIONS_MENU: Scene.PAUSE_MENU,
}

BUTTON_LEFT = 1
BUTTON_RIGHT = 3


@dataclass
class Mouse:
    """Pointer position and the state of its two main buttons."""

    x: int = 0
    y: int = 0
    left: bool = False
    right: bool = False


@dataclass
class Controls:
    """Input state plus the pending jump and dash requests."""

    scene: Scene = Scene.MAIN_MENU
    dash_frames: int = 16
    left: bool = False
    right: bool = False
    should_jump: bool = False
    should_dash: int = 0
    mouse: Mouse = field(default_factory=Mouse)

    def key_press(self, key: int) -> None:
        """React to a key being pressed."""
        if key == Key.ESCAPE:
            self.scene = _ESCAPE_TARGETS.get(self.scene, self.scene)
        if key in _LEFT_KEYS:
            self.left = True
        if key in _RIGHT_KEYS:
            self.right = True
        if self.scene is not Scene.LEVEL:
            return
        if key in _JUMP_KEYS:
            self.should_jump = True
        if key in _DASH_KEYS:
            self.should_dash = self.dash_frames

    def key_release(self, key: int) -> None:
        """React to a key being released."""
        if key in _LEFT_KEYS:
            self.left = False
        if key in _RIGHT_KEYS:
            self.right = False

    def mouse_down(self, button: int, x: int, y: int) -> None:
        """Record a button press; a press replaces both button flags."""
        self.mouse.x = x
        self.mouse.y = y
        self.mouse.left = button == BUTTON_LEFT
        self.mouse.right = button == BUTTON_RIGHT

    def mouse_up(self, button: int, x: int, y: int) -> None:
        """Record a button release by toggling the matching flag."""
        self.mouse.x = x
        self.mouse.y = y
        self.mouse.left ^= button == BUTTON_LEFT
        self.mouse.right ^= button == BUTTON_RIGHT

    def mouse_move(self, x: int, y: int) -> None:
        """Record the pointer position."""
        self.mouse.x = x
        self.mouse.y = y