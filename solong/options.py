"""Tunable game settings and the presets the options menu cycles through."""

from __future__ import annotations

from dataclasses import dataclass

_FPS_CYCLE = {60: 120, 120: 30}
_GRAVITY_CYCLE = {0.2: 0.4, 0.4: 0.1}
_GRAVITY_PRESETS = {0.2: "normal", 0.4: "high", 0.1: "low"}


@dataclass
class Options:
    """Physics, timing and map-size settings of a game session."""

    velocity: float = 3.0
    gravity: float = 0.2
    friction: float = 0.9
    jump_force: float = 5.8
    dash_multiplier: float = 3.5
    dash_frames: int = 16
    collision_offset: float = 0.0
    fps: int = 60
    map_width: int = 64
    map_height: int = 64

    def cycle_fps(self) -> int:
        """Step the frame rate 60 -> 120 -> 30 -> 60; anything else resets to 60."""
        self.fps = _FPS_CYCLE.get(self.fps, 60)
        return self.fps

    def cycle_gravity(self) -> float:
        """Step gravity normal -> high -> low -> normal; anything else resets to normal."""
        self.gravity = _GRAVITY_CYCLE.get(self.gravity, 0.2)
        return self.gravity

    def gravity_preset(self) -> str:
        """Name of the current gravity preset, or "(error)" if it matches none."""
        return _GRAVITY_PRESETS.get(self.gravity, "(error)")