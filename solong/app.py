"""The game window: scenes, menus, rendering and the main loop."""

from __future__ import annotations

import logging
import re
import sys
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import cached_property, partial
from pathlib import Path

import numpy as np

from solong.clock import FrameClock
from solong.hitbox import TILE_SIZE, outline_segments, tile_hitbox
from solong.hooks import Controls, Key, Mouse, Scene
from solong.options import Options
from solong.physics import Level
from solong.pixels import (
    GLYPH_SIZE,
    TRANSPARENT,
    Frame,
    gaussian_blur,
    gradient_background,
    mirror_image,
    strip_alpha,
)
from solong.tiles import Tex, texture_path
from solong.world import EXIT, SNACK, WALL, World

log = logging.getLogger(__name__)

WINDOW_W = 1200
WINDOW_H = 800
PARALLAX_CONSTANT = 0.8
DEBUG_COLOR = 0xFF0000
VERSION = "v0.0.5"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_SEED_PATTERN = re.compile(r"\s*[+-]?\d+")
_WALK_EPSILON = 0.1
_ANIMATION_PERIOD = 6

_TEXT_COLOR = 0x80FFFFFF
_BUTTON_COLOR = 0xFFFFFF
_BUTTON_HOVER = 0x80FF00
_LINK_COLOR = 0xCCCCCC
_LINK_HOVER = 0x0080FF
_HEADING_COLOR = 0xFFFF00

# Credits: heading and its y position, then each entry and its y position.
_CREDITS = (
    ("Developers", 210, (("the so long team", 260),)),
    ("Fonts", 360, (("Daydream", 410),)),
    ("Assets", 510, (("Mossy Cavern", 560), ("Free Pixel foods", 610))),
)


def _centered_x(text: str) -> int:
    return WINDOW_W // 2 - GLYPH_SIZE * len(text) // 2


def parse_seed(text: str) -> int:
    """Parse a map seed given on the command line as a 32-bit signed integer."""
    if not _SEED_PATTERN.fullmatch(text):
        raise ValueError(f"invalid seed: {text!r}")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"seed out of range: {text!r}")
    return value


@dataclass
class Animator:
    """Chooses the player sprite for each frame from the idle, walk and dash cycles."""

    walk: Tex = Tex.PLAYER_WALK_0
    idle: Tex = Tex.PLAYER_IDLE_0
    dash: Tex = Tex.PLAYER_DASH_0

    def next_frame(self, dashing: bool, vx: float, frame_count: int) -> Tex:
        """Advance the active cycle and return the sprite to draw."""
        advance = frame_count % _ANIMATION_PERIOD == 0
        if dashing:
            self.idle = Tex.PLAYER_IDLE_0
            self.walk = Tex.PLAYER_WALK_0
            self.dash = Tex.PLAYER_DASH_0 if self.dash == Tex.PLAYER_DASH_15 else Tex(self.dash + 1)
            return self.dash
        if vx > _WALK_EPSILON or vx < -_WALK_EPSILON:
            self.idle = Tex.PLAYER_IDLE_0
            self.dash = Tex.PLAYER_DASH_0
            if advance:
                self.walk = Tex.PLAYER_WALK_0 if self.walk == Tex.PLAYER_WALK_19 else Tex(self.walk + 1)
            return self.walk
        self.walk = Tex.PLAYER_WALK_0
        self.dash = Tex.PLAYER_DASH_0
        if advance:
            self.idle = Tex.PLAYER_IDLE_0 if self.idle == Tex.PLAYER_IDLE_19 else Tex(self.idle + 1)
        return self.idle


@dataclass
class Button:
    """A clickable line of text; fires when the left button is released over it.

    An unbounded button (used for credit links) reacts anywhere to the right
    of its left edge, within its row.
    """

    text: str
    x: int
    y: int
    on_click: Callable[[], None] | None = None
    color: int = _BUTTON_COLOR
    hover_color: int = _BUTTON_HOVER
    bounded: bool = True
    hovered: bool = field(default=False, init=False)
    _clicked: bool = field(default=False, init=False, repr=False)

    def _contains(self, mx: int, my: int) -> bool:
        inside_x = mx > self.x and (not self.bounded or mx <= self.x + GLYPH_SIZE * len(self.text))
        return inside_x and self.y <= my <= self.y + GLYPH_SIZE

    @property
    def current_color(self) -> int:
        """Colour the text is drawn in right now."""
        return self.hover_color if self.hovered else self.color

    def update(self, mouse: Mouse) -> bool:
        """Track the pointer; return True if this update completed a click."""
        self.hovered = self._contains(mouse.x, mouse.y)
        if self.hovered and mouse.left:
            self._clicked = True
        if self.hovered and self._clicked and not mouse.left:
            self._clicked = False
            if self.on_click is not None:
                self.on_click()
            return True
        return False


def _surface_pixels(surface) -> np.ndarray:
    import pygame

    rgb = pygame.surfarray.array3d(surface).astype(np.uint32)
    if surface.get_colorkey() is not None:
        alpha = pygame.surfarray.array_colorkey(surface)
    else:
        alpha = pygame.surfarray.array_alpha(surface)
    alpha = alpha.astype(np.uint32)
    color = (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]
    pixels = np.where(alpha == 0, np.uint32(TRANSPARENT), color | ((255 - alpha) << 24))
    return np.ascontiguousarray(pixels.T, dtype=np.uint32)


def _pygame_keysyms() -> dict[int, Key]:
    import pygame

    return {
        pygame.K_SPACE: Key.SPACE,
        pygame.K_a: Key.A,
        pygame.K_d: Key.D,
        pygame.K_w: Key.W,
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_UP: Key.UP,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_LSHIFT: Key.SHIFT_L,
        pygame.K_RSHIFT: Key.SHIFT_R,
    }


class Game:
    """One game session: its level, menus, textures and frame buffers."""

    def __init__(self, seed: int | None = None, asset_dir: str | Path = ".") -> None:
        self.options = Options()
        self.controls = Controls(dash_frames=self.options.dash_frames)
        self.world = World(self.options.map_width, self.options.map_height)
        self.level = Level(self.world, self.options, self.controls)
        self.seed = self.level.new_map(int(time.time()) if seed is None else seed)
        self.asset_dir = Path(asset_dir)
        self.textures: dict[Tex, np.ndarray] = {}
        self.frame = Frame(WINDOW_W, WINDOW_H)
        self._backdrop = Frame(WINDOW_W, WINDOW_H)
        self._blur_rendered = False
        self.animator = Animator()
        self.clock = FrameClock(self.options.fps)
        self.debug_mode = False
        self.running = False
        self.frame_count = 0
        self.camera_x = 0
        self.camera_y = 0
        self._build_menus()

    # -- menus ---------------------------------------------------------

    def _build_menus(self) -> None:
        go = self._go
        self._main_buttons = [
            Button("continue", 100, 200, go(Scene.LEVEL)),
            Button("new game", 100, 250, self._new_game),
            Button("options", 100, 300, go(Scene.MAIN_OPTIONS_MENU)),
            Button("credits", 100, 350, go(Scene.CREDITS)),
            Button("quit", 100, 450, self._quit),
        ]
        self._pause_buttons = [
            Button("resume", 100, 200, go(Scene.LEVEL)),
            Button("options", 100, 250, go(Scene.OPTIONS_MENU)),
            Button("main menu", 100, 350, go(Scene.MAIN_MENU)),
        ]
        self._settings_buttons = [
            Button("", 100, 200, self._cycle_fps),
            Button("", 100, 250, self._cycle_gravity),
            Button("", 100, 300, self._toggle_debug),
        ]
        self._main_options_return = Button("return", 100, 400, go(Scene.MAIN_MENU))
        self._pause_options_return = Button("return", 100, 400, go(Scene.PAUSE_MENU))
        self._credit_links = [
            Button(label, _centered_x(label), y, None, _LINK_COLOR, _LINK_HOVER, bounded=False)
            for _, _, entries in _CREDITS
            for label, y in entries
        ]
        self._credits_return = Button("return", 510, 710, go(Scene.MAIN_MENU))

    def _go(self, scene: Scene) -> Callable[[], None]:
        return partial(setattr, self.controls, "scene", scene)

    def _new_game(self) -> None:
        self.level.new_map(int(time.time()))
        self.controls.scene = Scene.LEVEL

    def _quit(self) -> None:
        self.running = False

    def _cycle_fps(self) -> None:
        self.clock.fps = self.options.cycle_fps()

    def _cycle_gravity(self) -> None:
        self.options.cycle_gravity()

    def _toggle_debug(self) -> None:
        self.debug_mode = not self.debug_mode

    def _run_buttons(self, buttons: Iterable[Button]) -> None:
        mouse = self.controls.mouse
        for button in buttons:
            text = button.text
            button.hovered = button._contains(mouse.x, mouse.y)
            self._text(button.x, button.y, text, button.current_color)
            button.update(mouse)

    # -- drawing helpers -----------------------------------------------

    def _text(self, x: int, y: int, text: str, color: int) -> None:
        self.frame.draw_text(self.textures[Tex.FONT], x, y, text, color)

    def _translate(self, x: float, y: float) -> tuple[float, float]:
        return x - self.camera_x, y - self.camera_y

    def _update_camera(self) -> None:
        p = self.level.player
        self.camera_x = int(p.x - 0.5 * (WINDOW_W - p.w))
        self.camera_y = int(p.y - 0.5 * (WINDOW_H - p.h))

    def _visible_tiles(self) -> tuple[range, range]:
        x0 = int(self.camera_x / TILE_SIZE) - 1
        x1 = int((self.camera_x + WINDOW_W) / TILE_SIZE) + 1
        y0 = int(self.camera_y / TILE_SIZE) - 1
        y1 = int((self.camera_y + WINDOW_H) / TILE_SIZE) + 1
        return range(x0, x1), range(y0, y1)

    @cached_property
    def _parallax(self) -> np.ndarray:
        width = int(self.world.width * TILE_SIZE * PARALLAX_CONSTANT + PARALLAX_CONSTANT * WINDOW_W * 0.25)
        height = int(self.world.height * TILE_SIZE * PARALLAX_CONSTANT + PARALLAX_CONSTANT * WINDOW_H * 0.25)
        log.debug("Creating %ix%i parallax", width, height)
        return gradient_background(width, height)

    def _draw_scene(self) -> None:
        self.frame.blit(
            self._parallax,
            int(-self.camera_x * PARALLAX_CONSTANT),
            int(-self.camera_y * PARALLAX_CONSTANT),
        )
        self._render_player()
        self._render_map()

    def _render_player(self) -> None:
        p = self.level.player
        tex = self.animator.next_frame(bool(self.controls.should_dash), p.vx, self.frame_count)
        image = self.textures[tex]
        if p.vx < 0:
            image = mirror_image(image)
        x, y = self._translate(p.x - 0.5 * (TILE_SIZE - p.w), p.y - 0.5 * (TILE_SIZE - p.h))
        self.frame.blit(image, int(x), int(y))

    def _render_map(self) -> None:
        world = self.world
        columns, rows = self._visible_tiles()
        for ty in rows:
            for tx in columns:
                sx, sy = self._translate(tx * TILE_SIZE, ty * TILE_SIZE)
                if world.is_out_of_bounds(tx, ty):
                    self.frame.blit(self.textures[Tex.EMPTY], int(sx), int(sy))
                    continue
                cell = world.grid[ty][tx]
                if cell == EXIT:
                    self.frame.blit(self.textures[Tex.EXIT], int(sx), int(sy))
                if cell == SNACK:
                    snack = Tex(Tex.SNACK_0 + ((tx + ty) & 7))
                    self.frame.blit(self.textures[snack], int(sx + 16), int(sy + 32))
                if cell == WALL:
                    self.frame.blit(self.textures[world.texture_at(tx, ty)], int(sx), int(sy))

    def _outline(self, left: float, top: float, right: float, bottom: float) -> None:
        x0, y0 = self._translate(left, top)
        x1, y1 = self._translate(right, bottom)
        for p0, p1 in outline_segments(x0, y0, x1, y1):
            self.frame.draw_line(p0, p1, DEBUG_COLOR)

    def _render_hitboxes(self) -> None:
        world = self.world
        columns, rows = self._visible_tiles()
        for ty in rows:
            for tx in columns:
                if world.is_out_of_bounds(tx, ty):
                    tex = Tex.EMPTY
                else:
                    cell = world.grid[ty][tx]
                    if cell == SNACK:
                        tex = Tex.SNACK_0
                    elif cell == WALL:
                        tex = world.texture_at(tx, ty)
                    elif cell == EXIT:
                        tex = Tex.EXIT
                    else:
                        continue
                box = tile_hitbox(tex, tx, ty)
                self._outline(box.left, box.top, box.right, box.bottom)
        p = self.level.player
        self._outline(p.x, p.y, p.x + p.w, p.y + p.h)

    def _render_blur(self) -> None:
        if not self._blur_rendered:
            self._blur_rendered = True
            self._backdrop.blit(gaussian_blur(self.frame.pixels), 0, 0)
            self.frame.blit(gaussian_blur(self._backdrop.pixels), 0, 0)
            self._backdrop.blit(gaussian_blur(self.frame.pixels), 0, 0)
        self.frame.blit(strip_alpha(self._backdrop.pixels), 0, 0)

    def _render_title(self) -> None:
        self._text(30, 30, "so long", 0x8080CC)
        self._text(330, 30, VERSION, 0xC0FFFFFF)

    # -- scenes --------------------------------------------------------

    def _render_level(self) -> None:
        self._blur_rendered = False
        moved = self.level.update()
        self._update_camera()
        self._draw_scene()
        world = self.world
        self._text(10, 10, f"{world.snacks_eaten}/{world.snack_count}"[:11], _TEXT_COLOR)
        moves = f"{world.move_count - int(moved)} moves"[:15]
        self._text(1190 - GLYPH_SIZE * len(moves), 10, moves, _TEXT_COLOR)
        if self.debug_mode:
            self._render_hitboxes()

    def _render_main_menu(self) -> None:
        self._update_camera()
        self._draw_scene()
        if self.debug_mode:
            self._render_hitboxes()
        self._render_blur()
        self._render_title()
        self._run_buttons(self._main_buttons)

    def _render_settings(self, return_button: Button) -> None:
        self._render_blur()
        fps, gravity, debug = self._settings_buttons
        fps.text = f"fps        - {self.options.fps}"[:23]
        gravity.text = f"gravity    - {self.options.gravity_preset()}"[:23]
        debug.text = f"hitboxes   - {'on' if self.debug_mode else 'off'}"[:23]
        self._render_title()
        self._run_buttons([*self._settings_buttons, return_button])

    def _render_main_options(self) -> None:
        self._render_settings(self._main_options_return)

    def _render_pause_options(self) -> None:
        self._render_settings(self._pause_options_return)

    def _render_pause_menu(self) -> None:
        self._render_blur()
        self._render_title()
        self._run_buttons(self._pause_buttons)

    def _render_credits(self) -> None:
        self._render_blur()
        self._text(_centered_x("so long"), 60, "so long", 0x8040FF)
        self._text(_centered_x(VERSION), 110, VERSION, 0xCCCCCC)
        for heading, y, _ in _CREDITS:
            self._text(_centered_x(heading), y, heading, _HEADING_COLOR)
        self._run_buttons([*self._credit_links, self._credits_return])

    def render(self) -> Frame:
        """Draw one frame of the current scene, advancing the level if it is running."""
        self.frame_count += 1
        self.clock.note_frame()
        handlers = {
            Scene.MAIN_MENU: self._render_main_menu,
            Scene.PAUSE_MENU: self._render_pause_menu,
            Scene.OPTIONS_MENU: self._render_pause_options,
            Scene.CREDITS: self._render_credits,
            Scene.MAIN_OPTIONS_MENU: self._render_main_options,
        }
        handlers.get(self.controls.scene, self._render_level)()
        return self.frame

    # -- window --------------------------------------------------------

    def _load_textures(self) -> None:
        import pygame

        log.debug("Loading %i textures", len(Tex))
        for tex in Tex:
            path = self.asset_dir / texture_path(tex)
            try:
                surface = pygame.image.load(str(path))
            except (pygame.error, OSError) as exc:
                raise RuntimeError(f"Failed to load texture '{path}'") from exc
            self.textures[tex] = _surface_pixels(surface)

    def _present(self, screen) -> None:
        import pygame

        p = self.frame.pixels
        rgb = np.stack(((p >> 16) & 0xFF, (p >> 8) & 0xFF, p & 0xFF), axis=-1).astype(np.uint8)
        pygame.surfarray.blit_array(screen, rgb.swapaxes(0, 1))
        pygame.display.flip()

    def _dispatch(self, event, keysyms: dict[int, Key]) -> None:
        import pygame

        ctl = self.controls
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key in keysyms:
            ctl.key_press(keysyms[event.key])
        elif event.type == pygame.KEYUP and event.key in keysyms:
            ctl.key_release(keysyms[event.key])
        elif event.type == pygame.MOUSEBUTTONDOWN:
            ctl.mouse_down(event.button, *event.pos)
        elif event.type == pygame.MOUSEBUTTONUP:
            ctl.mouse_up(event.button, *event.pos)
        elif event.type == pygame.MOUSEMOTION:
            ctl.mouse_move(*event.pos)

    def run(self) -> None:
        """Open the window and play until it is closed or quit from the menu."""
        import pygame

        pygame.init()
        try:
            self._load_textures()
            log.debug("Loaded textures")
            screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
            pygame.display.set_caption("So Long")
            keysyms = _pygame_keysyms()
            self.running = True
            with self.clock:
                while self.running:
                    for event in pygame.event.get():
                        self._dispatch(event, keysyms)
                    if self.clock.take_render_tick():
                        self.render()
                        self._present(screen)
                    else:
                        pygame.time.wait(1)
        finally:
            self.running = False
            pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Start the game; an optional single argument is the map seed."""
    args = sys.argv[1:] if argv is None else list(argv)
    seed = int(time.time())
    if len(args) == 1:
        try:
            seed = parse_seed(args[0])
        except ValueError:
            print("[ERR] Invalid seed", file=sys.stderr)
            return 1
    logging.basicConfig(level=logging.INFO, format="[%(levelname).3s] %(message)s")
    log.info("Starting game")
    game = Game(seed)
    try:
        game.run()
    except RuntimeError as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return 1
    return 0