"""Pixel buffers: alpha blending, image transforms, lines and bitmap text.

Pixels are 32-bit 0xAARRGGBB values where alpha 0 is opaque and 0xff is
fully transparent.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from solong.hitbox import line_points

GLYPH_SIZE = 30
TRANSPARENT = 0xFF000000

_SPRITE_SIZE = 64
_SCALED_SIZE = 48
_KERNEL = np.array(
    [
        [1, 4, 6, 4, 1],
        [4, 16, 20, 16, 4],
        [6, 20, 36, 20, 6],
        [4, 16, 20, 16, 4],
        [1, 4, 6, 4, 1],
    ],
    dtype=np.int64,
)


def blend_pixel(fg: int, bg: int) -> int:
    """Blend one foreground pixel over one background pixel."""
    fg &= 0xFFFFFFFF
    bg &= 0xFFFFFFFF
    inv_a = ((fg >> 24) & 0xFF) + 1
    if inv_a == 255:
        return fg
    a = 256 - inv_a
    r = (((fg >> 16) & 0xFF) * a + ((bg >> 16) & 0xFF) * inv_a) >> 8
    g = (((fg >> 8) & 0xFF) * a + ((bg >> 8) & 0xFF) * inv_a) >> 8
    b = ((fg & 0xFF) * a + (bg & 0xFF) * inv_a) >> 8
    return (a << 24) | (r << 16) | (g << 8) | b


def blend_arrays(fg, bg) -> np.ndarray:
    """Element-wise ``blend_pixel`` over broadcastable pixel arrays."""
    f = np.asarray(fg).astype(np.int64) & 0xFFFFFFFF
    b = np.asarray(bg).astype(np.int64) & 0xFFFFFFFF
    inv_a = ((f >> 24) & 0xFF) + 1
    a = 256 - inv_a
    out = a << 24
    for shift in (16, 8, 0):
        channel = (((f >> shift) & 0xFF) * a + ((b >> shift) & 0xFF) * inv_a) >> 8
        out = out | (channel << shift)
    return np.where(inv_a == 255, f, out).astype(np.uint32)


def mirror_image(image) -> np.ndarray:
    """Horizontally mirrored sprite, sampled the way the facing-left player is drawn.

    Column x >= 1 takes column ``w - x``; column 0 takes the first pixel of
    the next row, and transparent on the last row.
    """
    img = np.asarray(image, dtype=np.uint32)
    out = np.full_like(img, TRANSPARENT)
    out[:, 1:] = img[:, :0:-1]
    out[:-1, 0] = img[1:, 0]
    return out


def scale_down(image) -> np.ndarray:
    """Bilinear reduction of a 64x64 sprite to 48x48."""
    img = np.asarray(image, dtype=np.uint32)
    if img.shape != (_SPRITE_SIZE, _SPRITE_SIZE):
        raise ValueError(f"expected a {_SPRITE_SIZE}x{_SPRITE_SIZE} image, got {img.shape}")
    src = np.arange(_SCALED_SIZE, dtype=np.float32) * np.float32(_SPRITE_SIZE / _SCALED_SIZE)
    lo = src.astype(np.int64)
    hi = np.minimum(lo + 1, _SPRITE_SIZE - 1)
    frac = src - lo.astype(np.float32)
    dx, dy = frac[None, :], frac[:, None]
    p00 = img[lo[:, None], lo[None, :]]
    p01 = img[lo[:, None], hi[None, :]]
    p10 = img[hi[:, None], lo[None, :]]
    p11 = img[hi[:, None], hi[None, :]]
    out = np.zeros((_SCALED_SIZE, _SCALED_SIZE), dtype=np.uint32)
    for shift in (24, 16, 8, 0):
        c00, c01, c10, c11 = (((p >> shift) & 0xFF).astype(np.float32) for p in (p00, p01, p10, p11))
        value = (1 - dy) * ((1 - dx) * c00 + dx * c01) + dy * ((1 - dx) * c10 + dx * c11)
        out |= ((value + np.float32(0.5)).astype(np.uint32) & 0xFF) << np.uint32(shift)
    return out


def gaussian_blur(image) -> np.ndarray:
    """5x5 Gaussian blur with clamped edges; the result is fully opaque."""
    img = np.asarray(image, dtype=np.uint32)
    h, w = img.shape
    padded = np.pad(img, 2, mode="edge").astype(np.int64)
    out = np.zeros((h, w), dtype=np.int64)
    for shift in (16, 8, 0):
        channel = (padded >> shift) & 0xFF
        total = sum(
            weight * channel[dy:dy + h, dx:dx + w]
            for (dy, dx), weight in np.ndenumerate(_KERNEL)
        )
        out |= (total >> 8) << shift
    return out.astype(np.uint32)


def strip_alpha(image) -> np.ndarray:
    """Copy of the image with every pixel made opaque."""
    return np.asarray(image, dtype=np.uint32) & np.uint32(0xFFFFFF)


def gradient_background(width: int, height: int) -> np.ndarray:
    """Background image fading red left to right and green top to bottom."""
    red = (255.0 * np.arange(width) / width).astype(np.uint32)
    green = (255.0 * np.arange(height) / height).astype(np.uint32)
    return ((red[None, :] << 16) | (green[:, None] << 8) | np.uint32(128)).astype(np.uint32)


class Frame:
    """A window-sized pixel buffer that images, lines and text are drawn into."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"frame size must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint32)

    def _clip(self, x: int, y: int, w: int, h: int):
        x0, x1 = max(0, -x), min(w, self.width - x)
        y0, y1 = max(0, -y), min(h, self.height - y)
        if x0 >= x1 or y0 >= y1:
            return None
        src = (slice(y0, y1), slice(x0, x1))
        dst = (slice(y + y0, y + y1), slice(x + x0, x + x1))
        return src, dst

    def blit(self, image, x: float, y: float) -> None:
        """Blend ``image`` onto the frame with its top-left corner at (x, y)."""
        img = np.asarray(image, dtype=np.uint32)
        clip = self._clip(int(x), int(y), img.shape[1], img.shape[0])
        if clip is None:
            return
        src, dst = clip
        self.pixels[dst] = blend_arrays(img[src], self.pixels[dst])

    def draw_line(self, p0: Sequence[float], p1: Sequence[float], color: int) -> None:
        """Draw a line from p0 towards p1, end point excluded, clipped to the frame."""
        value = np.uint32(color & 0xFFFFFFFF)
        for px, py in line_points((p0[0], p0[1]), (p1[0], p1[1])):
            if 0 <= px < self.width and 0 <= py < self.height:
                self.pixels[py, px] = value

    def draw_glyph(self, font, x: int, y: int, char: str, color: int) -> None:
        """Draw one character from the font sheet; white sheet pixels take ``color``."""
        sheet = np.asarray(font, dtype=np.uint32)
        code = ord(char)
        xo = (code & 0xF) * GLYPH_SIZE
        yo = ((code >> 4) - 2) * GLYPH_SIZE
        if yo < 0 or yo + GLYPH_SIZE > sheet.shape[0] or xo + GLYPH_SIZE > sheet.shape[1]:
            raise ValueError(f"character {char!r} is not in the font sheet")
        glyph = sheet[yo:yo + GLYPH_SIZE, xo:xo + GLYPH_SIZE]
        clip = self._clip(int(x), int(y), GLYPH_SIZE, GLYPH_SIZE)
        if clip is None:
            return
        src, dst = clip
        mask = glyph[src] == 0xFFFFFF
        target = self.pixels[dst]
        blended = blend_arrays(color & 0xFFFFFFFF, target)
        target[mask] = blended[mask]

    def draw_text(self, font, x: int, y: int, text: str, color: int) -> None:
        """Draw ``text`` left to right, one glyph width per character."""
        for offset, char in enumerate(text):
            self.draw_glyph(font, x + GLYPH_SIZE * offset, y, char, color)