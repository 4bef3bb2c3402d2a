"""64x32 monochrome framebuffer with XOR sprite drawing."""

from __future__ import annotations

import numpy as np

from .constants import DISPLAY_HEIGHT, DISPLAY_WIDTH, SPRITE_WIDTH

_COLUMN_OFFSETS = np.arange(SPRITE_WIDTH)


class DisplayBuffer:
    """Framebuffer addressed as ``buffer[y, x]``, one byte (0 or 1) per pixel."""

    def __init__(
        self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT
    ) -> None:
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width), dtype=np.uint8)
        self.dirty = True
        # Bumped by every mutation; unlike `dirty` the host never resets it.
        self.generation = 0

    def clear(self) -> None:
        """Turn every pixel off."""

        self.buffer.fill(0)
        self.dirty = True
        self.generation += 1

    def draw_sprite(self, x: int, y: int, rows: bytes, *, clip: bool = False) -> bool:
        """XOR an 8-pixel-wide sprite onto the screen.

        The origin always wraps (``x mod width``, ``y mod height``).  Pixels
        running past the right or bottom edge wrap around as well unless
        ``clip`` is set, in which case they are dropped.  Returns True when
        any lit pixel was turned off.
        """

        x0 = x % self.width
        y0 = y % self.height
        if not rows:
            return False

        bits = np.unpackbits(np.frombuffer(bytes(rows), dtype=np.uint8)).reshape(
            len(rows), SPRITE_WIDTH
        )
        ys = y0 + np.arange(len(rows))
        xs = x0 + _COLUMN_OFFSETS
        if clip:
            row_mask = ys < self.height
            col_mask = xs < self.width
            ys = ys[row_mask]
            xs = xs[col_mask]
            bits = bits[row_mask][:, col_mask]
        else:
            ys %= self.height
            xs %= self.width

        window = np.ix_(ys, xs)
        region = self.buffer[window]
        collision = bool(np.any(region & bits))
        self.buffer[window] = region ^ bits
        self.dirty = True
        self.generation += 1
        return collision

    def get_pixel(self, x: int, y: int) -> bool:
        if 0 <= x < self.width and 0 <= y < self.height:
            return bool(self.buffer[y, x])
        return False

    def get_display_buffer(self) -> np.ndarray:
        """Copy of the framebuffer for the host to render."""

        return self.buffer.copy()

    def load_buffer(self, pixels: np.ndarray) -> None:
        if pixels.shape != self.buffer.shape:
            raise ValueError(
                f"Expected framebuffer shape {self.buffer.shape}, got {pixels.shape}"
            )
        self.buffer[:, :] = pixels != 0
        self.dirty = True
        self.generation += 1

    def clear_dirty(self) -> None:
        self.dirty = False

    def lit_pixels(self) -> int:
        return int(self.buffer.sum())


__all__ = ["DisplayBuffer"]
