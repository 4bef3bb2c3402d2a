"""Framebuffer rendering utilities for debugging."""

from typing import Tuple

import numpy as np
from PIL import Image

from ..display import DisplayBuffer


class DisplayRenderer:
    """Renders the CHIP-8 framebuffer to images or text for debugging."""

    def __init__(self, scale: int = 8,
                 bg_color: Tuple[int, int, int] = (153, 102, 1),
                 fg_color: Tuple[int, int, int] = (255, 204, 1)):
        if scale < 1:
            raise ValueError("scale must be at least 1")
        self.scale = scale
        self.bg_color = bg_color
        self.fg_color = fg_color

    def render_display(self, display: DisplayBuffer) -> Image.Image:
        """Render the framebuffer to a scaled RGB PIL Image."""
        buffer = display.get_display_buffer().astype(bool)

        rgb = np.empty(buffer.shape + (3,), dtype=np.uint8)
        rgb[...] = self.bg_color
        rgb[buffer] = self.fg_color

        # Nearest-neighbour upscale keeps pixels square and crisp
        scaled = rgb.repeat(self.scale, axis=0).repeat(self.scale, axis=1)
        return Image.fromarray(scaled)

    def save_display(self, display: DisplayBuffer, filename: str) -> None:
        """Save framebuffer to image file."""
        img = self.render_display(display)
        img.save(filename)

    @staticmethod
    def render_text(display: DisplayBuffer, on: str = "#", off: str = ".") -> str:
        """Render the framebuffer as lines of text, one character per pixel."""
        buffer = display.get_display_buffer()
        return "\n".join(
            "".join(on if pixel else off for pixel in row) for row in buffer
        )
