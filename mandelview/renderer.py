"""Turn render parameters into framebuffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import PIL.Image

from .evaluator import escape_iterations, escape_iterations_grid
from .palette import color, colorize
from .params import RenderParameters


@dataclass(frozen=True)
class Frame:
    """Container for one rendered frame."""

    iterations: np.ndarray
    pixels: np.ndarray
    params: RenderParameters

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.fromarray(self.pixels)


def _check_renderable(params: RenderParameters) -> tuple[int, int]:
    width, height = params.resolution
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot render a {width}x{height} frame")
    return width, height


def world_grid(params: RenderParameters) -> tuple[np.ndarray, np.ndarray]:
    """World coordinates of every pixel, shaped ``(height, width)``."""

    width, height = _check_renderable(params)
    x = np.arange(width, dtype=params.dtype)
    y = np.arange(height, dtype=params.dtype)
    X, Y = np.meshgrid(x, y)
    return params.pixel_to_world(X, Y)


def render_reference(params: RenderParameters) -> Frame:
    """Scan the framebuffer one pixel at a time in row-major order."""

    width, height = _check_renderable(params)
    max_iterations = params.max_iterations
    buffer = bytearray(4 * width * height)
    iterations = np.zeros((height, width), dtype=np.int64)

    offset = 0
    for y in range(height):
        for x in range(width):
            c_re, c_im = params.pixel_to_world(x, y)
            n = escape_iterations(c_re, c_im, max_iterations, dtype=params.dtype)
            iterations[y, x] = n
            buffer[offset:offset + 4] = bytes(color(n, max_iterations))
            offset += 4

    pixels = np.frombuffer(bytes(buffer), dtype=np.uint8).reshape(height, width, 4)
    return Frame(iterations=iterations, pixels=pixels, params=params)


def render_frame(params: RenderParameters, *, device: Optional[str] = None) -> Frame:
    """Render a whole frame with the vectorized evaluator."""

    c_re, c_im = world_grid(params)
    iterations = escape_iterations_grid(c_re, c_im, params.max_iterations, device=device)
    return Frame(
        iterations=iterations,
        pixels=colorize(iterations, params.max_iterations),
        params=params,
    )
