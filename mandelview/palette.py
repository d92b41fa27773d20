"""Map iteration counts to RGBA colors."""

from __future__ import annotations

import numpy as np

INSIDE_COLOR = (0, 0, 0, 255)


def color(iterations: int, max_iterations: int) -> tuple[int, int, int, int]:
    if iterations >= max_iterations:
        return INSIDE_COLOR

    t = iterations / max_iterations
    u = 1.0 - t
    r = int(9.0 * u * (t * t * t) * 255.0)
    g = int(15.0 * (u * u) * (t * t) * 255.0)
    b = int(8.5 * (u * u * u) * t * 255.0)
    return r, g, b, 255


def colorize(iterations: np.ndarray, max_iterations: int) -> np.ndarray:
    """Vectorized ``color`` returning an ``(..., 4)`` uint8 array."""

    iterations = np.asarray(iterations)
    inside = iterations >= max_iterations
    t = iterations.astype(np.float64) / float(max(max_iterations, 1))
    u = 1.0 - t

    rgba = np.empty(iterations.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = (9.0 * u * (t * t * t) * 255.0).astype(np.uint8)
    rgba[..., 1] = (15.0 * (u * u) * (t * t) * 255.0).astype(np.uint8)
    rgba[..., 2] = (8.5 * (u * u * u) * t * 255.0).astype(np.uint8)
    rgba[..., 3] = 255
    rgba[inside] = INSIDE_COLOR
    return rgba
