"""Escape-time iteration for the Mandelbrot map."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .defaults import ESCAPE_RADIUS_SQUARED

MAX_GRID_ITERATIONS = 2 ** 31 - 1


def escape_iterations(c_re, c_im, max_iterations: int, dtype=None) -> int:
    """Count the iterations before ``z <- z**2 + c`` leaves radius 2, starting at ``z = c``.

    Returns ``max_iterations`` for points that never escape. When ``dtype`` is
    given the arithmetic stays in that numpy precision.
    """

    if dtype is not None:
        scalar = np.dtype(dtype).type
        c_re, c_im = scalar(c_re), scalar(c_im)
        two, radius = scalar(2.0), scalar(ESCAPE_RADIUS_SQUARED)
    else:
        two, radius = 2.0, ESCAPE_RADIUS_SQUARED

    z_re, z_im = c_re, c_im
    for i in range(max_iterations):
        re_sq = z_re * z_re
        im_sq = z_im * z_im
        if re_sq + im_sq > radius:
            return i
        z_im = two * z_re * z_im + c_im
        z_re = re_sq - im_sq + c_re
    return max_iterations


@tf.function
def _escape_step(
    z_re: tf.Tensor,
    z_im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that has not escaped yet by one iteration."""

    re_sq = z_re * z_re
    im_sq = z_im * z_im
    radius = tf.cast(ESCAPE_RADIUS_SQUARED, z_re.dtype)
    two = tf.cast(2.0, z_re.dtype)
    active = tf.logical_and(active, tf.logical_not(re_sq + im_sq > radius))

    new_im = two * z_re * z_im + c_im
    new_re = re_sq - im_sq + c_re
    z_re = tf.where(active, new_re, z_re)
    z_im = tf.where(active, new_im, z_im)
    counts = counts + tf.cast(active, tf.int32)
    return z_re, z_im, counts, active


@tf.function
def _escape_run(c_re: tf.Tensor, c_im: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    counts = tf.zeros(tf.shape(c_re), tf.int32)
    active = tf.ones(tf.shape(c_re), tf.bool)

    def cond(i, z_re, z_im, counts, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, z_re, z_im, counts, active):
        z_re, z_im, counts, active = _escape_step(z_re, z_im, c_re, c_im, counts, active)
        return i + 1, z_re, z_im, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, c_re, c_im, counts, active))
    return counts


def escape_iterations_grid(c_re, c_im, max_iterations: int, *, device: Optional[str] = None) -> np.ndarray:
    """Vectorized ``escape_iterations`` over whole arrays of points.

    The arrays keep their float32/float64 precision on the device; anything
    else is promoted to float64.
    """

    if not 0 <= max_iterations <= MAX_GRID_ITERATIONS:
        raise ValueError(f"max_iterations must be in [0, {MAX_GRID_ITERATIONS}] for the grid evaluator")

    c_re = np.asarray(c_re)
    if c_re.dtype not in (np.float32, np.float64):
        c_re = c_re.astype(np.float64)
    c_im = np.asarray(c_im, dtype=c_re.dtype)
    if c_re.shape != c_im.shape:
        raise ValueError(f"Shape mismatch between real {c_re.shape} and imaginary {c_im.shape} parts")

    with tf.device(device if device is not None else "/CPU:0"):
        c_re_tf = tf.convert_to_tensor(c_re)
        c_im_tf = tf.convert_to_tensor(c_im)
        counts = _escape_run(c_re_tf, c_im_tf, tf.constant(max_iterations, dtype=tf.int32))

    return counts.numpy()
