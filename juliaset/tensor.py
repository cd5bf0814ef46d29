"""Batched escape-time evaluation of a whole frame with TensorFlow."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .color import ColorPolicy
from .escape import EscapeConfig
from .plane import Bound, Complex, compute_mapping


@tf.function
def _julia_step(
    re: tf.Tensor,
    im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    ns: tf.Tensor,
    active: tf.Tensor,
    radius_squared: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Test then iterate every point that has not escaped yet."""

    escaped = tf.logical_and(active, re * re + im * im > radius_squared)
    active = tf.logical_and(active, tf.logical_not(escaped))
    # Same operation order as Complex.square() + c, so results are bit-identical.
    re_new = (re * re) - (im * im) + c_re
    im_new = 2.0 * re * im + c_im
    re = tf.where(active, re_new, re)
    im = tf.where(active, im_new, im)
    ns = ns + tf.cast(active, tf.int32)
    return re, im, ns, active


@tf.function
def _julia_run(
    re: tf.Tensor,
    im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    radius_squared: tf.Tensor,
    limit: tf.Tensor,
) -> tf.Tensor:
    """Return completed iterations per point; ``limit`` marks a convergent point."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(re, tf.int32)
    active = tf.ones_like(re, tf.bool)

    def cond(i, re, im, ns, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, re, im, ns, active):
        re, im, ns, active = _julia_step(re, im, c_re, c_im, ns, active, radius_squared)
        return i + 1, re, im, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, re, im, ns, active))
    return ns


def escape_counts(
    re0: np.ndarray,
    im0: np.ndarray,
    c: Complex,
    *,
    escape: EscapeConfig = EscapeConfig(),
    device: Optional[str] = None,
) -> np.ndarray:
    """Escape counts for start points given as real and imaginary arrays."""

    with tf.device(device if device is not None else "/CPU:0"):
        counts = _julia_run(
            tf.convert_to_tensor(re0, dtype=tf.float64),
            tf.convert_to_tensor(im0, dtype=tf.float64),
            tf.constant(c.re, dtype=tf.float64),
            tf.constant(c.im, dtype=tf.float64),
            tf.constant(escape.radius_squared, dtype=tf.float64),
            tf.constant(escape.limit, dtype=tf.int32),
        )
    return counts.numpy()


def rasterize_tensor(
    width: int,
    height: int,
    bound: Bound,
    c: Complex,
    *,
    escape: EscapeConfig = EscapeConfig(),
    color: ColorPolicy = ColorPolicy(),
    device: Optional[str] = None,
) -> np.ndarray:
    """Render a frame by evaluating every pixel at once as a tensor batch."""

    if width == 0 or height == 0:
        return np.zeros(0, dtype=np.uint8)

    mapping = compute_mapping(bound, width, height)
    xs, ys = mapping.axes()
    X, Y = np.meshgrid(xs, ys)

    counts = escape_counts(X, Y, c, escape=escape, device=device)
    return color.colorize(counts, escape.limit).reshape(-1)
