"""Mapping of escape-time results to RGBA bytes."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

from .escape import Divergent, EscapeResult

RGBA = tuple[int, int, int, int]

# Divergent channels fade as 255 - n // divisor (red slowest, blue fastest).
CHANNEL_DIVISORS = (2, 4, 6)


class ConvergentColor(enum.Enum):
    """Color given to points that never escape."""

    TRANSPARENT = (0, 0, 0, 0)
    OPAQUE = (0, 0, 0, 255)


def clamp_byte(value: int) -> int:
    return max(0, min(int(value), 255))


@dataclass(frozen=True)
class ColorPolicy:
    """Fixed linear color scheme with a configurable convergent color."""

    convergent: ConvergentColor = ConvergentColor.TRANSPARENT

    def color(self, result: EscapeResult) -> RGBA:
        if isinstance(result, Divergent):
            n = result.iterations
            r, g, b = (clamp_byte(255 - n // divisor) for divisor in CHANNEL_DIVISORS)
            return r, g, b, 255
        return self.convergent.value

    def colorize(self, counts: np.ndarray, limit: int) -> np.ndarray:
        """Vectorized :meth:`color` for an array of escape counts.

        A count equal to ``limit`` marks a convergent point. The result has the
        shape of ``counts`` plus a trailing RGBA axis.
        """

        counts = np.asarray(counts, dtype=np.int64)
        rgba = np.empty(counts.shape + (4,), dtype=np.uint8)
        for channel, divisor in enumerate(CHANNEL_DIVISORS):
            rgba[..., channel] = np.clip(255 - counts // divisor, 0, 255)
        rgba[..., 3] = 255

        inside = counts >= limit
        rgba[inside] = np.array(self.convergent.value, dtype=np.uint8)
        return rgba
