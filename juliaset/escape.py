"""Escape-time evaluation of the quadratic map ``z -> z^2 + c``."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

from .plane import DEFAULT_RADIUS, Complex

DEFAULT_LIMIT = 900


@dataclass(frozen=True)
class EscapeConfig:
    """Convergence radius and iteration limit of the divergence test."""

    radius: float = DEFAULT_RADIUS
    limit: int = DEFAULT_LIMIT
    radius_squared: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise ValueError(f"radius must be a positive finite number, got {self.radius!r}.")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise ValueError(f"limit must be a positive integer, got {self.limit!r}.")
        object.__setattr__(self, "radius_squared", float(self.radius) * float(self.radius))


class _ConvergentType:
    __slots__ = ()

    def __repr__(self) -> str:
        return "Convergent"

    def __reduce__(self) -> str:
        return "Convergent"


Convergent = _ConvergentType()
"""The sequence stayed within the radius for the whole iteration limit."""


@dataclass(frozen=True)
class Divergent:
    """The sequence left the radius after ``iterations`` completed steps."""

    iterations: int


EscapeResult = Union[_ConvergentType, Divergent]


def evaluate_escape_time(z0: Complex, c: Complex, config: EscapeConfig = EscapeConfig()) -> EscapeResult:
    """Iterate ``z = z^2 + c`` from ``z0`` and report when, if ever, it escapes.

    The squared magnitude is tested against ``radius_squared`` before every
    step, so a start point already outside the radius is ``Divergent(0)``.
    """

    radius_squared = config.radius_squared
    z = z0
    for n in range(config.limit):
        if z.norm_squared() > radius_squared:
            return Divergent(n)
        z = z.square() + c
    return Convergent
