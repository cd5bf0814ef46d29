"""Complex values, plane bounds and the pixel-to-plane mapping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

DEFAULT_RADIUS = 2.0


@dataclass(frozen=True)
class Complex:
    """An immutable complex value with float64 components."""

    re: float
    im: float

    def square(self) -> Complex:
        return Complex((self.re * self.re) - (self.im * self.im), 2.0 * self.re * self.im)

    def __add__(self, other: Complex) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.re + other.re, self.im + other.im)

    def add(self, other: Complex) -> Complex:
        if not isinstance(other, Complex):
            raise TypeError(f"Cannot add {type(other).__name__} to Complex.")
        return self + other

    def norm_squared(self) -> float:
        return (self.re * self.re) + (self.im * self.im)

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> Complex:
        return cls(re=float(value["re"]), im=float(value["im"]))

    def to_dict(self) -> dict[str, float]:
        return {"re": self.re, "im": self.im}


@dataclass(frozen=True)
class Bound:
    """Rectangle of the complex plane that is mapped onto the pixel grid.

    ``north``/``south`` bound the imaginary axis and ``west``/``east`` the
    real axis. The rectangle must be non-degenerate.
    """

    north: float
    south: float
    west: float
    east: float

    def __post_init__(self) -> None:
        edges = (self.north, self.south, self.west, self.east)
        if not all(math.isfinite(edge) for edge in edges):
            raise ValueError(f"Bound edges must be finite, got {edges}.")
        if not self.north > self.south:
            raise ValueError(f"Bound north ({self.north}) must be greater than south ({self.south}).")
        if not self.east > self.west:
            raise ValueError(f"Bound east ({self.east}) must be greater than west ({self.west}).")

    @classmethod
    def square(cls, radius: float = DEFAULT_RADIUS) -> Bound:
        return cls(north=radius, south=-radius, west=-radius, east=radius)

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> Bound:
        return cls(
            north=float(value["north"]),
            south=float(value["south"]),
            west=float(value["west"]),
            east=float(value["east"]),
        )

    def to_dict(self) -> dict[str, float]:
        return {"north": self.north, "south": self.south, "west": self.west, "east": self.east}


@dataclass(frozen=True)
class PlaneMapping:
    """Sampling grid of a render: pixel ``(0, 0)`` sits on the (west, south) corner."""

    west: float
    south: float
    x_step: float
    y_step: float
    width: int
    height: int

    def pixel_to_complex(self, x: int, y: int) -> Complex:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} grid.")
        return Complex(self.west + x * self.x_step, self.south + y * self.y_step)

    def axes(self) -> tuple[np.ndarray, np.ndarray]:
        """Return the real and imaginary sample coordinates of every column and row."""

        # west + index * step, elementwise, so each sample equals pixel_to_complex.
        xs = np.float64(self.west) + np.arange(self.width, dtype=np.float64) * np.float64(self.x_step)
        ys = np.float64(self.south) + np.arange(self.height, dtype=np.float64) * np.float64(self.y_step)
        return xs, ys


def compute_mapping(bound: Bound, width: int, height: int) -> PlaneMapping:
    if width <= 0 or height <= 0:
        raise ValueError(f"Plane mapping needs a non-empty grid, got {width}x{height}.")

    x_step = abs(bound.east - bound.west) / width
    y_step = abs(bound.north - bound.south) / height

    return PlaneMapping(
        west=float(bound.west),
        south=float(bound.south),
        x_step=float(x_step),
        y_step=float(y_step),
        width=int(width),
        height=int(height),
    )
