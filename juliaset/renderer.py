"""Rasterization of Julia-set frames into flat RGBA buffers."""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .color import ColorPolicy
from .escape import EscapeConfig, evaluate_escape_time
from .plane import Bound, Complex, PlaneMapping, compute_mapping

DEFAULT_C = Complex(-0.15, 0.65)

STRATEGIES = ("sequential", "parallel", "tensor")
EXECUTORS = ("process", "thread")


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of a Julia set."""

    width: int
    height: int
    bound: Bound = field(default_factory=Bound.square)
    c: Complex = DEFAULT_C
    escape: EscapeConfig = field(default_factory=EscapeConfig)
    color: ColorPolicy = field(default_factory=ColorPolicy)

    def __post_init__(self) -> None:
        _check_dimensions(self.width, self.height)


@dataclass(frozen=True)
class RenderResult:
    """Flat row-major RGBA8 buffer of a finished render."""

    buffer: np.ndarray
    width: int
    height: int

    def pixels(self) -> np.ndarray:
        return self.buffer.reshape(self.height, self.width, 4)

    def tobytes(self) -> bytes:
        return self.buffer.tobytes()


def _check_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"{name} must be an integer, got {value!r}.")
        if value < 0:
            raise ValueError(f"{name} must not be negative, got {value}.")


def _allocate(width: int, height: int) -> np.ndarray:
    return np.zeros(int(width) * int(height) * 4, dtype=np.uint8)


def _render_row(
    row: np.ndarray,
    y: int,
    mapping: PlaneMapping,
    c: Complex,
    escape: EscapeConfig,
    color: ColorPolicy,
) -> None:
    """Fill ``row`` (the ``width * 4`` bytes of pixel row ``y``) in place."""

    for x in range(mapping.width):
        z0 = mapping.pixel_to_complex(x, y)
        result = evaluate_escape_time(z0, c, escape)
        row[4 * x:4 * x + 4] = color.color(result)


def _render_row_bytes(
    y: int,
    mapping: PlaneMapping,
    c: Complex,
    escape: EscapeConfig,
    color: ColorPolicy,
) -> tuple[int, bytes]:
    row = np.zeros(mapping.width * 4, dtype=np.uint8)
    _render_row(row, y, mapping, c, escape, color)
    return y, row.tobytes()


def rasterize_sequential(
    width: int,
    height: int,
    bound: Bound,
    c: Complex,
    *,
    escape: EscapeConfig = EscapeConfig(),
    color: ColorPolicy = ColorPolicy(),
) -> np.ndarray:
    """Render every pixel in row-major order on the calling thread."""

    _check_dimensions(width, height)
    data = _allocate(width, height)
    if width == 0 or height == 0:
        return data

    mapping = compute_mapping(bound, width, height)
    rows = data.reshape(height, width * 4)
    for y in range(height):
        _render_row(rows[y], y, mapping, c, escape, color)
    return data


def rasterize_parallel(
    width: int,
    height: int,
    bound: Bound,
    c: Complex,
    *,
    escape: EscapeConfig = EscapeConfig(),
    color: ColorPolicy = ColorPolicy(),
    workers: Optional[int] = None,
    executor: str = "process",
) -> np.ndarray:
    """Render with one independent unit of work per pixel row.

    Every unit owns the disjoint ``width * 4`` byte slice of its row. Thread
    units write into their slice directly; process units return the row bytes
    and the slice is filled from them. Returns once every unit has finished.
    """

    _check_dimensions(width, height)
    if executor not in EXECUTORS:
        raise ValueError(f"Unknown executor '{executor}'. Valid choices: {', '.join(EXECUTORS)}.")
    if workers is not None and workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}.")

    data = _allocate(width, height)
    if width == 0 or height == 0:
        return data

    mapping = compute_mapping(bound, width, height)
    rows = data.reshape(height, width * 4)

    if executor == "thread":
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_render_row, rows[y], y, mapping, c, escape, color)
                for y in range(height)
            ]
            for future in futures:
                future.result()
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_render_row_bytes, y, mapping, c, escape, color)
                for y in range(height)
            ]
            for future in futures:
                y, row = future.result()
                rows[y] = np.frombuffer(row, dtype=np.uint8)
    return data


def render_julia(
    params: RenderParameters,
    *,
    strategy: str = "sequential",
    workers: Optional[int] = None,
    executor: str = "process",
    device: Optional[str] = None,
) -> RenderResult:
    """Render a Julia-set frame given the supplied parameters."""

    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}'. Valid choices: {', '.join(STRATEGIES)}.")

    if strategy == "sequential":
        buffer = rasterize_sequential(
            params.width, params.height, params.bound, params.c,
            escape=params.escape, color=params.color,
        )
    elif strategy == "parallel":
        buffer = rasterize_parallel(
            params.width, params.height, params.bound, params.c,
            escape=params.escape, color=params.color,
            workers=workers, executor=executor,
        )
    else:
        # TensorFlow is optional; only this strategy needs it.
        from .tensor import rasterize_tensor

        buffer = rasterize_tensor(
            params.width, params.height, params.bound, params.c,
            escape=params.escape, color=params.color, device=device,
        )

    return RenderResult(buffer=buffer, width=params.width, height=params.height)
