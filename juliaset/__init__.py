"""Public API for Julia-set rendering utilities."""

from .canvas import JuliaSet
from .color import ColorPolicy, ConvergentColor
from .escape import Convergent, Divergent, EscapeConfig, evaluate_escape_time
from .output import buffer_to_image, write_png
from .plane import Bound, Complex, PlaneMapping, compute_mapping
from .renderer import (
    DEFAULT_C,
    RenderParameters,
    RenderResult,
    rasterize_parallel,
    rasterize_sequential,
    render_julia,
)

__all__ = [
    "Bound",
    "ColorPolicy",
    "Complex",
    "Convergent",
    "ConvergentColor",
    "DEFAULT_C",
    "Divergent",
    "EscapeConfig",
    "JuliaSet",
    "PlaneMapping",
    "RenderParameters",
    "RenderResult",
    "buffer_to_image",
    "compute_mapping",
    "evaluate_escape_time",
    "rasterize_parallel",
    "rasterize_sequential",
    "render_julia",
    "write_png",
]
