"""Drawing Julia sets onto Pillow images used as canvases."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import PIL.Image

from .color import ColorPolicy
from .escape import EscapeConfig
from .output import buffer_to_image
from .plane import Bound, Complex
from .renderer import rasterize_sequential


def _coerce_bound(bound: Union[Bound, Mapping[str, Any], None], radius: float) -> Bound:
    if isinstance(bound, Bound):
        return bound
    # A missing or unusable bound falls back to the full convergence square.
    try:
        return Bound.from_mapping(bound)
    except (TypeError, KeyError, ValueError):
        return Bound.square(radius)


class JuliaSet:
    """A Julia set for a fixed constant ``c`` that can draw itself on a canvas."""

    def __init__(
        self,
        c: Union[Complex, Mapping[str, Any]],
        *,
        escape: EscapeConfig = EscapeConfig(),
        color: ColorPolicy = ColorPolicy(),
    ) -> None:
        self.c = c if isinstance(c, Complex) else Complex.from_mapping(c)
        self.escape = escape
        self.color = color

    def render(self, width: int, height: int, bound: Union[Bound, Mapping[str, Any], None] = None) -> PIL.Image.Image:
        data = rasterize_sequential(
            width,
            height,
            _coerce_bound(bound, self.escape.radius),
            self.c,
            escape=self.escape,
            color=self.color,
        )
        return buffer_to_image(data, width, height)

    def draw(self, canvas: PIL.Image.Image, bound: Optional[Union[Bound, Mapping[str, Any]]] = None) -> None:
        """Render at the canvas size and blit the result at the origin.

        The canvas must be an RGBA image so convergent pixels keep their alpha.
        """

        if canvas.mode != "RGBA":
            raise ValueError(f"Canvas must be an RGBA image, got mode {canvas.mode!r}.")
        width, height = canvas.size
        if width == 0 or height == 0:
            return
        canvas.paste(self.render(width, height, bound), (0, 0))
