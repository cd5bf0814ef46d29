"""Encoding of rendered RGBA buffers as Pillow images and PNG files."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
import PIL.Image

Destination = Union[str, Path, BinaryIO]


def buffer_to_image(buffer: np.ndarray, width: int, height: int) -> PIL.Image.Image:
    """Wrap a flat RGBA8 buffer in a Pillow image of matching dimensions."""

    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot build an image of size {width}x{height}.")
    data = np.asarray(buffer, dtype=np.uint8)
    expected = width * height * 4
    if data.size != expected:
        raise ValueError(f"Buffer holds {data.size} bytes, expected {expected} for {width}x{height} RGBA.")
    return PIL.Image.fromarray(data.reshape(height, width, 4))


def write_png(buffer: np.ndarray, width: int, height: int, destination: Destination) -> None:
    """Write ``buffer`` to ``destination`` (a path or binary file object) as a PNG."""

    image = buffer_to_image(buffer, width, height)
    if isinstance(destination, (str, Path)):
        output_path = Path(destination).expanduser()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(str(output_path), format="PNG")
    else:
        image.save(destination, format="PNG")
