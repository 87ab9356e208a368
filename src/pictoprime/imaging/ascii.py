"""Image to digit string conversion and prime layout.

Pixels are mapped to digits the way ASCII art maps pixels to glyphs: every
pixel gets a brightness level and each level has a glyph. Using digits as
glyphs turns a picture into a (very long) number.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

# Ordered from darkest to brightest.
DIGIT_GLYPHS: tuple[str, ...] = tuple("8049922777")

# Terminal cells are about twice as tall as they are wide.
CELL_ASPECT = 0.5


def _java_round(x: np.ndarray) -> np.ndarray:
    # half-up rounding, as opposed to numpy's half-to-even
    return np.floor(x + 0.5)


def load_image(path: str | Path) -> Image.Image:
    """Open an image file.

    Raises:
        FileNotFoundError: If path does not exist.
        PIL.UnidentifiedImageError: If the file is not a readable image.
    """
    with Image.open(path) as img:
        img.load()
        return img.copy()


def image_to_digits(
    image: Image.Image,
    width: int = 32,
    contrast: float = 0.9,
    glyphs: Sequence[str] = DIGIT_GLYPHS,
) -> str:
    """Convert an image to a digit string, row by row.

    Args:
        image: Source image, any mode.
        width: Number of digits per row.
        contrast: Factor applied to the colour channels before quantizing.
        glyphs: Characters ordered from darkest to brightest.

    Returns:
        String of ``width * rows`` glyphs.

    Raises:
        ValueError: If width < 1 or glyphs is empty.
    """
    if width < 1:
        raise ValueError(f"width must be >= 1, got {width}")
    if not glyphs:
        raise ValueError("glyphs must not be empty")

    img = image.convert("RGBA")
    ratio = width / img.width
    height = max(1, int(_java_round(np.float64(img.height * ratio * CELL_ASPECT))))
    img = img.resize((width, height), Image.Resampling.NEAREST)

    pixels = np.asarray(img, dtype=np.float64)
    rgb = np.clip(np.floor(pixels[..., :3] * contrast), 0, 255)
    alpha = pixels[..., 3]

    levels = len(glyphs) - 1
    quantized = _java_round(rgb / 255.0 * levels)
    intensity = quantized.sum(axis=-1) / 3.0 * alpha / 255.0
    indices = np.clip(_java_round(intensity), 0, levels).astype(np.int64)

    return "".join(glyphs[i] for i in indices.ravel())


def format_prime(digits: str, width: int) -> str:
    """Wrap a digit string into lines of width characters."""
    if width < 1:
        raise ValueError(f"width must be >= 1, got {width}")
    return "\n".join(textwrap.wrap(digits, width))
