"""Image input and digit layout."""

from pictoprime.imaging.ascii import (
    DIGIT_GLYPHS,
    format_prime,
    image_to_digits,
    load_image,
)

__all__ = [
    "DIGIT_GLYPHS",
    "format_prime",
    "image_to_digits",
    "load_image",
]
