"""Aspect ratio to pixel dimension lookup.

The provider's FLUX and SDXL models work best at roughly one megapixel, so
every supported aspect ratio maps to a fixed width/height pair of about
that size. Unknown or missing ratios fall back to square.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class AspectRatio(str, Enum):
    """Named aspect ratios accepted by the generation endpoints."""

    SQUARE = "1:1"
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    PORTRAIT_3_4 = "3:4"
    LANDSCAPE_4_3 = "4:3"


class Dimensions(NamedTuple):
    width: int
    height: int


_DIMENSIONS: dict[AspectRatio, Dimensions] = {
    AspectRatio.SQUARE: Dimensions(1024, 1024),
    AspectRatio.LANDSCAPE: Dimensions(1344, 768),
    AspectRatio.PORTRAIT: Dimensions(768, 1344),
    AspectRatio.PORTRAIT_3_4: Dimensions(896, 1152),
    AspectRatio.LANDSCAPE_4_3: Dimensions(1152, 896),
}

DEFAULT_DIMENSIONS = _DIMENSIONS[AspectRatio.SQUARE]


def resolve_dimensions(aspect_ratio: AspectRatio | str | None) -> Dimensions:
    """Return the pixel dimensions for a named aspect ratio.

    Args:
        aspect_ratio: An :class:`AspectRatio` member or its string value
            (e.g. ``"16:9"``).  ``None`` and unrecognised values resolve to
            1024x1024.

    Returns:
        Dimensions tuple of ``(width, height)``.
    """
    try:
        return _DIMENSIONS[AspectRatio(aspect_ratio)]
    except ValueError:
        return DEFAULT_DIMENSIONS


def resolve_size(
    aspect_ratio: AspectRatio | str | None,
    width: int | None = None,
    height: int | None = None,
) -> Dimensions:
    """Resolve final output size; explicit width/height override the ratio."""
    default = resolve_dimensions(aspect_ratio)
    return Dimensions(
        width if width is not None else default.width,
        height if height is not None else default.height,
    )
