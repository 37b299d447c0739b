"""Geometry Utilities

Pure functions used by the layout core:

- Aspect-ratio preserving image scaling
- Hex color parsing and conversion to backend color channels
- Text width estimation when no font metrics are available
- Coordinate conversion between layout space and PDF space

Layout space has its origin at the top-left corner of the page with y
growing downwards. ReportLab (and PDF in general) puts the origin at the
bottom-left corner with y growing upwards.

All functions are pure (no side effects) and can be tested in isolation.
"""
import re
from typing import List, Sequence, Tuple

from ..exceptions import InvalidColorFormatError

_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

# Average glyph width of a proportional sans font, as a fraction of the em size
AVERAGE_CHAR_WIDTH_RATIO = 0.5


def scale_to_fit(
    intrinsic_w: float,
    intrinsic_h: float,
    max_w: float,
    max_h: float,
    allow_upscale: bool = False,
) -> Tuple[float, float]:
    """
    Scale a box into a bounding box while preserving its aspect ratio.

    The limiting ratio is ``min(max_w / intrinsic_w, max_h / intrinsic_h)``.
    Boxes that already fit are returned at their intrinsic size unless
    ``allow_upscale`` is set.

    Args:
        intrinsic_w: Intrinsic width (pixels or points)
        intrinsic_h: Intrinsic height
        max_w: Maximum draw width
        max_h: Maximum draw height
        allow_upscale: If True, grow small boxes until they touch the bounds

    Returns:
        Tuple of (width, height) to draw

    Raises:
        ValueError: If any dimension is not strictly positive

    Examples:
        >>> scale_to_fit(1000, 500, 500, 300)
        (500.0, 250.0)
        >>> scale_to_fit(100, 50, 500, 300)
        (100.0, 50.0)
        >>> scale_to_fit(100, 50, 500, 300, allow_upscale=True)
        (500.0, 250.0)
    """
    for name, value in (
        ("intrinsic_w", intrinsic_w),
        ("intrinsic_h", intrinsic_h),
        ("max_w", max_w),
        ("max_h", max_h),
    ):
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    ratio = min(max_w / intrinsic_w, max_h / intrinsic_h)
    if ratio >= 1 and not allow_upscale:
        return float(intrinsic_w), float(intrinsic_h)

    # Clamp so float rounding never pushes a side past its bound
    width = min(intrinsic_w * ratio, float(max_w))
    height = min(intrinsic_h * ratio, float(max_h))
    return width, height


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """
    Parse a hex color string into three 8-bit channels.

    Args:
        value: Color like "#1C3062" or "1c3062"

    Returns:
        Tuple of (red, green, blue) integers in 0-255

    Raises:
        InvalidColorFormatError: If value is not 6 hex digits after an optional '#'

    Examples:
        >>> hex_to_rgb("#1C3062")
        (28, 48, 98)
        >>> hex_to_rgb("ffffff")
        (255, 255, 255)
    """
    if not isinstance(value, str):
        raise InvalidColorFormatError(value)
    match = _HEX_COLOR_RE.match(value.strip())
    if not match:
        raise InvalidColorFormatError(value)
    return tuple(int(channel, 16) for channel in match.groups())


def rgb_to_unit(rgb: Sequence[int]) -> Tuple[float, float, float]:
    """
    Convert 8-bit channels to the 0-1 floats expected by ReportLab colors.

    Examples:
        >>> rgb_to_unit((255, 0, 51))
        (1.0, 0.0, 0.2)
    """
    r, g, b = rgb
    return r / 255, g / 255, b / 255


def estimate_text_width(text: str, font_size: float) -> float:
    """
    Estimate rendered text width without font metrics.

    Used as a fallback when a font is not registered with the backend.

    Examples:
        >>> estimate_text_width("abcd", 10)
        20.0
    """
    return len(text) * font_size * AVERAGE_CHAR_WIDTH_RATIO


def column_offsets(widths: Sequence[float], gap: float = 0.0) -> List[float]:
    """
    Compute the x offset of each column from cumulative column widths.

    Args:
        widths: Column widths, left to right
        gap: Horizontal space between adjacent columns

    Returns:
        List of offsets relative to the left edge of the first column

    Examples:
        >>> column_offsets([100, 50, 25])
        [0.0, 100.0, 150.0]
        >>> column_offsets([100, 100], gap=10)
        [0.0, 110.0]
    """
    offsets = []
    x = 0.0
    for width in widths:
        offsets.append(x)
        x += width + gap
    return offsets


def flip_y_coordinate(y: float, page_height: float) -> float:
    """
    Flip a Y coordinate between top-left and bottom-left origin systems.

    Examples:
        >>> flip_y_coordinate(0, 842)
        842
        >>> flip_y_coordinate(842, 842)
        0

    Notes:
        This function is its own inverse:
        flip_y_coordinate(flip_y_coordinate(y, h), h) == y
    """
    return page_height - y


def top_left_to_bottom_left(y: float, height: float, page_height: float) -> float:
    """
    Convert the top edge of a box in layout space to its bottom edge in PDF space.

    Args:
        y: Distance from the top of the page to the top of the box
        height: Height of the box
        page_height: Height of the page

    Returns:
        ReportLab y coordinate of the bottom-left corner of the box

    Examples:
        >>> top_left_to_bottom_left(50, 20, 842)
        772
    """
    return flip_y_coordinate(y + height, page_height)
