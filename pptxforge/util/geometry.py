"""
Unit conversion between the model and DrawingML coordinates.

The model measures positions in inches, font sizes and line widths in
points and rotation in degrees. DrawingML stores distances in English
Metric Units (EMU), font sizes in hundredths of a point and angles in
60,000ths of a degree.
"""

import logging

logger = logging.getLogger(__name__)

EMU_PER_INCH = 914400
EMU_PER_POINT = 12700
ROTATION_UNITS_PER_DEGREE = 60000


def inches_to_emu(inches: float) -> int:
    # Rounded rather than truncated so emu_to_inches() recovers the input.
    return int(round(inches * EMU_PER_INCH))


def emu_to_inches(emu: int | float) -> float:
    return emu / EMU_PER_INCH


def points_to_emu(points: float) -> int:
    return int(round(points * EMU_PER_POINT))


def points_to_hundredths(points: float) -> int:
    """Font sizes and spacing in DrawingML are hundredths of a point (18pt -> 1800)."""
    return int(round(points * 100))


def hundredths_to_points(value: int | float) -> float:
    return value / 100.0


def degrees_to_rotation(degrees: float) -> int:
    """Convert degrees to DrawingML angle units, truncating fractions toward zero."""
    return int(degrees * ROTATION_UNITS_PER_DEGREE)


def rotation_to_degrees(units: int | float) -> float:
    return units / ROTATION_UNITS_PER_DEGREE


WIDESCREEN_WIDTH = inches_to_emu(13.333)  # 16:9
WIDESCREEN_HEIGHT = inches_to_emu(7.5)
STANDARD_WIDTH = inches_to_emu(10.0)  # 4:3
STANDARD_HEIGHT = inches_to_emu(7.5)


def parse_slide_size(layout: str | None) -> tuple[int, int]:
    """
    Resolve a slide size name to (width, height) in EMU.

    Accepts "16:9"/"widescreen", "4:3"/"standard" or a custom "WxH" size in
    inches such as "11x8.5". Anything else falls back to widescreen.
    """
    if layout is None:
        return WIDESCREEN_WIDTH, WIDESCREEN_HEIGHT

    name = layout.strip().lower()
    if name in ("16:9", "widescreen"):
        return WIDESCREEN_WIDTH, WIDESCREEN_HEIGHT
    if name in ("4:3", "standard"):
        return STANDARD_WIDTH, STANDARD_HEIGHT

    parts = name.split("x")
    if len(parts) == 2:
        try:
            width, height = float(parts[0]), float(parts[1])
        except ValueError:
            width = height = 0.0
        if width > 0 and height > 0:
            return inches_to_emu(width), inches_to_emu(height)

    logger.debug(f"Unrecognised slide size [{layout}], using widescreen")
    return WIDESCREEN_WIDTH, WIDESCREEN_HEIGHT
