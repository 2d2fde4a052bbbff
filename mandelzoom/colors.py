"""Packed 32-bit ARGB color helpers."""

from __future__ import annotations

import numpy as np

BLACK = 0xFF000000
WHITE = 0xFFFFFFFF
RED = 0xFFFF0000
YELLOW = 0xFFFFFF00
CORNFLOWER_BLUE = 0xFF6495ED
TRANSPARENT = 0x00000000


def to_argb(alpha: int, red: int, green: int, blue: int) -> int:
    return ((alpha & 0xFF) << 24) | ((red & 0xFF) << 16) | ((green & 0xFF) << 8) | (blue & 0xFF)


def to_rgb(red: int, green: int, blue: int) -> int:
    """Pack an opaque color."""

    return to_argb(255, red, green, blue)


def alpha(argb: int) -> int:
    return (argb >> 24) & 0xFF


def red(argb: int) -> int:
    return (argb >> 16) & 0xFF


def green(argb: int) -> int:
    return (argb >> 8) & 0xFF


def blue(argb: int) -> int:
    return argb & 0xFF


def channels(argb: int) -> tuple[int, int, int, int]:
    """Split a packed color into ``(alpha, red, green, blue)``."""

    return alpha(argb), red(argb), green(argb), blue(argb)


def pixels_to_rgba(pixels: np.ndarray) -> np.ndarray:
    """Convert a ``(height, width)`` packed buffer into ``(height, width, 4)`` RGBA bytes."""

    packed = np.asarray(pixels, dtype=np.uint32)
    rgba = np.stack(
        (
            (packed >> 16) & 0xFF,
            (packed >> 8) & 0xFF,
            packed & 0xFF,
            (packed >> 24) & 0xFF,
        ),
        axis=-1,
    )
    return rgba.astype(np.uint8)
