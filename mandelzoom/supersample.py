"""Anti-aliased pixel colors from a regular grid of sub-pixel samples."""

from __future__ import annotations

from .coloring import ColorMapper
from .colors import channels, to_argb
from .coordinates import MappingParameters
from .escape import evaluate_point


def subpixel_offsets(aa_factor: int) -> list[float]:
    """Centers of ``aa_factor`` equal slices of a pixel, relative to its center.

    A factor of 1 gives the pixel center alone; 3 gives ``-1/3, 0, 1/3``.
    """

    if aa_factor < 1:
        raise ValueError(f"aa factor must be at least 1, got {aa_factor}.")
    return [(k + 0.5) / aa_factor - 0.5 for k in range(aa_factor)]


def supersample_pixel(px: float, py: float, mapping: MappingParameters, coloring: ColorMapper,
                      max_iterations: int, bailout: float, aa_factor: int = 1) -> int:
    """Average the colors of an ``aa_factor`` x ``aa_factor`` grid inside pixel ``(px, py)``.

    Channels are summed separately and divided with integer division.
    """

    offsets = subpixel_offsets(aa_factor)
    totals = [0, 0, 0, 0]

    for dx in offsets:
        x = mapping.convert_x(px + dx)
        for dy in offsets:
            y = mapping.convert_y(py + dy)
            result = evaluate_point(x, y, max_iterations, bailout)
            for channel, value in enumerate(channels(coloring.color(result))):
                totals[channel] += value

    samples = aa_factor * aa_factor
    return to_argb(*(total // samples for total in totals))
