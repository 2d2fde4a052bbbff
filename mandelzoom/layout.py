"""Coarse-to-fine pixel ordering for progressive rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

# Allowed maximum square sizes mapped to their power of two.
LEGAL_SQUARE_SIZES = {2 ** power: power for power in range(1, 30)}


@dataclass(frozen=True)
class LayoutElement:
    """A pixel to evaluate and the square it paints until finer layers arrive."""

    x: int
    y: int
    square_size: int


def make_layout_plan(width: int, height: int, max_square_size: int) -> list[LayoutElement]:
    """Order every pixel of a ``width`` x ``height`` image from coarse to fine.

    The first layer visits pixels on a ``max_square_size`` grid, each later
    layer halves the grid spacing and only visits pixels not yet emitted, down
    to single pixels. Each pixel appears exactly once.
    """

    if max_square_size not in LEGAL_SQUARE_SIZES:
        raise ValueError(f"max square size must be a power of two from 2 to 2**29, got {max_square_size}.")

    visited = np.zeros((max(height, 0), max(width, 0)), dtype=bool)
    elements: list[LayoutElement] = []
    square_size = max_square_size

    for _ in range(LEGAL_SQUARE_SIZES[max_square_size] + 1):
        for y in range(0, height, square_size):
            for x in range(0, width, square_size):
                if not visited[y, x]:
                    elements.append(LayoutElement(x, y, square_size))
                    visited[y, x] = True
        square_size //= 2

    return elements


def layer_boundaries(plan: Sequence[LayoutElement]) -> list[int]:
    """Indices into ``plan`` at which each layer ends."""

    ends = [i for i in range(1, len(plan)) if plan[i].square_size != plan[i - 1].square_size]
    if plan:
        ends.append(len(plan))
    return ends


def rasterize(pixels: np.ndarray, plan: Sequence[LayoutElement],
              render_to: Optional[int] = None) -> np.ndarray:
    """Paint the first ``render_to`` elements of ``plan`` into a new buffer.

    Every element fills its square, clipped to the image, with the color of
    its top-left pixel in ``pixels``. Pixels not yet covered stay zero.
    """

    canvas = np.zeros_like(pixels)
    count = len(plan) if render_to is None else render_to
    for element in plan[:count]:
        size = element.square_size
        canvas[element.y:element.y + size, element.x:element.x + size] = pixels[element.y, element.x]
    return canvas
