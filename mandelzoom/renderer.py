"""Rendering of whole Mandelbrot frames."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import PIL.Image

from .coloring import ColorMapper
from .colors import pixels_to_rgba
from .coordinates import MappingParameters
from .gradient import Gradient
from .layout import LEGAL_SQUARE_SIZES, layer_boundaries, make_layout_plan
from .supersample import subpixel_offsets, supersample_pixel

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set."""

    x_res: int
    y_res: int
    x_center: float
    y_center: float
    plane_width: float
    max_iterations: int
    bailout: float = 10.0
    aa_factor: int = 1
    multiplier: float = 1.0
    show_discovery: bool = False
    max_square_size: int = 16

    def validate(self) -> None:
        """Raise ``ValueError`` for settings no frame can be rendered with."""

        self.mapping()
        subpixel_offsets(self.aa_factor)
        if self.bailout <= 1.0:
            raise ValueError(f"bailout must be greater than 1, got {self.bailout}.")
        if self.max_square_size not in LEGAL_SQUARE_SIZES:
            raise ValueError(f"max square size must be a power of two from 2 to 2**29, got {self.max_square_size}.")

    def mapping(self) -> MappingParameters:
        return MappingParameters.from_center_width(
            self.x_center, self.y_center, self.plane_width, self.x_res, self.y_res,
        )


@dataclass(frozen=True)
class RenderResult:
    """Packed ARGB pixels of a frame, row-major, plus the mapping that produced them."""

    pixels: np.ndarray
    mapping: MappingParameters


def render_frame(params: RenderParameters, gradient: Gradient, *,
                 progress: Optional[ProgressCallback] = None) -> RenderResult:
    """Render a frame, visiting pixels coarse to fine.

    ``progress`` is called with ``(pixels_done, total)`` after each layout
    layer completes.
    """

    params.validate()
    mapping = params.mapping()
    coloring = ColorMapper(params.bailout, gradient, params.show_discovery, params.multiplier)
    plan = make_layout_plan(params.x_res, params.y_res, params.max_square_size)
    pixels = np.zeros((params.y_res, params.x_res), dtype=np.uint32)

    logger.debug("Rendering %dx%d frame at width %.10g with aa factor %d",
                 params.x_res, params.y_res, params.plane_width, params.aa_factor)
    started = time.perf_counter()

    start = 0
    for end in layer_boundaries(plan):
        for element in plan[start:end]:
            pixels[element.y, element.x] = supersample_pixel(
                element.x, element.y, mapping, coloring,
                params.max_iterations, params.bailout, params.aa_factor,
            )
        if progress is not None:
            progress(end, len(plan))
        start = end

    logger.debug("Frame rendered in %.2fs", time.perf_counter() - started)
    return RenderResult(pixels=pixels, mapping=mapping)


def to_image(pixels: np.ndarray) -> PIL.Image.Image:
    """Convert a packed ARGB buffer into an RGBA Pillow image."""

    return PIL.Image.fromarray(pixels_to_rgba(pixels))
