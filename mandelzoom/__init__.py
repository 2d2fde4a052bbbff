"""Public API for Mandelbrot rendering utilities."""

from .coloring import FALLBACK_COLOR, ColorMapper
from .coordinates import MappingParameters
from .escape import Discovery, EvaluationResult, evaluate_point
from .generator import ZoomPlanner, compute_zoom_factors, frame_plane_widths
from .gradient import (
    CatmullRomGradient,
    Gradient,
    GradientAnchor,
    GradientError,
    LinearGradient,
    gradient_from_colormap,
)
from .layout import LEGAL_SQUARE_SIZES, LayoutElement, make_layout_plan, rasterize
from .renderer import RenderParameters, RenderResult, render_frame, to_image
from .supersample import subpixel_offsets, supersample_pixel

__all__ = [
    "CatmullRomGradient",
    "ColorMapper",
    "Discovery",
    "EvaluationResult",
    "FALLBACK_COLOR",
    "Gradient",
    "GradientAnchor",
    "GradientError",
    "LEGAL_SQUARE_SIZES",
    "LayoutElement",
    "LinearGradient",
    "MappingParameters",
    "RenderParameters",
    "RenderResult",
    "ZoomPlanner",
    "compute_zoom_factors",
    "evaluate_point",
    "frame_plane_widths",
    "gradient_from_colormap",
    "make_layout_plan",
    "rasterize",
    "render_frame",
    "subpixel_offsets",
    "supersample_pixel",
    "to_image",
]
