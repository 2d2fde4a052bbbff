"""Utilities for planning Mandelbrot zoom sequences."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from .renderer import RenderParameters


def compute_zoom_factors(frames: int, zoom_factor: float, *, final_zoom: float | None = None,
                         easing: str = "ease") -> np.ndarray:
    """Compute each frame's plane-width multiplier relative to the frame before it.

    The first frame always has a multiplier of 1. With ``final_zoom`` the
    multipliers of the whole sequence multiply to ``final_zoom``, spread over
    the frames by the ``easing`` curve ("linear" or "ease").
    """

    if frames <= 0:
        return np.array([], dtype=np.float64)

    if final_zoom is not None and final_zoom > 0:
        log_target = np.log(final_zoom)
        easing_mode = easing.lower()

        def ease_in_out(t: float) -> float:
            return 3 * t ** 2 - 2 * t ** 3

        ease = (lambda u: u) if easing_mode == "linear" else ease_in_out
        if frames == 1:
            alphas = np.array([1.0], dtype=np.float64)
        else:
            alphas = np.array([ease(i / (frames - 1)) for i in range(frames)], dtype=np.float64)
        alphas = np.clip(alphas, 0.0, 1.0)
        increments = np.diff(np.concatenate(([0.0], alphas)))
        return np.exp(increments * log_target)

    factors = np.full(frames, np.float64(zoom_factor), dtype=np.float64)
    factors[0] = 1.0
    return factors


def frame_plane_widths(plane_width: float, factors: np.ndarray) -> np.ndarray:
    return np.float64(plane_width) * np.cumprod(factors)


@dataclass(frozen=True)
class ZoomPlanner:
    """Derive the render parameters of every frame of a zoom towards a fixed center."""

    frames: int
    zoom_factor: float = 0.95
    final_zoom: float | None = None
    easing: str = "ease"

    def plane_widths(self, plane_width: float) -> np.ndarray:
        factors = compute_zoom_factors(
            self.frames, self.zoom_factor, final_zoom=self.final_zoom, easing=self.easing,
        )
        return frame_plane_widths(plane_width, factors)

    def frame_parameters(self, params: RenderParameters) -> list[RenderParameters]:
        return [replace(params, plane_width=float(width)) for width in self.plane_widths(params.plane_width)]
