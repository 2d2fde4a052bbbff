"""Turn escape-time results into packed colors."""

from __future__ import annotations

import logging
import math

from .colors import BLACK, CORNFLOWER_BLUE, RED, TRANSPARENT, YELLOW
from .escape import Discovery, EvaluationResult
from .gradient import Gradient, GradientError

logger = logging.getLogger(__name__)

LN2 = math.log(2.0)
# Smoothed positions wrap around a gradient of this many steps.
FIXED_GRADIENT_LENGTH = 100000
FALLBACK_COLOR = TRANSPARENT

DISCOVERY_COLORS = {
    Discovery.MAX_ITERATION: BLACK,
    Discovery.BULB: RED,
    Discovery.CARDIOID: YELLOW,
    Discovery.PERIOD: CORNFLOWER_BLUE,
}


class ColorMapper:
    """Color points with a smoothed escape count looked up in a gradient.

    Interior points are black, or, with ``show_discovery``, a highlight color
    naming the rule that classified them.
    """

    def __init__(self, bailout: float, gradient: Gradient, show_discovery: bool = False,
                 multiplier: float = 1.0) -> None:
        if bailout <= 1.0:
            raise ValueError(f"bailout must be greater than 1, got {bailout}.")
        if not math.isfinite(multiplier):
            raise ValueError(f"multiplier must be finite, got {multiplier}.")
        self.bailout = bailout
        self.gradient = gradient
        self.show_discovery = show_discovery
        self.multiplier = multiplier
        self._ln_ln_bailout = math.log(math.log(bailout))

    def normalized_iteration_count(self, x: float, y: float) -> float:
        radius = math.hypot(x, y)
        return (self._ln_ln_bailout - math.log(math.log(radius))) / LN2

    def gradient_index(self, result: EvaluationResult) -> float:
        """Position in [0, 1) of an escaped point on the gradient."""

        position = result.iterations + self.normalized_iteration_count(result.x, result.y)
        position = math.sqrt(max(position, 0.0)) * self.multiplier
        index = int(position) % FIXED_GRADIENT_LENGTH
        return index / FIXED_GRADIENT_LENGTH

    def color(self, result: EvaluationResult) -> int:
        if result.in_set:
            if self.show_discovery:
                return DISCOVERY_COLORS[result.discovery]
            return BLACK

        index = self.gradient_index(result)
        try:
            return self.gradient.color_at(index)
        except GradientError as exc:
            logger.warning("Could not color gradient index %s: %s", index, exc)
            return FALLBACK_COLOR
