"""Sparse color gradients evaluated on demand.

A gradient stores a handful of anchors on the normalized interval [0, 1] and
computes the color at any index between them with an interpolation strategy.
Computed colors are memoized until the anchors change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import insort
from dataclasses import dataclass
from typing import Iterable

import numpy as np
from matplotlib import colormaps

from .colors import channels, to_argb

# Cache keys are indices quantized to this many steps per unit.
CACHE_RESOLUTION = 1_000_000_000


class GradientError(Exception):
    """Raised when a gradient is queried before it has anchors at 0.0 and 1.0."""


@dataclass(frozen=True, order=True)
class GradientAnchor:
    """A packed ARGB color pinned at a normalized index."""

    index: float
    color: int

    def __post_init__(self) -> None:
        if not 0.0 <= self.index <= 1.0:
            raise ValueError(f"gradient anchor index must be within [0, 1], got {self.index}.")

    @classmethod
    def first(cls, color: int) -> "GradientAnchor":
        return cls(0.0, color)

    @classmethod
    def last(cls, color: int) -> "GradientAnchor":
        return cls(1.0, color)


def _channel(value: float) -> int:
    return min(255, max(0, int(value)))


class Gradient(ABC):
    """Anchor storage, formed state and memoization shared by every strategy.

    Subclasses implement :meth:`interpolate`, which is only ever called on a
    formed gradient with an index inside [0, 1].
    """

    def __init__(self, anchors: Iterable[GradientAnchor] = ()) -> None:
        self._anchors: list[GradientAnchor] = []
        self._cache: dict[int, int] = {}
        for anchor in anchors:
            self.add_color(anchor)

    @property
    def anchors(self) -> tuple[GradientAnchor, ...]:
        return tuple(self._anchors)

    def __len__(self) -> int:
        return len(self._anchors)

    def add_color(self, anchor: GradientAnchor) -> None:
        """Insert ``anchor``, replacing any anchor already at its index."""

        self._discard(anchor.index)
        insort(self._anchors, anchor, key=lambda a: a.index)
        self.clear_cache()

    def remove_color(self, anchor: GradientAnchor) -> None:
        self._discard(anchor.index)
        self.clear_cache()

    def _discard(self, index: float) -> None:
        self._anchors = [a for a in self._anchors if a.index != index]

    def clear_cache(self) -> None:
        self._cache = {}

    def is_formed(self) -> bool:
        indices = {a.index for a in self._anchors}
        return 0.0 in indices and 1.0 in indices

    def color_at(self, index: float) -> int:
        """Return the packed color at ``index`` in [0, 1]."""

        if not 0.0 <= index <= 1.0:
            raise ValueError(f"gradient index must be within [0, 1], got {index}.")
        if not self.is_formed():
            raise GradientError("gradient needs anchors at 0.0 and 1.0 before it can be sampled.")

        key = round(index * CACHE_RESOLUTION)
        color = self._cache.get(key)
        if color is None:
            color = self.interpolate(index)
            self._cache[key] = color
        return color

    def color_for(self, position: int, length: int) -> int:
        """Return the color ``position`` steps along a gradient of ``length`` steps."""

        return self.color_at(position / length)

    def bracket(self, index: float) -> int:
        """Position of the first anchor pair enclosing ``index``, or 0 if none does."""

        for i in range(len(self._anchors) - 1):
            if self._anchors[i].index <= index <= self._anchors[i + 1].index:
                return i
        return 0

    @abstractmethod
    def interpolate(self, index: float) -> int:
        ...


class CatmullRomGradient(Gradient):
    """Catmull-Rom spline through the anchors, one spline per ARGB channel.

    The end anchors stand in for their own missing neighbours, which flattens
    the curve at both ends of the gradient.
    """

    def interpolate(self, index: float) -> int:
        last = len(self._anchors) - 1
        i1 = self.bracket(index)
        i0 = max(0, i1 - 1)
        i2 = min(last, i1 + 1)
        i3 = min(last, i1 + 2)

        x1 = self._anchors[i1].index
        x2 = self._anchors[i2].index
        t = (index - x1) / (x2 - x1)

        points = [channels(self._anchors[i].color) for i in (i0, i1, i2, i3)]
        argb = [
            _channel(catmull_rom(p0, p1, p2, p3, t))
            for p0, p1, p2, p3 in zip(*points)
        ]
        return to_argb(*argb)


class LinearGradient(Gradient):
    """Straight-line blend between the two anchors enclosing the index."""

    def interpolate(self, index: float) -> int:
        i1 = self.bracket(index)
        i2 = min(len(self._anchors) - 1, i1 + 1)
        start = self._anchors[i1]
        end = self._anchors[i2]
        t = (index - start.index) / (end.index - start.index)
        argb = [
            _channel(c1 + (c2 - c1) * t)
            for c1, c2 in zip(channels(start.color), channels(end.color))
        ]
        return to_argb(*argb)


def catmull_rom(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    t2 = t * t
    t3 = t2 * t
    return 0.5 * ((2 * p1)
                  + (-p0 + p2) * t
                  + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t2
                  + (-p0 + 3 * p1 - 3 * p2 + p3) * t3)


def gradient_from_colormap(name: str, anchors: int = 16) -> CatmullRomGradient:
    """Sample a matplotlib colormap into a formed Catmull-Rom gradient."""

    if anchors < 2:
        raise ValueError("a gradient needs at least two anchors.")

    cmap = colormaps[name]
    gradient = CatmullRomGradient()
    for index in np.linspace(0.0, 1.0, anchors):
        r, g, b, a = (int(round(float(v) * 255)) for v in cmap(float(index)))
        gradient.add_color(GradientAnchor(float(index), to_argb(a, r, g, b)))
    return gradient
