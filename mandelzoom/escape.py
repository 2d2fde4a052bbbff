"""Escape-time evaluation of a single point of the Mandelbrot set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

PERIODICITY_THRESHOLD = 1e-17
TORTOISE_LAG = 10
INITIAL_CHECK_INTERVAL = 3
# Refreshes of the periodicity checkpoint before its interval doubles.
REFRESHES_PER_DOUBLING = 10


class Discovery(Enum):
    """Which rule classified the point."""

    MAX_ITERATION = auto()
    BULB = auto()
    CARDIOID = auto()
    PERIOD = auto()
    ESCAPED = auto()


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of iterating one point of the plane."""

    iterations: int
    x: float
    y: float
    in_set: bool
    discovery: Discovery


def in_main_cardioid(x: float, y: float) -> bool:
    q = (x - 0.25) * (x - 0.25) + y * y
    return q * (q + (x - 0.25)) < 0.25 * y * y


def in_period2_bulb(x: float, y: float) -> bool:
    return (x + 1.0) * (x + 1.0) + y * y < 1.0 / 16.0


def _close(ax: float, ay: float, bx: float, by: float) -> bool:
    return abs(ax - bx) < PERIODICITY_THRESHOLD and abs(ay - by) < PERIODICITY_THRESHOLD


def evaluate_point(x: float, y: float, max_iterations: int, bailout: float) -> EvaluationResult:
    """Iterate ``z <- z**2 + c`` for ``c = x + iy`` starting from zero.

    ``bailout`` is compared against the squared magnitude of ``z``. Points in
    the main cardioid or the period-2 bulb are answered without iterating.
    Two independent periodicity checks run inside the loop: a comparison
    against a checkpoint refreshed at a growing interval, and a comparison
    against a tortoise checkpoint taken every ``TORTOISE_LAG`` iterations.
    The second only finds cycles whose period divides that lag.
    """

    if in_main_cardioid(x, y):
        return EvaluationResult(max_iterations, x, y, True, Discovery.CARDIOID)

    if in_period2_bulb(x, y):
        return EvaluationResult(max_iterations, x, y, True, Discovery.BULB)

    zx = zy = 0.0
    zx2 = zy2 = 0.0

    hx = hy = 0.0
    check_interval = INITIAL_CHECK_INTERVAL
    check_counter = 0
    update_counter = 0

    tx = ty = 0.0

    for i in range(max_iterations):
        zy = 2.0 * zx * zy + y
        zx = zx2 - zy2 + x
        zx2 = zx * zx
        zy2 = zy * zy

        if zx2 + zy2 > bailout:
            return EvaluationResult(i, zx, zy, False, Discovery.ESCAPED)

        if _close(zx, zy, hx, hy):
            return EvaluationResult(i, zx, zy, True, Discovery.PERIOD)

        if i == TORTOISE_LAG:
            tx, ty = zx, zy
        elif i > TORTOISE_LAG and i % TORTOISE_LAG == 0:
            if _close(zx, zy, tx, ty):
                return EvaluationResult(i, zx, zy, True, Discovery.PERIOD)

        if check_counter >= check_interval:
            check_counter = 0
            update_counter += 1
            if update_counter >= REFRESHES_PER_DOUBLING:
                check_interval *= 2
                update_counter = 0
            hx, hy = zx, zy
        else:
            check_counter += 1

    return EvaluationResult(max_iterations, zx, zy, True, Discovery.MAX_ITERATION)
