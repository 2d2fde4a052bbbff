import logging

import pytest

from mandelzoom.coloring import FALLBACK_COLOR, FIXED_GRADIENT_LENGTH, ColorMapper
from mandelzoom.colors import BLACK, CORNFLOWER_BLUE, RED, WHITE, YELLOW, to_rgb
from mandelzoom.escape import Discovery, EvaluationResult, evaluate_point
from mandelzoom.gradient import CatmullRomGradient, GradientAnchor

START = to_rgb(0, 8, 106)


@pytest.fixture
def gradient():
    return CatmullRomGradient([
        GradientAnchor.first(START),
        GradientAnchor(0.5, to_rgb(246, 251, 225)),
        GradientAnchor.last(WHITE),
    ])


def interior(discovery):
    return EvaluationResult(100, 0.1, 0.1, True, discovery)


@pytest.mark.parametrize("discovery", [Discovery.MAX_ITERATION, Discovery.BULB,
                                       Discovery.CARDIOID, Discovery.PERIOD])
def test_interior_is_black_by_default(gradient, discovery):
    mapper = ColorMapper(10.0, gradient)

    assert mapper.color(interior(discovery)) == BLACK


@pytest.mark.parametrize("discovery,expected", [
    (Discovery.MAX_ITERATION, BLACK),
    (Discovery.BULB, RED),
    (Discovery.CARDIOID, YELLOW),
    (Discovery.PERIOD, CORNFLOWER_BLUE),
])
def test_discovery_highlight_colors(gradient, discovery, expected):
    mapper = ColorMapper(10.0, gradient, show_discovery=True)

    assert mapper.color(interior(discovery)) == expected


def test_normalized_iteration_count_at_half_bailout_radius(gradient):
    mapper = ColorMapper(4.0, gradient)

    # ln(ln 4) - ln(ln 2) == ln 2
    assert mapper.normalized_iteration_count(2.0, 0.0) == pytest.approx(1.0)


def test_gradient_index_is_smoothed_and_wrapped(gradient):
    mapper = ColorMapper(4.0, gradient, multiplier=1000.25)
    result = EvaluationResult(3, 2.0, 0.0, False, Discovery.ESCAPED)

    # sqrt(3 + 1) * 1000.25 truncates to 2000.
    assert mapper.gradient_index(result) == pytest.approx(2000 / FIXED_GRADIENT_LENGTH)


def test_gradient_index_stays_below_one(gradient):
    mapper = ColorMapper(4.0, gradient, multiplier=123456.0)
    for iterations in range(0, 200, 7):
        index = mapper.gradient_index(EvaluationResult(iterations, 2.5, 0.5, False, Discovery.ESCAPED))
        assert 0.0 <= index < 1.0


def test_escaped_color_comes_from_gradient(gradient):
    mapper = ColorMapper(4.0, gradient, multiplier=50.0)
    result = evaluate_point(0.4, 0.3, 200, 4.0)

    assert not result.in_set
    assert mapper.color(result) == gradient.color_at(mapper.gradient_index(result))


def test_far_escape_uses_start_of_gradient(gradient):
    # A large final radius makes the corrected count negative.
    mapper = ColorMapper(4.0, gradient, multiplier=5000.0)
    result = EvaluationResult(0, 100.0, 0.0, False, Discovery.ESCAPED)

    assert mapper.gradient_index(result) == 0.0
    assert mapper.color(result) == START


def test_unformed_gradient_falls_back_and_logs(caplog):
    broken = CatmullRomGradient([GradientAnchor(0.5, WHITE)])
    mapper = ColorMapper(4.0, broken, multiplier=10.0)
    result = EvaluationResult(2, 3.0, 0.0, False, Discovery.ESCAPED)

    with caplog.at_level(logging.WARNING, logger="mandelzoom.coloring"):
        color = mapper.color(result)

    assert color == FALLBACK_COLOR
    assert "Could not color gradient index" in caplog.text


def test_interior_does_not_touch_unformed_gradient():
    mapper = ColorMapper(4.0, CatmullRomGradient())

    assert mapper.color(interior(Discovery.CARDIOID)) == BLACK


@pytest.mark.parametrize("bailout", [1.0, 0.5, 0.0])
def test_bailout_must_exceed_one(gradient, bailout):
    with pytest.raises(ValueError):
        ColorMapper(bailout, gradient)


@pytest.mark.parametrize("multiplier", [float("nan"), float("inf"), float("-inf")])
def test_multiplier_must_be_finite(gradient, multiplier):
    with pytest.raises(ValueError):
        ColorMapper(4.0, gradient, multiplier=multiplier)
