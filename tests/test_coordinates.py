import pytest

from mandelzoom.coordinates import MappingParameters


def test_corners_of_bounds_mapping():
    mapping = MappingParameters.from_bounds(-2.0, 1.0, -1.0, 1.0, 800, 600)

    assert mapping.convert_x(0) == -2.0
    assert mapping.convert_y(0) == pytest.approx(1.0)
    assert mapping.convert(799, 599) == (pytest.approx(1.0), -1.0)


def test_top_row_is_maximum_y():
    mapping = MappingParameters.from_bounds(-2.0, 1.0, -1.0, 1.0, 800, 600)

    assert mapping.convert_y(0) > mapping.convert_y(599)
    assert mapping.max_y == pytest.approx(1.0)
    assert mapping.max_x == pytest.approx(1.0)


def test_center_width_keeps_pixel_aspect():
    mapping = MappingParameters.from_center_width(0.0, 0.0, 4.0, 5, 3)

    assert mapping.x_step == 1.0
    assert mapping.y_step == 1.0
    assert mapping.convert(2, 1) == (0.0, 0.0)
    assert mapping.convert(0, 0) == (-2.0, 1.0)
    assert mapping.convert(4, 2) == (2.0, -1.0)


def test_magnification_one_shows_width_four():
    mapping = MappingParameters.from_magnification(-0.5, 0.25, 1.0, 101, 51)

    assert mapping.plane_width == pytest.approx(4.0)
    assert mapping.convert(50, 25) == (pytest.approx(-0.5), pytest.approx(0.25))


def test_magnification_scales_width():
    mapping = MappingParameters.from_magnification(0.0, 0.0, 8.0, 11, 11)

    assert mapping.plane_width == pytest.approx(0.5)
    assert mapping.min_x == pytest.approx(-0.25)


def test_sub_pixel_positions_interpolate():
    mapping = MappingParameters.from_center_width(0.0, 0.0, 4.0, 5, 3)

    assert mapping.convert_x(0.5) == pytest.approx(-1.5)
    assert mapping.convert_y(0.5) == pytest.approx(0.5)


@pytest.mark.parametrize("width,height", [(1, 600), (800, 1), (0, 0), (-3, 10)])
def test_degenerate_images_are_rejected(width, height):
    with pytest.raises(ValueError):
        MappingParameters.from_bounds(-2.0, 1.0, -1.0, 1.0, width, height)
    with pytest.raises(ValueError):
        MappingParameters.from_center_width(0.0, 0.0, 4.0, width, height)
    with pytest.raises(ValueError):
        MappingParameters.from_magnification(0.0, 0.0, 1.0, width, height)
