"""Mapping between pixel indices and coordinates in the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

# Plane width shown at a magnification of 1.
BASE_PLANE_WIDTH = 4.0


def _check_dimensions(width: int, height: int) -> None:
    if width < 2 or height < 2:
        raise ValueError(f"image must be at least 2x2 pixels, got {width}x{height}.")


@dataclass(frozen=True)
class MappingParameters:
    """Describe how the pixel grid of an image samples the complex plane.

    Pixel column 0 maps to ``min_x`` and the last column to the maximum x.
    Rows are flipped: row 0 is the top of the image and maps to the maximum
    y, the last row maps to ``min_y``.
    """

    min_x: float
    min_y: float
    x_step: float
    y_step: float
    last_row: float
    x_res: int
    y_res: int

    @classmethod
    def from_bounds(cls, min_x: float, max_x: float, min_y: float, max_y: float,
                    width: int, height: int) -> "MappingParameters":
        _check_dimensions(width, height)
        last_col = float(width - 1)
        last_row = float(height - 1)
        return cls(
            min_x=float(min_x),
            min_y=float(min_y),
            x_step=(max_x - min_x) / last_col,
            y_step=(max_y - min_y) / last_row,
            last_row=last_row,
            x_res=int(width),
            y_res=int(height),
        )

    @classmethod
    def from_center_width(cls, x_center: float, y_center: float, plane_width: float,
                          width: int, height: int) -> "MappingParameters":
        """Build a mapping whose plane height keeps the pixel aspect ratio."""

        _check_dimensions(width, height)
        last_col = float(width - 1)
        last_row = float(height - 1)
        plane_height = (last_row / last_col) * plane_width

        return cls(
            min_x=x_center - plane_width / 2.0,
            min_y=y_center - plane_height / 2.0,
            x_step=plane_width / last_col,
            y_step=plane_height / last_row,
            last_row=last_row,
            x_res=int(width),
            y_res=int(height),
        )

    @classmethod
    def from_magnification(cls, x_center: float, y_center: float, magnification: float,
                           width: int, height: int) -> "MappingParameters":
        """A magnification of 1 shows a plane width of 4."""

        return cls.from_center_width(x_center, y_center, BASE_PLANE_WIDTH / magnification, width, height)

    @property
    def max_x(self) -> float:
        return self.min_x + self.x_step * (self.x_res - 1)

    @property
    def max_y(self) -> float:
        return self.min_y + self.y_step * self.last_row

    @property
    def plane_width(self) -> float:
        return self.x_step * (self.x_res - 1)

    def convert_x(self, px: float) -> float:
        return self.min_x + px * self.x_step

    def convert_y(self, py: float) -> float:
        return self.min_y + (self.last_row - py) * self.y_step

    def convert(self, px: float, py: float) -> tuple[float, float]:
        return self.convert_x(px), self.convert_y(py)
