"""Crop rectangle schema."""

from typing import Tuple
from pydantic import BaseModel, Field, model_validator


class CropBox(BaseModel):
    """Axis-aligned crop region in pixel coordinates, right and bottom exclusive."""

    x0: int = Field(ge=0, description="Left edge (inclusive)")
    y0: int = Field(ge=0, description="Top edge (inclusive)")
    x1: int = Field(description="Right edge (exclusive)")
    y1: int = Field(description="Bottom edge (exclusive)")

    @model_validator(mode="after")
    def _check_non_empty(self) -> "CropBox":
        if not (self.x0 < self.x1 and self.y0 < self.y1):
            raise ValueError(
                f"Empty crop box ({self.x0}, {self.y0}, {self.x1}, {self.y1}). "
                "Must satisfy: x0 < x1 and y0 < y1"
            )
        return self

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Box in the (left, upper, right, lower) order Pillow expects."""
        return self.x0, self.y0, self.x1, self.y1

    def contains(self, width: int, height: int) -> bool:
        """Whether the box lies fully inside a width x height raster."""
        return self.x1 <= width and self.y1 <= height
