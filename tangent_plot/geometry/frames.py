"""Coordinate frame labels and frame-tagged point aliases.

A point never carries its frame at runtime; the alias used in a signature
documents which frame the tuple lives in. Transforms do carry frame labels
(see :mod:`tangent_plot.geometry.affine`) so that a mismatched composition is
caught when the chain is built rather than when the line lands somewhere odd.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NewType

from tangent_plot.errors import GeometryError

Point = tuple[float, float]

LinePoint = NewType("LinePoint", Point)
ViewportPoint = NewType("ViewportPoint", Point)
ClientPoint = NewType("ClientPoint", Point)
AnchorPoint = NewType("AnchorPoint", Point)

LINE_FRAME = "line"
VIEWPORT_FRAME = "viewport"
CLIENT_FRAME = "client"
ANCHOR_FRAME = "anchor"


@dataclass(frozen=True)
class Box:
    """Axis-aligned clip rectangle in the frame of the line it clips."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def validate(self) -> "Box":
        """Return ``self`` or raise if the box cannot bound a line."""
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(value) for value in values):
            raise GeometryError(f"Clip box has non-finite bounds: {values}")
        if self.width <= 0 or self.height <= 0:
            raise GeometryError(
                f"Clip box has no area: width={self.width}, height={self.height}"
            )
        return self


@dataclass(frozen=True)
class EndpointPair:
    first: Point
    second: Point

    def __iter__(self):
        yield self.first
        yield self.second
