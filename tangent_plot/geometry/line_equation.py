"""Point-slope lines clipped to an axis-aligned viewport box.

A line through ``(x0, y0)`` with slope ``m`` is first written in parametric
form as the affine matrix

    | 1  0  x0 |
    | m  1  y0 |

so that applying it to ``(t, 0, 1)`` gives the point at parameter ``t``.
Because the parametric form is itself an affine transform it can be pushed
into another frame by plain matrix multiplication, which keeps the
direction and base point consistent under any skew, scale or rotation.
Clipping is done on the general form ``b*x + d*y + f = 0`` in the frame
where the box is axis-aligned, and the endpoints are mapped back.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from tangent_plot.errors import GeometryError
from tangent_plot.geometry.affine import AffineTransform
from tangent_plot.geometry.frames import Box, EndpointPair, Point, ViewportPoint

PARAMETER_FRAME = "parameter"


@dataclass(frozen=True)
class GeneralLine:
    """Coefficients of ``b*x + d*y + f = 0``."""

    b: float
    d: float
    f: float

    def x_at(self, y: float) -> ViewportPoint:
        return ViewportPoint((-(self.d * y + self.f) / self.b, y))

    def y_at(self, x: float) -> ViewportPoint:
        return ViewportPoint((x, -(self.b * x + self.f) / self.d))

    def residual(self, point: Point) -> float:
        return self.b * point[0] + self.d * point[1] + self.f


def parametric_equation(
    point: Point, slope: float, frame: str | None = None
) -> AffineTransform:
    """Return the parametric matrix of the line through ``point`` with ``slope``.

    The result maps the parameter frame into ``frame``, the frame ``point``
    is expressed in.
    """
    if not math.isfinite(slope):
        raise GeometryError(f"Slope must be finite, got {slope!r}")
    return AffineTransform(
        a=1.0,
        b=float(slope),
        c=0.0,
        d=1.0,
        e=float(point[0]),
        f=float(point[1]),
        source=PARAMETER_FRAME,
        target=frame,
    )


def to_general(parametric: AffineTransform) -> GeneralLine:
    """Eliminate the parameter from a parametric line matrix.

    Only the direction column ``(a, b)`` and translation ``(e, f)`` are used.
    """
    general = GeneralLine(
        b=parametric.b,
        d=-parametric.a,
        f=parametric.a * parametric.f - parametric.b * parametric.e,
    )
    if general.b == 0.0 and general.d == 0.0:
        raise GeometryError("Line direction is zero; the line is a single point")
    if not all(math.isfinite(value) for value in (general.b, general.d, general.f)):
        raise GeometryError(f"Line coefficients are not finite: {general}")
    return general


def intersect_box(general: GeneralLine, box: Box) -> EndpointPair:
    """Clip ``general`` to the edges of ``box``.

    The edge pair is chosen so that the solve divides by whichever of ``b``
    and ``d`` dominates once weighted by the box extent. A horizontal line
    (``b == 0``) therefore always clips against the left and right edges.
    """
    box.validate()
    if box.height * abs(general.d) < box.width * abs(general.b):
        # Bound vertically
        return EndpointPair(general.x_at(box.y), general.x_at(box.bottom))

    # Bound horizontally
    return EndpointPair(general.y_at(box.x), general.y_at(box.right))


def endpoints_in_frame(
    point: Point, slope: float, ambient: AffineTransform, box: Box
) -> EndpointPair:
    """Endpoints of the clipped line, expressed in the frame of ``point``.

    ``ambient`` maps the frame of ``point`` into the frame where ``box`` is
    axis-aligned.
    """
    inverse = ambient.inverse()
    parametric = parametric_equation(point, slope, frame=ambient.source)
    general = to_general(ambient.multiply(parametric))
    first, second = intersect_box(general, box)
    return EndpointPair(inverse.map_point(first), inverse.map_point(second))
