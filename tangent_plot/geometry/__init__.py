from .affine import AffineTransform
from .frames import (
    ANCHOR_FRAME,
    CLIENT_FRAME,
    LINE_FRAME,
    VIEWPORT_FRAME,
    AnchorPoint,
    Box,
    ClientPoint,
    EndpointPair,
    LinePoint,
    Point,
    ViewportPoint,
)
from .line_equation import (
    GeneralLine,
    endpoints_in_frame,
    intersect_box,
    parametric_equation,
    to_general,
)

__all__ = [
    "AffineTransform",
    "AnchorPoint",
    "Box",
    "ClientPoint",
    "EndpointPair",
    "GeneralLine",
    "LinePoint",
    "Point",
    "ViewportPoint",
    "ANCHOR_FRAME",
    "CLIENT_FRAME",
    "LINE_FRAME",
    "VIEWPORT_FRAME",
    "endpoints_in_frame",
    "intersect_box",
    "parametric_equation",
    "to_general",
]
