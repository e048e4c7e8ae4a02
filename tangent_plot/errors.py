"""Error taxonomy for tangent line updates."""
from __future__ import annotations


class TangentPlotError(Exception):
    """Base class for failures that abort a single tangent update."""


class TransformError(TangentPlotError):
    """An affine transform is non-invertible, non-finite or does not chain."""


class GeometryError(TangentPlotError):
    """A line or clip box degenerates and cannot produce endpoints."""


class ConfigurationError(TangentPlotError):
    """A binding is missing its slope, its target or a usable declaration."""
