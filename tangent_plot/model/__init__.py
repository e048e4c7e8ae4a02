from .curves import CURVE_PRESETS, CurvePreset, curve_preset
from .plot_registry import (
    DEFAULT_EVENTS,
    Decoration,
    PlotRegistry,
    TangentBinding,
    parse_event_types,
    resolve_local_reference,
)
from .slope_source import (
    CurveFunction,
    DerivativeSlope,
    FixedSlope,
    SlopeSource,
    resolve_slope_source,
)

__all__ = [
    "CURVE_PRESETS",
    "CurveFunction",
    "CurvePreset",
    "DEFAULT_EVENTS",
    "Decoration",
    "DerivativeSlope",
    "FixedSlope",
    "PlotRegistry",
    "SlopeSource",
    "TangentBinding",
    "curve_preset",
    "parse_event_types",
    "resolve_local_reference",
    "resolve_slope_source",
]
