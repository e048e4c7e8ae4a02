"""Slope sources for tangent bindings.

A binding gets its slope either from a fixed number declared on it or from
a derivative function supplied by the caller. The choice is made once, when
the binding is configured, and is not re-inspected per event.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Union

from tangent_plot.errors import ConfigurationError

CurveFunction = Callable[[float], float]


@dataclass(frozen=True)
class FixedSlope:
    value: float

    def at(self, x: float) -> float:
        return self.value


@dataclass(frozen=True)
class DerivativeSlope:
    function: CurveFunction

    def at(self, x: float) -> float:
        return float(self.function(x))


SlopeSource = Union[FixedSlope, DerivativeSlope]


def parse_slope_attribute(attribute: str | float) -> float:
    try:
        value = float(attribute.strip() if isinstance(attribute, str) else attribute)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Slope attribute {attribute!r} is not a number") from exc
    if not math.isfinite(value):
        raise ConfigurationError(f"Slope attribute {attribute!r} is not finite")
    return value


def resolve_slope_source(
    slope: CurveFunction | None = None,
    attribute: str | float | None = None,
) -> SlopeSource:
    """Pick the slope source for a binding.

    A callable ``slope`` wins over a declared ``attribute``. Raises
    :class:`ConfigurationError` when neither is available.
    """
    if slope is not None:
        if not callable(slope):
            raise ConfigurationError(f"Slope function {slope!r} is not callable")
        return DerivativeSlope(slope)
    if attribute is None or (isinstance(attribute, str) and not attribute.strip()):
        raise ConfigurationError("Binding has neither a slope function nor a slope attribute")
    return FixedSlope(parse_slope_attribute(attribute))
