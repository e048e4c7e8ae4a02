"""Named curve presets with their derivatives."""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from tangent_plot.errors import ConfigurationError
from tangent_plot.model.slope_source import CurveFunction


@dataclass(frozen=True)
class CurvePreset:
    name: str
    label: str
    curve: CurveFunction
    slope: CurveFunction

    def sample(self, x_min: float, x_max: float, count: int = 200) -> list[tuple[float, float]]:
        """Sample the curve on ``[x_min, x_max]`` for drawing."""
        xs = np.linspace(x_min, x_max, count)
        return [(float(x), float(self.curve(float(x)))) for x in xs]


CURVE_PRESETS: dict[str, CurvePreset] = {
    preset.name: preset
    for preset in (
        CurvePreset("parabola", "y = x² / 4", lambda x: x * x / 4.0, lambda x: x / 2.0),
        CurvePreset(
            "cubic",
            "y = x³ / 9 - x",
            lambda x: x**3 / 9.0 - x,
            lambda x: x * x / 3.0 - 1.0,
        ),
        CurvePreset("sine", "y = 2 sin x", lambda x: 2.0 * math.sin(x), lambda x: 2.0 * math.cos(x)),
        CurvePreset("exp", "y = e^(x / 2)", lambda x: math.exp(x / 2.0), lambda x: math.exp(x / 2.0) / 2.0),
    )
}


def curve_preset(name: str) -> CurvePreset:
    try:
        return CURVE_PRESETS[name.strip().lower()]
    except KeyError as exc:
        known = ", ".join(sorted(CURVE_PRESETS))
        raise ConfigurationError(f"Unknown curve {name!r}; expected one of {known}") from exc
