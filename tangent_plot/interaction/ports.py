"""Event, state and port types for the tangent controller."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from tangent_plot.geometry import AffineTransform, AnchorPoint, Box, ClientPoint, Point


class ControllerState(Enum):
    """Update state of a single line."""

    IDLE = "idle"
    UPDATING = "updating"


@dataclass(frozen=True)
class PointerEvent:
    client: ClientPoint
    target: Any = None
    kind: str = "mousemove"


class FrameProvider(Protocol):
    """Host oracle for transforms between items and the viewport box."""

    def transform_between(self, source: Any, target: Any) -> AffineTransform:
        ...

    def viewport_of(self, line: Any) -> tuple[Any, Box]:
        ...

    def screen_transform(self, line: Any) -> AffineTransform:
        ...

    def is_anchor(self, target: Any) -> bool:
        ...

    def anchor_center(self, anchor: Any) -> AnchorPoint:
        ...


class EndpointSink(Protocol):
    def write_endpoints(self, line: Any, first: Point, second: Point) -> None:
        ...
