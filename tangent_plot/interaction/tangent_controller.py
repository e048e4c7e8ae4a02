"""Keeps a line tangent to a curve at the point under the pointer."""
from __future__ import annotations

import logging
from typing import Any, Callable

from tangent_plot.errors import TangentPlotError
from tangent_plot.geometry import (
    EndpointPair,
    LinePoint,
    Point,
    endpoints_in_frame,
)
from tangent_plot.interaction.ports import (
    ControllerState,
    EndpointSink,
    FrameProvider,
    PointerEvent,
)
from tangent_plot.model import CurveFunction, TangentBinding

logger = logging.getLogger(__name__)

EventHandler = Callable[[PointerEvent], bool]


def snap_to_curve(point: LinePoint, curve: CurveFunction | None) -> LinePoint:
    """Move ``point`` vertically onto ``curve``; unchanged without a curve."""
    if curve is None:
        return point
    x = point[0]
    return LinePoint((x, float(curve(x))))


class TangentController:
    """Owns the endpoints of one line and recomputes them per pointer event.

    The controller never touches the host scene directly: transforms come
    from a :class:`FrameProvider` and the result is written through an
    :class:`EndpointSink` in a single call.
    """

    def __init__(self, line: Any, frames: FrameProvider, sink: EndpointSink) -> None:
        self.line = line
        self._frames = frames
        self._sink = sink
        self.state = ControllerState.IDLE
        self.last_endpoints: EndpointPair | None = None

    def resolve_event_point(self, event: PointerEvent) -> LinePoint:
        target = event.target
        if target is not None and self._frames.is_anchor(target):
            center = self._frames.anchor_center(target)
            to_line = self._frames.transform_between(target, self.line)
            return LinePoint(to_line.map_point(center))
        to_line = self._frames.screen_transform(self.line).inverse()
        return LinePoint(to_line.map_point(event.client))

    def endpoints_for(self, point: LinePoint, slope: float) -> EndpointPair:
        viewport, box = self._frames.viewport_of(self.line)
        ambient = self._frames.transform_between(self.line, viewport)
        return endpoints_in_frame(point, slope, ambient, box)

    def apply(self, first: Point, second: Point) -> None:
        """Write both endpoints to the line in a single sink call."""
        self._sink.write_endpoints(self.line, first, second)
        self.last_endpoints = EndpointPair(first, second)

    def update(self, event: PointerEvent, binding: TangentBinding) -> EndpointPair | None:
        """Recompute and apply the endpoints for ``event``.

        Returns ``None`` when an update is already running for this line.
        Errors propagate and leave the line unchanged.
        """
        if self.state is ControllerState.UPDATING:
            logger.debug("Ignoring re-entrant %s event for %r", event.kind, self.line)
            return None
        self.state = ControllerState.UPDATING
        try:
            point = snap_to_curve(self.resolve_event_point(event), binding.curve)
            endpoints = self.endpoints_for(point, binding.slope.at(point[0]))
            self.apply(endpoints.first, endpoints.second)
            return endpoints
        finally:
            self.state = ControllerState.IDLE

    def handler_for(self, binding: TangentBinding) -> EventHandler:
        """Return an event handler that moves this line for ``binding``."""

        def handle(event: PointerEvent) -> bool:
            try:
                return self.update(event, binding) is not None
            except TangentPlotError as exc:
                logger.warning("Skipping tangent update for %s: %s", binding.href, exc)
                return False

        return handle
