"""Explicit startup and teardown of the tangent wiring for one view."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from PyQt5 import QtWidgets

from tangent_plot.interaction import EndpointSink, FrameProvider, TangentController
from tangent_plot.model import PlotRegistry
from tangent_plot.scene.decorations import StyleSheetDecorator
from tangent_plot.scene.event_hub import EventHub, qt_event_types
from tangent_plot.scene.frames import QtFrameProvider, QtLineSink

logger = logging.getLogger(__name__)


@dataclass
class PlotSession:
    hub: EventHub
    decorator: StyleSheetDecorator
    controllers: dict[str, TangentController] = field(default_factory=dict)
    closed: bool = False

    def controller(self, line_id: str) -> TangentController:
        return self.controllers[line_id]

    def close(self) -> None:
        if self.closed:
            return
        self.hub.disconnect_all()
        self.closed = True
        logger.info("Closed plot session with %d line(s)", len(self.controllers))


def install_plot(
    registry: PlotRegistry[QtWidgets.QGraphicsLineItem],
    view: QtWidgets.QGraphicsView,
    *,
    frames: FrameProvider | None = None,
    sink: EndpointSink | None = None,
) -> PlotSession:
    """Wire every binding and decoration in ``registry`` to ``view``.

    Bindings without an explicit observer listen on the view's viewport.
    Unresolvable binding targets and unsupported event names raise
    :class:`ConfigurationError` before any handler is installed.
    """
    frames = frames or QtFrameProvider(view)
    sink = sink or QtLineSink()
    targets = [(binding, registry.resolve(binding)) for binding in registry.bindings]
    for declared in (*registry.bindings, *registry.decorations):
        qt_event_types(declared.events)

    hub = EventHub(view, parent=view)
    session = PlotSession(hub=hub, decorator=StyleSheetDecorator(view))
    by_line = {id(line): line_id for line_id, line in registry.lines.items()}
    for line_id, line in registry.lines.items():
        session.controllers[line_id] = TangentController(line, frames, sink)

    default_observer = view.viewport()
    for binding, line in targets:
        controller = session.controllers[by_line[id(line)]]
        observer = default_observer if binding.observer is None else binding.observer
        hub.connect(observer, binding.events, controller.handler_for(binding))

    for decoration in registry.decorations:
        observer = default_observer if decoration.observer is None else decoration.observer
        hub.connect(
            observer,
            decoration.events,
            lambda _event, rule=decoration.rule: session.decorator.insert_rule(rule),
        )

    view.destroyed.connect(lambda _view=None: session.close())
    logger.info(
        "Installed %d tangent binding(s) and %d decoration(s) on %d line(s)",
        len(registry.bindings),
        len(registry.decorations),
        len(registry.lines),
    )
    return session
