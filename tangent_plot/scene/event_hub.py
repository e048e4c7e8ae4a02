"""Routes named Qt events from observer widgets to pointer handlers."""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from PyQt5 import QtCore, QtGui, QtWidgets, sip

from tangent_plot.errors import ConfigurationError
from tangent_plot.geometry import ClientPoint
from tangent_plot.interaction import PointerEvent

logger = logging.getLogger(__name__)

PointerHandler = Callable[[PointerEvent], object]

EVENT_TYPES: dict[str, QtCore.QEvent.Type] = {
    "mousemove": QtCore.QEvent.MouseMove,
    "mousedown": QtCore.QEvent.MouseButtonPress,
    "mouseup": QtCore.QEvent.MouseButtonRelease,
    "dblclick": QtCore.QEvent.MouseButtonDblClick,
    "mouseenter": QtCore.QEvent.Enter,
    "mouseleave": QtCore.QEvent.Leave,
}
_EVENT_NAMES = {qt_type: name for name, qt_type in EVENT_TYPES.items()}


def qt_event_types(events: Iterable[str]) -> list[QtCore.QEvent.Type]:
    """Map event type names to Qt event types, rejecting unknown names."""
    qt_types = []
    for name in events:
        qt_type = EVENT_TYPES.get(name)
        if qt_type is None:
            known = ", ".join(sorted(EVENT_TYPES))
            raise ConfigurationError(f"Unsupported event type {name!r}; expected one of {known}")
        qt_types.append(qt_type)
    return qt_types


class EventHub(QtCore.QObject):
    """Event filter shared by every binding of one plot view.

    Events are observed, never consumed: the filter always lets Qt continue
    delivering them so item dragging keeps working underneath.
    """

    def __init__(self, view: QtWidgets.QGraphicsView, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent)
        self._view = view
        self._handlers: dict[QtCore.QObject, dict[QtCore.QEvent.Type, list[PointerHandler]]] = {}

    def connect(self, observer: QtCore.QObject, events: Iterable[str], handler: PointerHandler) -> None:
        qt_types = qt_event_types(events)

        by_type = self._handlers.get(observer)
        if by_type is None:
            by_type = {}
            self._handlers[observer] = by_type
            observer.installEventFilter(self)
        for qt_type in qt_types:
            if qt_type == QtCore.QEvent.MouseMove and isinstance(observer, QtWidgets.QWidget):
                observer.setMouseTracking(True)
            by_type.setdefault(qt_type, []).append(handler)

    def disconnect_all(self) -> None:
        for observer in self._handlers:
            if not sip.isdeleted(observer):
                observer.removeEventFilter(self)
        self._handlers.clear()

    def handler_count(self) -> int:
        return sum(
            len(handlers)
            for by_type in self._handlers.values()
            for handlers in by_type.values()
        )

    def eventFilter(self, watched: QtCore.QObject, event: QtCore.QEvent) -> bool:  # noqa: N802
        handlers = self._handlers.get(watched, {}).get(event.type())
        if handlers:
            self.dispatch(self.pointer_event(watched, event), handlers)
        return super().eventFilter(watched, event)

    def dispatch(self, pointer: PointerEvent, handlers: Iterable[PointerHandler]) -> None:
        for handler in list(handlers):
            try:
                handler(pointer)
            except Exception:
                logger.exception("Unexpected error in %s handler", pointer.kind)

    def pointer_event(self, watched: QtCore.QObject, event: QtCore.QEvent) -> PointerEvent:
        viewport = self._view.viewport()
        position = self._viewport_position(watched, event, viewport)
        target = self._view.itemAt(position.toPoint())
        return PointerEvent(
            client=ClientPoint((position.x(), position.y())),
            target=target,
            kind=_EVENT_NAMES.get(event.type(), "unknown"),
        )

    @staticmethod
    def _viewport_position(
        watched: QtCore.QObject, event: QtCore.QEvent, viewport: QtWidgets.QWidget
    ) -> QtCore.QPointF:
        if isinstance(event, (QtGui.QMouseEvent, QtGui.QEnterEvent)):
            local = event.localPos()
            if watched is viewport or not isinstance(watched, QtWidgets.QWidget):
                return QtCore.QPointF(local)
            global_pos = watched.mapToGlobal(local.toPoint())
            return QtCore.QPointF(viewport.mapFromGlobal(global_pos))
        return QtCore.QPointF(viewport.mapFromGlobal(QtGui.QCursor.pos()))
