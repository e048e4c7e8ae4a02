"""PyQt5 graphics-view host for tangent lines."""
from .decorations import StyleSheetDecorator
from .event_hub import EVENT_TYPES, EventHub
from .frames import QtFrameProvider, QtLineSink, affine_to_qtransform, qtransform_to_affine
from .plot_session import PlotSession, install_plot

__all__ = [
    "EVENT_TYPES",
    "EventHub",
    "PlotSession",
    "QtFrameProvider",
    "QtLineSink",
    "StyleSheetDecorator",
    "affine_to_qtransform",
    "install_plot",
    "qtransform_to_affine",
]
