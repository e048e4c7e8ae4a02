"""Interaction layer: bridges pointer events to the geometry engine."""
from .ports import ControllerState, EndpointSink, FrameProvider, PointerEvent
from .tangent_controller import TangentController

__all__ = [
    "ControllerState",
    "EndpointSink",
    "FrameProvider",
    "PointerEvent",
    "TangentController",
]
