"""Qt graphics-view adapters for frames, transforms and line endpoints."""
from __future__ import annotations

from PyQt5 import QtCore, QtGui, QtWidgets

from tangent_plot.errors import TransformError
from tangent_plot.geometry import (
    ANCHOR_FRAME,
    CLIENT_FRAME,
    LINE_FRAME,
    VIEWPORT_FRAME,
    AffineTransform,
    AnchorPoint,
    Box,
    Point,
)


def qtransform_to_affine(
    transform: QtGui.QTransform,
    source: str | None = None,
    target: str | None = None,
) -> AffineTransform:
    """Convert a ``QTransform`` (row-vector convention) to an affine matrix."""
    if not transform.isAffine():
        raise TransformError("Projective transforms cannot move a tangent line")
    return AffineTransform(
        a=transform.m11(),
        b=transform.m12(),
        c=transform.m21(),
        d=transform.m22(),
        e=transform.dx(),
        f=transform.dy(),
        source=source,
        target=target,
    )


def affine_to_qtransform(transform: AffineTransform) -> QtGui.QTransform:
    return QtGui.QTransform(
        transform.a, transform.b, transform.c, transform.d, transform.e, transform.f
    )


def frame_label(obj: object) -> str:
    if isinstance(obj, QtWidgets.QGraphicsScene):
        return VIEWPORT_FRAME
    if isinstance(obj, QtWidgets.QGraphicsEllipseItem):
        return ANCHOR_FRAME
    return LINE_FRAME


def box_from_rect(rect: QtCore.QRectF) -> Box:
    return Box(rect.x(), rect.y(), rect.width(), rect.height())


class QtFrameProvider:
    """Answers frame questions for items shown in one ``QGraphicsView``.

    The viewport box is the scene rect, which is axis-aligned in scene
    coordinates; client coordinates are those of the view's viewport widget.
    """

    def __init__(self, view: QtWidgets.QGraphicsView) -> None:
        self._view = view

    def transform_between(self, source: QtWidgets.QGraphicsItem, target: object) -> AffineTransform:
        if isinstance(target, QtWidgets.QGraphicsScene):
            qtransform = source.sceneTransform()
        else:
            qtransform, ok = source.itemTransform(target)
            if not ok:
                raise TransformError(f"No transform from {source!r} to {target!r}")
        return qtransform_to_affine(qtransform, frame_label(source), frame_label(target))

    def viewport_of(self, line: QtWidgets.QGraphicsItem) -> tuple[QtWidgets.QGraphicsScene, Box]:
        scene = line.scene()
        if scene is None:
            raise TransformError(f"{line!r} is not part of a scene")
        return scene, box_from_rect(scene.sceneRect())

    def screen_transform(self, line: QtWidgets.QGraphicsItem) -> AffineTransform:
        scene, _box = self.viewport_of(line)
        to_client = qtransform_to_affine(
            self._view.viewportTransform(), VIEWPORT_FRAME, CLIENT_FRAME
        )
        return to_client.multiply(self.transform_between(line, scene))

    def is_anchor(self, target: object) -> bool:
        return isinstance(target, QtWidgets.QGraphicsEllipseItem)

    def anchor_center(self, anchor: QtWidgets.QGraphicsEllipseItem) -> AnchorPoint:
        center = anchor.rect().center()
        return AnchorPoint((center.x(), center.y()))


class QtLineSink:
    """Writes both endpoints of a ``QGraphicsLineItem`` in one call."""

    def write_endpoints(
        self, line: QtWidgets.QGraphicsLineItem, first: Point, second: Point
    ) -> None:
        line.setLine(QtCore.QLineF(first[0], first[1], second[0], second[1]))
