import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import logging

import pytest

pytest.importorskip("PyQt5")

from PyQt5 import QtCore, QtGui, QtWidgets

from tangent_plot.errors import ConfigurationError, TransformError
from tangent_plot.geometry import Box
from tangent_plot.interaction import PointerEvent, TangentController
from tangent_plot.model import DerivativeSlope, PlotRegistry, TangentBinding, curve_preset
from tangent_plot.scene import (
    EventHub,
    QtFrameProvider,
    QtLineSink,
    StyleSheetDecorator,
    affine_to_qtransform,
    install_plot,
    qtransform_to_affine,
)

PLOT = QtGui.QTransform(40.0, 0.0, 0.0, -40.0, 240.0, 240.0)


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


@pytest.fixture
def plot_view(qapp):
    scene = QtWidgets.QGraphicsScene(0.0, 0.0, 480.0, 480.0)
    view = QtWidgets.QGraphicsView(scene)
    view.resize(500, 500)
    line = scene.addLine(0.0, 0.0, 0.0, 0.0)
    line.setTransform(PLOT)
    yield view, line
    view.deleteLater()


def _mouse_move(pos: QtCore.QPointF) -> QtGui.QMouseEvent:
    return QtGui.QMouseEvent(
        QtCore.QEvent.MouseMove, pos, QtCore.Qt.NoButton, QtCore.Qt.NoButton, QtCore.Qt.NoModifier
    )


def _assert_on_tangent(line, x0, y0, slope):
    qline = line.line()
    for point in (qline.p1(), qline.p2()):
        assert point.y() - y0 == pytest.approx(slope * (point.x() - x0), abs=1e-6)
    assert qline.length() > 0


def test_qtransform_conversion_matches_qt_mapping(qapp):
    transform = QtGui.QTransform().translate(10.0, 20.0).rotate(30.0).scale(2.0, 3.0)
    affine = qtransform_to_affine(transform, "line", "viewport")

    mapped = transform.map(QtCore.QPointF(1.5, -2.0))

    assert affine.map_point((1.5, -2.0)) == pytest.approx((mapped.x(), mapped.y()))
    assert (affine.source, affine.target) == ("line", "viewport")
    assert qtransform_to_affine(affine_to_qtransform(affine)) == affine.relabel()


def test_projective_qtransform_is_rejected(qapp):
    projective = QtGui.QTransform(1.0, 0.0, 0.001, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

    with pytest.raises(TransformError):
        qtransform_to_affine(projective)


def test_frame_provider_reads_scene_rect_and_item_transforms(plot_view):
    view, line = plot_view
    frames = QtFrameProvider(view)

    viewport, box = frames.viewport_of(line)
    ambient = frames.transform_between(line, viewport)

    assert viewport is line.scene()
    assert box == Box(0.0, 0.0, 480.0, 480.0)
    assert ambient.map_point((1.0, 1.0)) == pytest.approx((280.0, 200.0))
    assert (ambient.source, ambient.target) == ("line", "viewport")


def test_line_outside_scene_has_no_viewport(qapp):
    frames = QtFrameProvider(QtWidgets.QGraphicsView())

    with pytest.raises(TransformError):
        frames.viewport_of(QtWidgets.QGraphicsLineItem())


def test_line_sink_sets_both_endpoints(qapp):
    line = QtWidgets.QGraphicsLineItem()

    QtLineSink().write_endpoints(line, (1.0, 2.0), (3.0, 4.0))

    assert line.line() == QtCore.QLineF(1.0, 2.0, 3.0, 4.0)


def test_controller_moves_qt_line_from_client_point(plot_view):
    view, line = plot_view
    frames = QtFrameProvider(view)
    controller = TangentController(line, frames, QtLineSink())
    parabola = curve_preset("parabola")
    binding = TangentBinding("#tangent", ("mousemove",), slope=DerivativeSlope(parabola.slope), curve=parabola.curve)
    client = frames.screen_transform(line).map_point((1.0, 123.0))

    controller.update(PointerEvent(client=client), binding)

    _assert_on_tangent(line, 1.0, 0.25, 0.5)


def test_controller_uses_anchor_center(plot_view):
    view, line = plot_view
    anchor = view.scene().addEllipse(-6.0, -6.0, 12.0, 12.0)
    anchor.setPos(PLOT.map(QtCore.QPointF(2.0, 1.0)))
    frames = QtFrameProvider(view)
    controller = TangentController(line, frames, QtLineSink())
    parabola = curve_preset("parabola")
    binding = TangentBinding("#tangent", ("mousemove",), slope=DerivativeSlope(parabola.slope), curve=parabola.curve)

    controller.update(PointerEvent(client=(0.0, 0.0), target=anchor), binding)

    _assert_on_tangent(line, 2.0, 1.0, 1.0)


def test_event_hub_dispatches_named_events(plot_view):
    view, _line = plot_view
    hub = EventHub(view)
    received = []
    hub.connect(view.viewport(), ["mousemove"], received.append)

    QtWidgets.QApplication.sendEvent(view.viewport(), _mouse_move(QtCore.QPointF(10.0, 20.0)))

    assert len(received) == 1
    assert received[0].kind == "mousemove"
    assert received[0].client == (10.0, 20.0)
    assert view.viewport().hasMouseTracking()

    hub.disconnect_all()
    QtWidgets.QApplication.sendEvent(view.viewport(), _mouse_move(QtCore.QPointF(30.0, 20.0)))
    assert len(received) == 1
    assert hub.handler_count() == 0


def test_event_hub_rejects_unknown_events(plot_view):
    view, _line = plot_view

    with pytest.raises(ConfigurationError):
        EventHub(view).connect(view.viewport(), ["keypress"], lambda event: None)


def test_event_hub_contains_handler_errors(plot_view, caplog):
    view, _line = plot_view
    hub = EventHub(view)
    received = []

    def broken(event):
        raise RuntimeError("boom")

    hub.connect(view.viewport(), ["mousemove"], broken)
    hub.connect(view.viewport(), ["mousemove"], received.append)

    with caplog.at_level(logging.ERROR):
        QtWidgets.QApplication.sendEvent(view.viewport(), _mouse_move(QtCore.QPointF(5.0, 5.0)))

    assert len(received) == 1
    assert "Unexpected error in mousemove handler" in caplog.text
    hub.disconnect_all()


def test_style_sheet_decorator_appends_each_rule_once(qapp):
    widget = QtWidgets.QWidget()
    widget.setStyleSheet("QWidget { color: black; }")
    decorator = StyleSheetDecorator(widget)

    assert decorator.insert_rule("QWidget { background: red; }") is True
    assert decorator.insert_rule("QWidget { background: red; }") is False

    assert widget.styleSheet() == "QWidget { color: black; }\nQWidget { background: red; }"


def test_install_plot_wires_bindings_and_decorations(plot_view):
    view, line = plot_view
    parabola = curve_preset("parabola")
    registry = PlotRegistry()
    registry.add_line("tangent", line)
    registry.bind_tangent("#tangent", "mousemove", slope=parabola.slope, curve=parabola.curve)
    registry.add_decoration("QGraphicsView { background: #fffdf5; }", "mouseenter")

    session = install_plot(registry, view)

    assert set(session.controllers) == {"tangent"}
    assert session.hub.handler_count() == 2

    QtWidgets.QApplication.sendEvent(view.viewport(), _mouse_move(QtCore.QPointF(300.0, 150.0)))
    moved = QtCore.QLineF(line.line())
    assert moved.length() > 0
    assert session.controller("tangent").last_endpoints is not None

    enter = QtGui.QEnterEvent(QtCore.QPointF(1.0, 1.0), QtCore.QPointF(1.0, 1.0), QtCore.QPointF(1.0, 1.0))
    QtWidgets.QApplication.sendEvent(view.viewport(), enter)
    assert "#fffdf5" in view.styleSheet()

    session.close()
    assert session.closed
    QtWidgets.QApplication.sendEvent(view.viewport(), _mouse_move(QtCore.QPointF(100.0, 400.0)))
    assert line.line() == moved


def test_install_plot_rejects_unresolved_targets(plot_view):
    view, _line = plot_view
    registry = PlotRegistry()
    registry.bind_tangent("#missing", "mousemove", slope_attribute=1)

    with pytest.raises(ConfigurationError):
        install_plot(registry, view)


def test_install_plot_rejects_unknown_events_before_wiring(plot_view):
    view, line = plot_view
    parabola = curve_preset("parabola")
    registry = PlotRegistry()
    registry.add_line("tangent", line)
    registry.bind_tangent("#tangent", "mousemove", slope=parabola.slope, curve=parabola.curve)
    registry.add_decoration("QGraphicsView { background: #fffdf5; }", "keypress")

    with pytest.raises(ConfigurationError):
        install_plot(registry, view)

    QtWidgets.QApplication.sendEvent(view.viewport(), _mouse_move(QtCore.QPointF(300.0, 150.0)))
    assert line.line().length() == 0
    assert view.findChildren(EventHub) == []
