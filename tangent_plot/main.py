"""Entry point for the tangent plot demo viewer."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence

from PyQt5 import QtCore, QtGui, QtWidgets

from tangent_plot import __version__
from tangent_plot.config import (
    LineDeclaration,
    Settings,
    config_path,
    load_plot,
    load_settings,
    populate_registry,
)
from tangent_plot.errors import ConfigurationError
from tangent_plot.model import CURVE_PRESETS, PlotRegistry, curve_preset
from tangent_plot.scene import PlotSession, install_plot

logger = logging.getLogger(__name__)

SCENE_SIZE = 480.0
PLOT_SCALE = 40.0
PLOT_SPAN = SCENE_SIZE / (2 * PLOT_SCALE)
HIGHLIGHT_RULE = "QGraphicsView { background: #fffdf5; }"


def configure_logging(settings: Settings, main_script_path: Path | None = None) -> None:
    log_path = config_path(main_script_path).with_name(settings.log_file)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )


def plot_transform() -> QtGui.QTransform:
    """Math coordinates (y up) to scene pixels, origin at the scene centre."""
    return QtGui.QTransform(PLOT_SCALE, 0.0, 0.0, -PLOT_SCALE, SCENE_SIZE / 2, SCENE_SIZE / 2)


def _cosmetic_pen(color: str, width: float) -> QtGui.QPen:
    pen = QtGui.QPen(QtGui.QColor(color), width)
    pen.setCosmetic(True)
    return pen


class TangentPlotView(QtWidgets.QGraphicsView):
    """Demo view: curves and tangent lines drawn in a flipped plot frame."""

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        scene = QtWidgets.QGraphicsScene(0.0, 0.0, SCENE_SIZE, SCENE_SIZE)
        super().__init__(scene, parent)
        self._plot_scene = scene
        self.setRenderHint(QtGui.QPainter.Antialiasing)
        self.setMinimumSize(int(SCENE_SIZE) + 4, int(SCENE_SIZE) + 4)
        self._draw_axes()

    def _draw_axes(self) -> None:
        pen = _cosmetic_pen("#b0b0b0", 1.0)
        for x1, y1, x2, y2 in (
            (-PLOT_SPAN, 0.0, PLOT_SPAN, 0.0),
            (0.0, -PLOT_SPAN, 0.0, PLOT_SPAN),
        ):
            axis = self.scene().addLine(x1, y1, x2, y2, pen)
            axis.setTransform(plot_transform())

    def add_curve(self, name: str) -> QtWidgets.QGraphicsPathItem:
        points = curve_preset(name).sample(-PLOT_SPAN, PLOT_SPAN)
        path = QtGui.QPainterPath(QtCore.QPointF(*points[0]))
        for x, y in points[1:]:
            path.lineTo(x, y)
        item = self.scene().addPath(path, _cosmetic_pen("#1f5fbf", 2.0))
        item.setTransform(plot_transform())
        return item

    def make_line(self, declaration: LineDeclaration) -> QtWidgets.QGraphicsLineItem:
        line = self.scene().addLine(*declaration.endpoints, _cosmetic_pen("#c0392b", 1.5))
        line.setTransform(plot_transform())
        line.setData(0, declaration.line_id)
        return line

    def add_anchor(self, x: float, y: float) -> QtWidgets.QGraphicsEllipseItem:
        anchor = self.scene().addEllipse(
            -6.0, -6.0, 12.0, 12.0, _cosmetic_pen("#2c3e50", 1.0), QtGui.QBrush(QtGui.QColor("#f1c40f"))
        )
        anchor.setPos(plot_transform().map(QtCore.QPointF(x, y)))
        anchor.setFlag(QtWidgets.QGraphicsItem.ItemIsMovable, True)
        anchor.setZValue(1.0)
        return anchor


def build_demo_registry(
    view: TangentPlotView, curve: str, slope: float | None, settings: Settings
) -> PlotRegistry[QtWidgets.QGraphicsLineItem]:
    preset = curve_preset(curve)
    registry: PlotRegistry[QtWidgets.QGraphicsLineItem] = PlotRegistry()
    view.add_curve(preset.name)
    registry.add_line("tangent", view.make_line(LineDeclaration("tangent")))
    registry.bind_tangent(
        "#tangent",
        settings.default_events,
        slope=None if slope is not None else preset.slope,
        slope_attribute=slope,
        curve=preset.curve,
    )
    registry.add_decoration(HIGHLIGHT_RULE, "mouseenter")
    view.add_anchor(1.0, preset.curve(1.0))
    return registry


def build_file_registry(
    view: TangentPlotView, plot_path: Path, settings: Settings
) -> PlotRegistry[QtWidgets.QGraphicsLineItem]:
    plot = load_plot(plot_path, settings.default_events)
    for name in sorted({tangent.curve for tangent in plot.tangents if tangent.curve}):
        view.add_curve(name)
    return populate_registry(plot, PlotRegistry(), view.make_line)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Drag a line tangent to a curve.")
    parser.add_argument("--curve", choices=sorted(CURVE_PRESETS), default="parabola")
    parser.add_argument("--slope", type=float, default=None, help="fixed slope instead of the curve derivative")
    parser.add_argument("--plot", type=Path, default=None, help="INI plot file with line/tangent/decorate sections")
    parser.add_argument("--config", type=Path, default=None, help="settings file (default: tangent_plot.ini)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    main_script_path = Path(__file__).resolve()
    settings = load_settings(main_script_path, args.config)
    configure_logging(settings, main_script_path)
    logger.info("Starting tangent plot %s", __version__)

    app = QtWidgets.QApplication(sys.argv[:1])
    view = TangentPlotView()
    view.setWindowTitle("Tangent plot")
    try:
        if args.plot is not None:
            registry = build_file_registry(view, args.plot, settings)
        else:
            registry = build_demo_registry(view, args.curve, args.slope, settings)
        session: PlotSession = install_plot(registry, view)
    except ConfigurationError:
        logger.exception("Could not set up the plot")
        sys.exit(2)

    view.show()
    app.aboutToQuit.connect(session.close)
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
