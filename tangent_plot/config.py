"""Settings and declarative plot files for the tangent plot viewer."""
from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass, field
import logging
from pathlib import Path
import sys
from typing import Callable, Optional, TypeVar

from tangent_plot.errors import ConfigurationError
from tangent_plot.model import (
    DEFAULT_EVENTS,
    PlotRegistry,
    curve_preset,
    parse_event_types,
)

CONFIG_FILENAME = "tangent_plot.ini"
DEFAULT_LOG_FILE = "tangent_plot_log.txt"
_LOGGING_SECTION = "logging"
_PLOT_SECTION = "plot"
_LINE_PREFIX = "line:"
_TANGENT_PREFIX = "tangent:"
_DECORATE_PREFIX = "decorate:"

T = TypeVar("T")


@dataclass
class Settings:
    log_level: int = logging.INFO
    log_file: str = DEFAULT_LOG_FILE
    default_events: tuple[str, ...] = DEFAULT_EVENTS


@dataclass(frozen=True)
class LineDeclaration:
    line_id: str
    endpoints: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class TangentDeclaration:
    name: str
    href: str
    events: tuple[str, ...]
    slope_attribute: str | None = None
    curve: str | None = None


@dataclass(frozen=True)
class DecorationDeclaration:
    name: str
    rule: str
    events: tuple[str, ...]


@dataclass
class PlotDeclaration:
    lines: list[LineDeclaration] = field(default_factory=list)
    tangents: list[TangentDeclaration] = field(default_factory=list)
    decorations: list[DecorationDeclaration] = field(default_factory=list)


def _config_dir(main_script_path: Optional[Path]) -> Path:
    """Directory holding tangent_plot.ini: next to the launching script, else the cwd."""
    if main_script_path is not None:
        return main_script_path.resolve().parent
    main_module = sys.modules.get("__main__")
    if main_module and getattr(main_module, "__file__", None):
        return Path(main_module.__file__).resolve().parent
    return Path.cwd()


def config_path(main_script_path: Optional[Path]) -> Path:
    return _config_dir(main_script_path) / CONFIG_FILENAME


def _parse_level(value: str | None) -> int:
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def load_settings(main_script_path: Optional[Path] = None, path: Optional[Path] = None) -> Settings:
    ini_path = path or config_path(main_script_path)
    settings = Settings()
    if not ini_path.exists():
        return settings
    parser = ConfigParser()
    try:
        with ini_path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error):
        return settings
    settings.log_level = _parse_level(parser.get(_LOGGING_SECTION, "level", fallback=None))
    settings.log_file = parser.get(_LOGGING_SECTION, "file", fallback=DEFAULT_LOG_FILE) or DEFAULT_LOG_FILE
    events = parse_event_types(parser.get(_PLOT_SECTION, "default_events", fallback=None))
    if events:
        settings.default_events = events
    return settings


def _parse_endpoints(section: str, raw: dict[str, str]) -> tuple[float, float, float, float]:
    try:
        return tuple(float(raw.get(key, "0")) for key in ("x1", "y1", "x2", "y2"))  # type: ignore[return-value]
    except ValueError as exc:
        raise ConfigurationError(f"[{section}] has a non-numeric endpoint") from exc


def load_plot(path: Path, default_events: tuple[str, ...] = DEFAULT_EVENTS) -> PlotDeclaration:
    """Read ``[line:*]``, ``[tangent:*]`` and ``[decorate:*]`` sections."""
    parser = ConfigParser(interpolation=None)
    try:
        with path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error) as exc:
        raise ConfigurationError(f"Could not read plot file {path}: {exc}") from exc

    plot = PlotDeclaration()
    for section in parser.sections():
        raw = dict(parser.items(section))
        events = parse_event_types(raw.get("event")) or default_events
        if section.startswith(_LINE_PREFIX):
            line_id = section[len(_LINE_PREFIX):].strip()
            plot.lines.append(LineDeclaration(line_id, _parse_endpoints(section, raw)))
        elif section.startswith(_TANGENT_PREFIX):
            href = raw.get("href", "").strip()
            if not href:
                raise ConfigurationError(f"[{section}] is missing href")
            plot.tangents.append(
                TangentDeclaration(
                    name=section[len(_TANGENT_PREFIX):].strip(),
                    href=href,
                    events=events,
                    slope_attribute=raw.get("slope"),
                    curve=raw.get("curve"),
                )
            )
        elif section.startswith(_DECORATE_PREFIX):
            rule = raw.get("rule", "").strip()
            if not rule:
                raise ConfigurationError(f"[{section}] is missing rule")
            plot.decorations.append(
                DecorationDeclaration(section[len(_DECORATE_PREFIX):].strip(), rule, events)
            )
    return plot


def populate_registry(
    plot: PlotDeclaration,
    registry: PlotRegistry[T],
    make_line: Callable[[LineDeclaration], T],
) -> PlotRegistry[T]:
    """Create line items through ``make_line`` and register every binding.

    A tangent naming a ``curve`` snaps to that preset and, without a numeric
    ``slope``, takes the preset's derivative as its slope function.
    """
    for line in plot.lines:
        registry.add_line(line.line_id, make_line(line))
    for tangent in plot.tangents:
        curve = slope = None
        if tangent.curve:
            preset = curve_preset(tangent.curve)
            curve = preset.curve
            if tangent.slope_attribute is None:
                slope = preset.slope
        registry.bind_tangent(
            tangent.href,
            tangent.events,
            slope=slope,
            slope_attribute=tangent.slope_attribute,
            curve=curve,
        )
    for decoration in plot.decorations:
        registry.add_decoration(decoration.rule, decoration.events)
    return registry
