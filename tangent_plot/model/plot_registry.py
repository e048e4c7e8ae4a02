"""Explicit registry of movable lines, tangent bindings and decorations.

The registry is filled at startup and handed to
:func:`tangent_plot.scene.install_plot`; nothing is discovered from global
state.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Generic, Mapping, Optional, TypeVar

from tangent_plot.errors import ConfigurationError
from tangent_plot.model.slope_source import CurveFunction, SlopeSource, resolve_slope_source

LOCAL_REFERENCE_PREFIX = "#"
DEFAULT_EVENTS = ("mousemove",)

T = TypeVar("T")


def parse_event_types(text: str | None) -> tuple[str, ...]:
    """Split a whitespace separated event list, e.g. ``"mousedown mousemove"``."""
    if not text:
        return ()
    return tuple(part.lower() for part in re.split(r"\s+", text.strip()) if part)


def resolve_local_reference(reference: str | None, elements: Mapping[str, T]) -> Optional[T]:
    """Resolve ``"#id"`` against ``elements``; anything else resolves to ``None``."""
    if not reference or not reference.startswith(LOCAL_REFERENCE_PREFIX):
        return None
    return elements.get(reference[len(LOCAL_REFERENCE_PREFIX):])


@dataclass(frozen=True)
class TangentBinding:
    """Moves the line named by ``href`` when one of ``events`` fires."""

    href: str
    events: tuple[str, ...]
    slope: SlopeSource
    curve: CurveFunction | None = None
    observer: object | None = None


@dataclass(frozen=True)
class Decoration:
    """Inserts ``rule`` into the view style sheet when one of ``events`` fires."""

    rule: str
    events: tuple[str, ...]
    observer: object | None = None


@dataclass
class PlotRegistry(Generic[T]):
    lines: dict[str, T] = field(default_factory=dict)
    bindings: list[TangentBinding] = field(default_factory=list)
    decorations: list[Decoration] = field(default_factory=list)

    def add_line(self, line_id: str, line: T) -> T:
        if not line_id:
            raise ConfigurationError("Movable lines need a non-empty id")
        if line_id in self.lines:
            raise ConfigurationError(f"Duplicate movable line id {line_id!r}")
        self.lines[line_id] = line
        return line

    def bind_tangent(
        self,
        href: str,
        events: str | tuple[str, ...] | None = None,
        *,
        slope: CurveFunction | None = None,
        slope_attribute: str | float | None = None,
        curve: CurveFunction | None = None,
        observer: object | None = None,
    ) -> TangentBinding:
        binding = TangentBinding(
            href=href,
            events=_event_tuple(events),
            slope=resolve_slope_source(slope, slope_attribute),
            curve=curve,
            observer=observer,
        )
        self.bindings.append(binding)
        return binding

    def add_decoration(
        self,
        rule: str,
        events: str | tuple[str, ...] | None = None,
        *,
        observer: object | None = None,
    ) -> Decoration:
        if not rule or not rule.strip():
            raise ConfigurationError("Decoration rule is empty")
        decoration = Decoration(rule.strip(), _event_tuple(events), observer)
        self.decorations.append(decoration)
        return decoration

    def resolve(self, binding: TangentBinding) -> T:
        line = resolve_local_reference(binding.href, self.lines)
        if line is None:
            raise ConfigurationError(f"Binding target {binding.href!r} does not name a movable line")
        return line


def _event_tuple(events: str | tuple[str, ...] | None) -> tuple[str, ...]:
    if events is None:
        return DEFAULT_EVENTS
    if isinstance(events, str):
        parsed = parse_event_types(events)
    else:
        parsed = tuple(event.lower() for event in events if event)
    if not parsed:
        raise ConfigurationError("At least one event type is required")
    return parsed
