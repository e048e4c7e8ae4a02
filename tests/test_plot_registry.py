import pytest

from tangent_plot.errors import ConfigurationError
from tangent_plot.model import (
    FixedSlope,
    PlotRegistry,
    parse_event_types,
    resolve_local_reference,
)


def test_parse_event_types_splits_on_whitespace():
    assert parse_event_types("mousedown  mousemove\n") == ("mousedown", "mousemove")
    assert parse_event_types("MouseMove") == ("mousemove",)
    assert parse_event_types("") == ()
    assert parse_event_types(None) == ()


def test_resolve_local_reference():
    elements = {"tangent": "line"}

    assert resolve_local_reference("#tangent", elements) == "line"
    assert resolve_local_reference("#missing", elements) is None
    assert resolve_local_reference("tangent", elements) is None
    assert resolve_local_reference(None, elements) is None


def test_bind_tangent_defaults_to_mousemove():
    registry = PlotRegistry()
    registry.add_line("tangent", "line")

    binding = registry.bind_tangent("#tangent", slope_attribute="0.5")

    assert binding.events == ("mousemove",)
    assert binding.slope == FixedSlope(0.5)
    assert registry.resolve(binding) == "line"


def test_unresolved_binding_target():
    registry = PlotRegistry()
    binding = registry.bind_tangent("#nowhere", "mousemove", slope_attribute=1)

    with pytest.raises(ConfigurationError):
        registry.resolve(binding)


def test_binding_without_slope_is_rejected_and_not_registered():
    registry = PlotRegistry()

    with pytest.raises(ConfigurationError):
        registry.bind_tangent("#tangent", "mousemove")
    assert registry.bindings == []


def test_duplicate_and_empty_line_ids():
    registry = PlotRegistry()
    registry.add_line("a", object())

    with pytest.raises(ConfigurationError):
        registry.add_line("a", object())
    with pytest.raises(ConfigurationError):
        registry.add_line("", object())


def test_blank_event_list_is_rejected():
    registry = PlotRegistry()

    with pytest.raises(ConfigurationError):
        registry.bind_tangent("#a", "   ", slope_attribute=1)


def test_decorations_keep_stripped_rule():
    registry = PlotRegistry()

    decoration = registry.add_decoration("  QWidget { color: red; }  ", ("mouseenter",))

    assert decoration.rule == "QWidget { color: red; }"
    assert decoration.events == ("mouseenter",)
    with pytest.raises(ConfigurationError):
        registry.add_decoration(" ")
