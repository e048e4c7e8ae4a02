"""Drag a line so it stays tangent to a curve under the pointer."""

__version__ = "0.1.0"
