"""Decorative style rules injected into a widget style sheet."""
from __future__ import annotations

import logging

from PyQt5 import QtWidgets

logger = logging.getLogger(__name__)


class StyleSheetDecorator:
    """Appends rules to the style sheet of ``widget``, each at most once."""

    def __init__(self, widget: QtWidgets.QWidget) -> None:
        self._widget = widget
        self._base = widget.styleSheet()
        self.rules: list[str] = []

    def insert_rule(self, rule: str) -> bool:
        rule = rule.strip()
        if not rule or rule in self.rules:
            return False
        self.rules.append(rule)
        self._widget.setStyleSheet("\n".join(filter(None, [self._base, *self.rules])))
        logger.debug("Inserted style rule %r", rule)
        return True
