"""PAGER summary view."""

import logging
from typing import Any

from markupsafe import Markup

from eventpages.catalog import Product
from eventpages.core.formatter import Formatter
from eventpages.core.view import View

logger = logging.getLogger(__name__)

ALERT_LEVELS = ("green", "yellow", "orange", "red")


class PAGERView(View):
    """
    Alert level and maximum estimated intensity of a losspager product.

    The model is the product itself.
    """

    def __init__(self, model: Product | None = None, formatter: Formatter | None = None, **options: Any):
        super().__init__(model=model, **options)
        self._formatter = formatter or Formatter()
        self.el.add_class("pager")
        self.add_teardown(self._teardown_pager)

    @property
    def alert_level(self) -> str | None:
        if self.model is None:
            return None
        level = self.model.get_property("alertlevel")
        if level is None:
            return None
        level = str(level).strip().lower()
        return level if level in ALERT_LEVELS else None

    @property
    def max_mmi(self) -> float | None:
        if self.model is None:
            return None
        value = self.model.get_property("maxmmi")
        if value in (None, ""):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-numeric maxmmi {value!r}")
            return None

    def render_alert_level(self) -> Markup:
        level = self.alert_level
        if level is None:
            return Markup('<p class="pager-alertlevel">Alert level not available</p>')
        return Markup(
            '<p class="pager-alertlevel pager-alertlevel-{0}">Estimated losses: {1} alert</p>'
        ).format(level, level.upper())

    def render_max_mmi(self) -> Markup:
        mmi = self._formatter.mmi(self.max_mmi)
        if not mmi:
            return Markup("")
        return Markup(
            '<p class="pager-maxmmi">Maximum estimated intensity: <span class="mmi{0}">{0}</span></p>'
        ).format(mmi)

    def render(self) -> None:
        self._ensure_alive()
        if self.model is None:
            self.el.set_html('<p class="alert info">No PAGER data available.</p>')
            return
        self.el.set_html(self.render_alert_level() + self.render_max_mmi())

    def _teardown_pager(self) -> None:
        self._formatter = None
