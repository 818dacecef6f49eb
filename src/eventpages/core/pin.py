"""
Summary pins.

A pin is a small card on the event overview linking to a module page. It
resolves the same product the module would show.
"""

from typing import Any

from markupsafe import Markup

from eventpages.catalog import Product
from eventpages.core.attribution import get_product_attribution
from eventpages.core.element import Element
from eventpages.core.model import Model
from eventpages.core.resolution import resolve_product
from eventpages.core.view import View


class BasicPinView(View):
    """
    Card with a title linking to a module, content, and attribution.

    Options:
        module: Module class (or any object with ID, TITLE and TYPES).
    """

    def __init__(self, model: Model | None = None, module: Any = None, **options: Any):
        super().__init__(model=model if model is not None else Model(), **options)
        self.module = module
        self.el.add_class("basic-pin")
        self.header = Element("header", classes=["basic-pin-header"])
        self.content = Element(classes=["basic-pin-content"])
        self.footer = Element("footer", classes=["basic-pin-footer"])
        self.el.replace_children(self.header, self.content, self.footer)
        self.add_teardown(self._teardown_pin)

    @property
    def product(self) -> Product | None:
        types = tuple(getattr(self.module, "TYPES", ()))
        if not types:
            return None
        return resolve_product(
            self.model.get("event"),
            types[0],
            self.model.get(self.module.ID),
            self.model.get("config"),
        ).product

    def render(self) -> None:
        self._ensure_alive()
        self.render_pin_header()
        self.render_pin_content()
        self.render_pin_footer()

    def render_pin_header(self) -> None:
        self.header.set_html(
            Markup('<a href="#{}" class="basic-pin-link">{}</a>').format(
                self.module.ID, self.module.TITLE
            )
        )

    def render_pin_content(self) -> None:
        self.content.set_html("")

    def render_pin_footer(self) -> None:
        product = self.product
        if product is None:
            self.footer.clear()
            return
        self.footer.set_html(
            Markup('<span class="attribution">{}</span>').format(get_product_attribution(product))
        )

    def _teardown_pin(self) -> None:
        self.module = None
