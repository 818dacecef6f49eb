"""Did You Feel It? module."""

import logging
from typing import Any

from eventpages.catalog import Product
from eventpages.core.element import Element
from eventpages.core.model import Model
from eventpages.core.module import Module
from eventpages.dyfi.graphs import DYFIGraphView
from eventpages.dyfi.responses import CDI_ZIP_XML, DYFIResponsesView

logger = logging.getLogger(__name__)


class DYFIModule(Module):
    """
    Community intensity data: graphs plus the table of responses.

    Sections whose content the product lacks are left out.
    """

    ID = "dyfi"
    TITLE = "Did You Feel It?"
    TYPES = ("dyfi",)

    @classmethod
    def has_content(cls, model: Model) -> bool:
        event = model.get("event")
        if event is None:
            return False
        return bool(event.get_products(Product.get_full_type("dyfi", model.get("config"))))

    def __init__(self, **options: Any):
        super().__init__(**options)
        self.graph_view: DYFIGraphView | None = None
        self.responses_view: DYFIResponsesView | None = None
        self.add_teardown(self._destroy_children)

    def render(self) -> None:
        self._ensure_alive()
        self._destroy_children()

        product = self.get_product("dyfi")
        if product is None:
            self.header.clear()
            self.content.set_html('<p class="alert info">No DYFI data available.</p>')
            self.render_footer(None)
            return

        self.header.replace_children(self.get_product_header(product, summary_module=self.summary_module))
        self.content.clear()

        self.graph_view = DYFIGraphView(model=product)
        if not self.graph_view.is_empty:
            section = self.content.append(Element("section", classes=["dyfi-graphs-section"]))
            section.append("<h3>Graphs</h3>")
            section.append(self.graph_view.el)
            self.graph_view.render()

        if product.get_content(CDI_ZIP_XML) is not None:
            section = self.content.append(Element("section", classes=["dyfi-responses-section"]))
            section.append("<h3>Responses</h3>")
            self.responses_view = DYFIResponsesView(
                model=product,
                formatter=self._formatter,
                transport=self._transport,
                visible_count=self._visible_count(),
            )
            section.append(self.responses_view.el)
            self.responses_view.render()
        else:
            logger.debug(f"{product.id} has no {CDI_ZIP_XML}")

        self.render_footer(product)

    def _visible_count(self) -> int:
        return self.display.responses_visible_count

    def _destroy_children(self) -> None:
        if self.graph_view is not None:
            self.graph_view.destroy()
            self.graph_view = None
        if self.responses_view is not None:
            self.responses_view.destroy()
            self.responses_view = None
