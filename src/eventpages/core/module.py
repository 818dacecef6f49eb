"""
Product modules.

A module is a view that summarizes one product of the bound event. It owns
three regions (header, content, footer); the footer may host a collapsible
download listing.

Module identity is declared with class attributes so the shell can list
and route to modules without instantiating them:

    class DYFIModule(Module):
        ID = "dyfi"
        TITLE = "Did You Feel It?"
        TYPES = ("dyfi",)
"""

import logging
from typing import Any, ClassVar

from markupsafe import Markup

from eventpages.catalog import CatalogEvent, Product
from eventpages.core.accordion import AccordionView
from eventpages.core.attribution import get_product_attribution
from eventpages.core.config import DisplayConfig, get_display_config
from eventpages.core.download import DownloadView
from eventpages.core.element import Element
from eventpages.core.formatter import Formatter
from eventpages.core.model import Model
from eventpages.core.resolution import ProductResolution, resolve_product
from eventpages.core.transport import Transport
from eventpages.core.view import View

logger = logging.getLogger(__name__)

CONTENTS_XML = "contents.xml"


def build_product_header(
    product: Product,
    event: CatalogEvent | None,
    title: str,
    formatter: Formatter,
    summary_module: Any = None,
    type: str | None = None,
) -> Element:
    """
    Build the standard header summarizing `product`.

    Args:
        product: Product to summarize.
        event: Event the product belongs to.
        title: Title of the module rendering the header.
        formatter: Formatter for the update time.
        summary_module: Module (class or instance) listing every version of
            the product; adds a link back to it.
        type: Product type used to count alternatives (default: product type).
    """
    buf: list[Markup] = []
    type = type or product.type

    # compare against the product's own type; `type` may be a base type
    preferred = event is not None and event.get_preferred_product(product.type) is product
    reviewed = product.is_reviewed()

    if summary_module is not None:
        num_products = len(event.get_products(type)) if event is not None else 0
        if num_products > 1:
            link_text = Markup("View alternative {}s ({} total)").format(
                title.lower(), num_products
            )
        else:
            link_text = Markup("Back to {}").format(summary_module.TITLE)
        buf.append(
            Markup('<a class="back-to-summary-link" href="#{}">{}</a>').format(
                summary_module.ID, link_text
            )
        )

    buf.append(
        Markup('<small class="attribution">Contributed by {} last updated {}</small>').format(
            get_product_attribution(product),
            formatter.datetime(product.update_time),
        )
    )

    buf.append(Markup('<ul class="quality-statements no-style">'))
    if preferred:
        buf.append(
            Markup('<li class="preferred">The data below are the most preferred data available</li>')
        )
    else:
        buf.append(
            Markup(
                '<li class="unpreferred">The data below are <strong>NOT</strong>'
                " the most preferred data available</li>"
            )
        )
    if reviewed is True:
        buf.append(
            Markup('<li class="reviewed">The data below have been reviewed by a scientist</li>')
        )
    elif reviewed is False:
        # only claim the product is unreviewed when review status was set
        buf.append(
            Markup(
                '<li class="unreviewed">The data below have <strong>NOT</strong>'
                " been reviewed by a scientist.</li>"
            )
        )
    buf.append(Markup("</ul>"))

    el = Element(classes=["product-header"])
    el.set_html(Markup("").join(buf))
    return el


class Module(View):
    """
    View bound to a page model that resolves and summarizes one product.

    The page model provides "event", "config" and a parameter bag under
    the module ID.

    Events:
        resolution-fallback: fired with a ProductResolution when an explicit
            source/code request matched nothing and the preferred product
            was used instead.
    """

    ID: ClassVar[str] = "module"
    TITLE: ClassVar[str] = "Default Module"
    TYPES: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def has_content(cls, model: Model) -> bool:
        return True

    def __init__(
        self,
        model: Model | None = None,
        formatter: Formatter | None = None,
        transport: Transport | None = None,
        summary_module: Any = None,
        **options: Any,
    ):
        super().__init__(model=model if model is not None else Model(), **options)
        self._formatter = formatter or self._default_formatter()
        self._transport = transport
        self.summary_module = summary_module
        self._accordion_view: AccordionView | None = None
        self.download_view: DownloadView | None = None

        # regions for subclass access
        self.header = Element(classes=["module-header"])
        self.content = Element(classes=["module-content"])
        self.footer = Element(classes=["module-footer"])
        self.el.add_class("module", f"module-{self.ID}")
        self.el.replace_children(self.header, self.content, self.footer)

        self.add_teardown(self._teardown_module)

    def _default_formatter(self) -> Formatter:
        return Formatter(decimals=self.display.distance_decimals)

    @property
    def event(self) -> CatalogEvent | None:
        return self.model.get("event")

    @property
    def config(self) -> Any:
        return self.model.get("config")

    @property
    def display(self) -> DisplayConfig:
        """Display policy of the page config; defaults when unset."""
        return get_display_config(self.config)

    @property
    def params(self) -> dict[str, Any]:
        return self.model.get(self.ID) or {}

    def resolve(self, type: str) -> ProductResolution:
        resolution = resolve_product(self.event, type, self.params, self.config)
        if resolution.fallback:
            logger.warning(
                f"{self.ID}: no {resolution.full_type} product for "
                f"source={resolution.source} code={resolution.code} "
                f"updateTime={resolution.update_time}; using preferred product"
            )
            self.trigger("resolution-fallback", resolution)
        return resolution

    def get_product(self, type: str) -> Product | None:
        """
        Get a product from the event based on module parameters and config.

        Returns:
            Matching product, or None when no event is bound or the event
            has no product of the type.
        """
        return self.resolve(type).product

    def get_products(self, type: str) -> list[Product]:
        """All products of the (scenario adjusted) type; may be empty."""
        event = self.event
        if event is None:
            return []
        return event.get_products(Product.get_full_type(type, self.config))

    def get_product_header(
        self,
        product: Product,
        summary_module: Any = None,
        type: str | None = None,
    ) -> Element:
        return build_product_header(
            product,
            self.event,
            self.TITLE,
            self._formatter,
            summary_module=summary_module,
            type=type,
        )

    def get_product_footer(self, product: Product) -> Element | None:
        """
        Build the downloads footer for `product`.

        Returns:
            The footer element, or None when the product has no contents.xml.
        """
        self._destroy_footer()

        content = product.get_content(CONTENTS_XML)
        if content is None:
            return None

        self.download_view = DownloadView(
            model=content,
            product=product,
            formatter=self._formatter,
            transport=self._transport,
        )
        self._accordion_view = AccordionView(
            view=self.download_view,
            classes="accordion-standard accordion-page-downloads",
            toggle_element="h3",
            toggle_text="Downloads",
        )
        self._accordion_view.render()
        return self._accordion_view.el

    def render(self) -> None:
        self._ensure_alive()
        self.header.set_html("<h3>Module Header</h3>")
        self.content.set_html("<h3>Module Content</h3>")
        self.footer.set_html("<h3>Module Footer</h3>")

    def render_footer(self, product: Product | None) -> None:
        """Replace the footer region with the downloads footer of `product`."""
        footer = self.get_product_footer(product) if product is not None else None
        if footer is None:
            self._destroy_footer()
            self.footer.clear()
        else:
            self.footer.replace_children(footer)

    def _destroy_footer(self) -> None:
        if self._accordion_view is not None:
            self._accordion_view.destroy()
            self._accordion_view = None
        self.download_view = None

    def _teardown_module(self) -> None:
        self._destroy_footer()
        self._formatter = None
        self._transport = None
        self.summary_module = None
