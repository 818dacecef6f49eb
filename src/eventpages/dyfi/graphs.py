"""DYFI graph images."""

from typing import Any, NamedTuple

from markupsafe import Markup

from eventpages.catalog import Content, Product
from eventpages.core.element import Element
from eventpages.core.view import View


class GraphImage(NamedTuple):
    title: str
    suffix: str


GRAPH_IMAGES = (
    GraphImage("Intensity Vs. Distance", "_plot_atten.jpg"),
    GraphImage("Responses Vs. Time", "_plot_numresp.jpg"),
)


class DYFIGraphView(View):
    """
    Figures for the graph images a DYFI product publishes.

    Images are named after the product code, e.g. "us1000abcd_plot_atten.jpg".
    Images the product does not carry are skipped.
    """

    def __init__(self, model: Product | None = None, **options: Any):
        super().__init__(model=model, **options)
        self.el.add_class("dyfi-graphs")

    def get_graphs(self) -> list[tuple[GraphImage, Content]]:
        product = self.model
        if product is None:
            return []
        graphs = []
        for image in GRAPH_IMAGES:
            content = product.get_content(f"{product.code}{image.suffix}")
            if content is not None and content.url:
                graphs.append((image, content))
        return graphs

    def render(self) -> None:
        self._ensure_alive()
        self.el.clear()
        for image, content in self.get_graphs():
            figure = self.el.append(Element("figure", classes=["dyfi-graph"]))
            figure.set_html(
                Markup('<img src="{}" alt="{}"/><figcaption>{}</figcaption>').format(
                    content.url, image.title, image.title
                )
            )

    @property
    def is_empty(self) -> bool:
        return not self.get_graphs()
