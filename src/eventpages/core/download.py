"""
Download listing for a product's contents.xml.

Used as the collapsible footer of product modules.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup

from eventpages.catalog import Content, Product
from eventpages.core.fetch import FetchView
from eventpages.core.formatter import Formatter

logger = logging.getLogger(__name__)


@dataclass
class DownloadFormat:
    href: str
    type: str | None = None


@dataclass
class DownloadFile:
    id: str
    title: str
    caption: str = ""
    formats: list[DownloadFormat] = field(default_factory=list)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_contents(text: str) -> list[DownloadFile]:
    """Parse a contents.xml document into download entries."""
    root = ET.fromstring(text)
    files = []
    for node in root.iter():
        if _local_name(node.tag) != "file":
            continue
        entry = DownloadFile(id=node.get("id", ""), title=node.get("title", ""))
        for child in node:
            name = _local_name(child.tag)
            if name == "caption":
                entry.caption = (child.text or "").strip()
            elif name == "format":
                entry.formats.append(DownloadFormat(href=child.get("href", ""), type=child.get("type")))
        files.append(entry)
    return files


def format_file_size(length: int | None) -> str:
    if length is None:
        return ""
    size = float(length)
    for units in ("B", "KB", "MB", "GB"):
        if size < 1024 or units == "GB":
            return f"{size:.0f} {units}" if units == "B" else f"{size:.1f} {units}"
        size /= 1024
    return ""


class DownloadView(FetchView):
    """
    Lists the downloadable files of a product.

    The model is the product's "contents.xml" content; links point at the
    matching content of `product`.
    """

    SUCCESS_EVENT = "downloads"
    ERROR_EVENT = "downloads-error"
    DEFAULT_ERROR_MESSAGE = "Error loading downloads."

    def __init__(
        self,
        model: Content | None = None,
        product: Product | None = None,
        formatter: Formatter | None = None,
        **options: Any,
    ):
        super().__init__(model=model, **options)
        self.product = product
        self._formatter = formatter or Formatter()
        self.el.add_class("download-view")
        self.add_teardown(self._teardown_download)

    def get_content(self) -> Content | None:
        return self.model

    def parse(self, text: str) -> list[DownloadFile]:
        return parse_contents(text)

    def render_data(self, data: list[DownloadFile]) -> str:
        if not data:
            return '<p class="alert info">No downloads available.</p>'

        buf = ['<dl class="download-listing">']
        for entry in data:
            buf.append(Markup('<dt class="download-title">{}</dt>').format(entry.title))
            if entry.caption:
                # captions are authored markup
                buf.append(Markup('<dd class="download-caption">{}</dd>').format(Markup(entry.caption)))
            buf.append('<dd><ul class="download-formats no-style">')
            for fmt in entry.formats:
                buf.append(self._format_link(fmt))
            buf.append("</ul></dd>")
        buf.append("</dl>")
        return "".join(str(b) for b in buf)

    def _format_link(self, fmt: DownloadFormat) -> Markup:
        content = self.product.get_content(fmt.href) if self.product else None
        if content is None or not content.url:
            return Markup("<li>{}</li>").format(fmt.href)
        return Markup('<li><a href="{}">{}</a> <small>{}</small></li>').format(
            content.url, fmt.href, format_file_size(content.length)
        )

    def _teardown_download(self) -> None:
        self.product = None
        self._formatter = None
