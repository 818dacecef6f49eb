"""Did You Feel It? views."""

from eventpages.dyfi.graphs import GRAPH_IMAGES, DYFIGraphView, GraphImage
from eventpages.dyfi.module import DYFIModule
from eventpages.dyfi.responses import (
    CDI_ZIP_XML,
    DYFIResponse,
    DYFIResponsesView,
    parse_responses,
)

__all__ = [
    "DYFIModule",
    "DYFIGraphView",
    "DYFIResponsesView",
    "DYFIResponse",
    "GraphImage",
    "GRAPH_IMAGES",
    "CDI_ZIP_XML",
    "parse_responses",
]
