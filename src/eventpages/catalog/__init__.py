"""
Event/product data model.

Read-only representation of a catalog event and its products, built from
event-detail GeoJSON documents.

Usage:
    from eventpages.catalog import CatalogEvent

    event = CatalogEvent.from_file(Path("us1000abcd.geojson"))
    dyfi = event.get_preferred_product("dyfi")
"""

from eventpages.catalog.content import Content
from eventpages.catalog.event import CatalogEvent
from eventpages.catalog.product import (
    SCENARIO_SUFFIX,
    Product,
    get_full_type,
    normalize_type,
)

__all__ = [
    "CatalogEvent",
    "Content",
    "Product",
    "SCENARIO_SUFFIX",
    "get_full_type",
    "normalize_type",
]
