"""
Catalog event model.

An event aggregates every product contributed for one seismic occurrence.
Views only query it; nothing in the view layer mutates an event.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from eventpages.catalog.product import Product, normalize_type

logger = logging.getLogger(__name__)


def _preference_key(product: Product) -> tuple[int, int]:
    return (product.preferred_weight, product.update_time)


class CatalogEvent:
    """
    Products of one event, keyed by normalized product type.

    Within a type, products are kept most-preferred first: highest
    preferred weight, then most recent update time.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        id: str | None = None,
        properties: dict[str, Any] | None = None,
    ):
        self.id = id
        self.properties: dict[str, Any] = dict(properties or {})
        self._products: dict[str, list[Product]] = {}
        for product in products:
            self._products.setdefault(normalize_type(product.type), []).append(product)
        for group in self._products.values():
            group.sort(key=_preference_key, reverse=True)

    @property
    def product_types(self) -> list[str]:
        return sorted(self._products)

    def get_products(self, type: str) -> list[Product]:
        """All products of `type`, most preferred first. Never None."""
        return list(self._products.get(normalize_type(type), []))

    def get_preferred_product(self, type: str) -> Product | None:
        products = self._products.get(normalize_type(type))
        return products[0] if products else None

    def get_product_by_id(
        self,
        type: str,
        source: str,
        code: str,
        update_time: int | None = None,
    ) -> Product | None:
        """
        Find a specific product.

        When `update_time` is None the most recent version from `source`
        and `code` is returned.
        """
        source = source.lower()
        matches = [
            p
            for p in self._products.get(normalize_type(type), [])
            if p.source.lower() == source and p.code == code
        ]
        if update_time is not None:
            update_time = int(update_time)
            matches = [p for p in matches if p.update_time == update_time]
        if not matches:
            return None
        return max(matches, key=lambda p: p.update_time)

    @classmethod
    def from_geojson(cls, data: dict[str, Any]) -> "CatalogEvent":
        """Create from an event-detail GeoJSON feature."""
        properties = dict(data.get("properties") or {})
        raw_products = properties.pop("products", None) or {}

        products = []
        for type, entries in raw_products.items():
            for entry in entries:
                products.append(Product.from_dict(entry, type=type))

        event = cls(products, id=data.get("id"), properties=properties)
        logger.debug(f"Loaded event {event.id} with {len(products)} products")
        return event

    @classmethod
    def from_file(cls, path: Path) -> "CatalogEvent":
        with open(path) as f:
            return cls.from_geojson(json.load(f))
