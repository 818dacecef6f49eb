"""
Product resolution.

Maps a module's parameter bag onto one product of an event. Resolution is
a pure function of its inputs; callers that care whether an explicit
source/code request was honored inspect `ProductResolution.fallback`.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from eventpages.catalog import CatalogEvent, Product, get_full_type


@dataclass(frozen=True)
class ProductResolution:
    """Outcome of resolving a product request against an event."""

    product: Product | None
    full_type: str
    source: str | None = None
    code: str | None = None
    update_time: int | None = None
    # explicit source/code were given but matched nothing
    fallback: bool = False

    @property
    def requested_specific(self) -> bool:
        return self.source is not None and self.code is not None


def resolve_product(
    event: CatalogEvent | None,
    type: str,
    params: Mapping[str, Any] | None = None,
    config: Any = None,
) -> ProductResolution:
    """
    Resolve a product.

    Uses parameters "source", "code" and optionally "updateTime". Without
    "updateTime" the latest version from source and code is used. When no
    product matches source and code, the preferred product of the type is
    returned instead.

    Args:
        event: Event to search; None resolves to no product.
        type: Product base type; `config` decides whether to add the
            scenario suffix.
        params: Module parameter bag.
        config: Page configuration.
    """
    params = params or {}
    full_type = get_full_type(type, config)
    source = params.get("source") or None
    code = params.get("code") or None
    update_time = params.get("updateTime") or None

    product = None
    fallback = False

    if event is not None and source is not None and code is not None:
        product = event.get_product_by_id(full_type, source, code, update_time)
        fallback = product is None
    if event is not None and product is None:
        product = event.get_preferred_product(full_type)

    return ProductResolution(
        product=product,
        full_type=full_type,
        source=source,
        code=code,
        update_time=update_time,
        fallback=fallback,
    )
