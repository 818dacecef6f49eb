"""
Event Pages - Composable views summarizing seismic event data.

Renders event page fragments from nested views that bind to an
event/product model, load auxiliary content on demand, and tear
themselves down cleanly.
"""

__version__ = "0.3.0"
__version_tuple__ = (0, 3, 0)

from eventpages.catalog import CatalogEvent, Product
from eventpages.core.config import EventPagesConfig, get_config

__all__ = [
    "__version__",
    "__version_tuple__",
    "CatalogEvent",
    "Product",
    "EventPagesConfig",
    "get_config",
]
