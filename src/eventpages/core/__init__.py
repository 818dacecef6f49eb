"""
Event pages core: view lifecycle and composition.

Architecture Rules:
- Core must not import feature packages (general, dyfi, losspager)
- Only the transport module talks to the network
- No side effects on import

Modules:
- view: View base class and teardown registry
- module: Product-bound module view, header/footer composition
- accordion: Collapsible single-child container
- fetch: Fetch-backed views with cancel-on-destroy semantics
- disclosure: Progressive disclosure tables
- transport: Transport protocol and httpx implementation
- config: YAML configuration
"""

from eventpages.core.accordion import AccordionView
from eventpages.core.config import (
    DisplayConfig,
    EventPagesConfig,
    LoggingConfig,
    TransportConfig,
    get_config,
    get_display_config,
    reset_config,
    set_config,
)
from eventpages.core.disclosure import Column, ProgressiveDisclosureList
from eventpages.core.download import DownloadView
from eventpages.core.element import Element
from eventpages.core.errors import (
    ConfigError,
    ContentMissingError,
    EventPagesError,
    FetchError,
    ViewDestroyedError,
)
from eventpages.core.events import EventEmitter, Subscription
from eventpages.core.fetch import FetchState, FetchView
from eventpages.core.formatter import Formatter
from eventpages.core.model import Model
from eventpages.core.module import Module, build_product_header
from eventpages.core.pin import BasicPinView
from eventpages.core.resolution import ProductResolution, resolve_product
from eventpages.core.transport import (
    HttpxTransport,
    Transport,
    get_transport,
    reset_transport,
    set_transport,
)
from eventpages.core.view import View

__all__ = [
    # Lifecycle
    "View",
    "Element",
    "EventEmitter",
    "Subscription",
    "Model",
    # Composition
    "Module",
    "AccordionView",
    "BasicPinView",
    "build_product_header",
    "ProductResolution",
    "resolve_product",
    # Async content
    "FetchView",
    "FetchState",
    "DownloadView",
    "Transport",
    "HttpxTransport",
    "get_transport",
    "set_transport",
    "reset_transport",
    # Lists
    "ProgressiveDisclosureList",
    "Column",
    # Support
    "Formatter",
    "EventPagesConfig",
    "TransportConfig",
    "DisplayConfig",
    "LoggingConfig",
    "get_config",
    "get_display_config",
    "set_config",
    "reset_config",
    # Errors
    "EventPagesError",
    "ViewDestroyedError",
    "ContentMissingError",
    "FetchError",
    "ConfigError",
]
