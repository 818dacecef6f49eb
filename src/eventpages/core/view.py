"""
View base class.

Defines the lifecycle contract every renderable unit satisfies:

    constructed -> (rendered)* -> destroyed

Teardown is composed through a per-instance registry rather than by
wrapping `destroy`. Each layer registers its cleanup at construction time
with `add_teardown`; `destroy` unwinds the registry once, last registered
first, so a subclass's cleanup always runs before its base class's cleanup.
A second `destroy` is a no-op.
"""

import logging
from contextlib import ExitStack
from typing import Any

from eventpages.core.element import Element
from eventpages.core.errors import ViewDestroyedError
from eventpages.core.events import EventEmitter, EventHandler, Subscription

logger = logging.getLogger(__name__)


class View(EventEmitter):
    """
    Base renderable unit bound to a model and owning one root element.

    Example:
        class HelloView(View):
            def __init__(self, **options):
                super().__init__(**options)
                self.add_teardown(self._release_greeting)

            def render(self) -> None:
                self.el.set_text("hello")
    """

    def __init__(self, model: Any = None, el: Element | None = None, **options: Any):
        super().__init__()
        self._el = el if el is not None else Element()
        self.model = model
        self.options = options
        self._destroyed = False
        self._external: list[tuple[EventEmitter, Subscription]] = []
        self._teardown = ExitStack()
        # registered first so it unwinds last
        self._teardown.callback(self._base_teardown)

        if isinstance(model, EventEmitter):
            self.listen_to(model, "change", self._on_model_change)

    @property
    def el(self) -> Element:
        """Root container, fixed for the lifetime of the view."""
        return self._el

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def add_teardown(self, callback: Any, *args: Any, **kwargs: Any) -> None:
        """Register cleanup to run when the view is destroyed."""
        self._teardown.callback(callback, *args, **kwargs)

    def listen_to(self, source: EventEmitter, event: str, handler: EventHandler) -> Subscription:
        """Subscribe to another emitter; released automatically on destroy."""
        subscription = source.on(event, handler)
        self._external.append((source, subscription))
        return subscription

    def stop_listening(self) -> None:
        for source, subscription in self._external:
            source.off(subscription=subscription)
        self._external = []

    def _on_model_change(self, *args: Any) -> None:
        self.render()

    def render(self) -> None:
        """Replace the element content. Subclasses override."""
        self._ensure_alive()

    def destroy(self) -> None:
        """
        Release everything this view owns.

        Safe to call more than once; calls after the first do nothing.
        """
        if self._destroyed:
            return
        self._destroyed = True
        logger.debug(f"Destroying {type(self).__name__}")
        self._teardown.close()

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise ViewDestroyedError(f"{type(self).__name__} has been destroyed")

    def _base_teardown(self) -> None:
        self.stop_listening()
        self.off()
        self._el.release()
        self.model = None
        self.options = {}
