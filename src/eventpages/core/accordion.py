"""
Collapsible single-child container.

The child view is rendered lazily, the first time the accordion is
expanded, so a collapsed accordion never triggers the child's loads.
Destroying the accordion always destroys the child, rendered or not.
"""

import logging
from collections.abc import Iterable
from typing import Any

from eventpages.core.element import Element
from eventpages.core.events import Subscription
from eventpages.core.view import View

logger = logging.getLogger(__name__)


class AccordionView(View):
    """
    Toggle control plus one nested view.

    Options:
        view: The child view (owned; destroyed with the accordion).
        toggle_text: Label of the toggle control.
        toggle_element: Tag of the toggle control (default "h3").
        classes: Extra classes for the root element.
        expanded: Initial state (default collapsed).
    """

    def __init__(
        self,
        view: View,
        toggle_text: str = "",
        toggle_element: str = "h3",
        classes: Iterable[str] | str = (),
        expanded: bool = False,
        **options: Any,
    ):
        super().__init__(**options)
        self.view = view
        self._expanded = expanded
        self._child_rendered = False

        self.el.add_class("accordion")
        if isinstance(classes, str):
            classes = classes.split()
        self.el.add_class(*classes)

        self.toggle_control = Element(toggle_element, classes=["accordion-toggle"], text=toggle_text)
        self.content = Element(classes=["accordion-content"])
        self._toggle_subscription: Subscription | None = self.toggle_control.on(
            "click", self._on_toggle_click
        )
        self.add_teardown(self._teardown_accordion)

    @property
    def expanded(self) -> bool:
        return self._expanded

    def render(self) -> None:
        self._ensure_alive()
        self.el.replace_children(self.toggle_control, self.content)
        self._update()

    def expand(self) -> None:
        self._ensure_alive()
        self._expanded = True
        self._update()

    def collapse(self) -> None:
        self._ensure_alive()
        self._expanded = False
        self._update()

    def toggle(self) -> None:
        if self._expanded:
            self.collapse()
        else:
            self.expand()

    def _on_toggle_click(self, *args: Any) -> None:
        self.toggle()

    def _update(self) -> None:
        if self._expanded:
            self.el.remove_class("accordion-closed")
            if not self._child_rendered:
                self._child_rendered = True
                self.content.replace_children(self.view.el)
                self.view.render()
        else:
            self.el.add_class("accordion-closed")

    def _teardown_accordion(self) -> None:
        self.view.destroy()
        if self._toggle_subscription is not None:
            self.toggle_control.off()
            self.toggle_control.release()
            self._toggle_subscription = None
