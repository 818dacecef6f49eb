"""
Render target handles.

An `Element` is the opaque container a view renders into. Views replace an
element's children in place; they never swap the element itself. Elements
serialize to HTML through the `__html__` protocol so they can be embedded
in `markupsafe.Markup` strings.
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Union

from markupsafe import Markup, escape

from eventpages.core.events import EventEmitter, EventHandler, Subscription

Child = Union["Element", Markup]

# Tags serialized without a closing tag.
VOID_TAGS = frozenset({"br", "hr", "img", "input", "link", "meta"})


class Element:
    """
    Minimal DOM-like node.

    Children are either nested elements or trusted `Markup` fragments.
    Plain strings passed to `set_text` or `append_text` are escaped.
    """

    def __init__(
        self,
        tag: str = "div",
        classes: Iterable[str] | str = (),
        attrs: dict[str, Any] | None = None,
        text: str | None = None,
    ):
        self.tag = tag
        if isinstance(classes, str):
            classes = classes.split()
        self.classes: list[str] = list(classes)
        self.attrs: dict[str, Any] = dict(attrs or {})
        self.children: list[Child] = []
        self.parent: Element | None = None
        self._listeners = EventEmitter()
        if text is not None:
            self.set_text(text)

    # -- classes -----------------------------------------------------------

    def add_class(self, *names: str) -> None:
        for name in names:
            if name not in self.classes:
                self.classes.append(name)

    def remove_class(self, *names: str) -> None:
        self.classes = [c for c in self.classes if c not in names]

    def has_class(self, name: str) -> bool:
        return name in self.classes

    # -- content -----------------------------------------------------------

    def append(self, child: "Element | str") -> "Element | Markup":
        """Append a child element or a trusted markup fragment."""
        if isinstance(child, Element):
            if child.parent is not None:
                child.remove()
            child.parent = self
            self.children.append(child)
            return child
        fragment = Markup(child)
        self.children.append(fragment)
        return fragment

    def append_text(self, text: str) -> None:
        self.children.append(escape(text))

    def clear(self) -> None:
        """Remove every child."""
        for child in self.children:
            if isinstance(child, Element):
                child.parent = None
        self.children = []

    def set_html(self, markup: str) -> None:
        """Replace the children with a trusted markup fragment."""
        self.clear()
        if markup:
            self.append(markup)

    def set_text(self, text: str) -> None:
        """Replace the children with escaped text."""
        self.clear()
        self.append_text(text)

    def replace_children(self, *children: "Element | str") -> None:
        self.clear()
        for child in children:
            self.append(child)

    def remove(self) -> None:
        """Detach this element from its parent."""
        if self.parent is not None:
            self.parent.children = [c for c in self.parent.children if c is not self]
            self.parent = None

    # -- queries -----------------------------------------------------------

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter_descendants()

    def find_all(
        self,
        class_name: str | None = None,
        tag: str | None = None,
        predicate: Callable[["Element"], bool] | None = None,
    ) -> list["Element"]:
        """Find descendant elements matching every given criterion."""
        return [
            el
            for el in self.iter_descendants()
            if (class_name is None or el.has_class(class_name))
            and (tag is None or el.tag == tag)
            and (predicate is None or predicate(el))
        ]

    def find(self, class_name: str | None = None, tag: str | None = None) -> "Element | None":
        matches = self.find_all(class_name=class_name, tag=tag)
        return matches[0] if matches else None

    @property
    def text_content(self) -> str:
        """Concatenated text of this subtree with markup stripped."""
        parts = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.text_content)
            else:
                parts.append(Markup(child).striptags())
        return " ".join(p for p in parts if p)

    # -- listeners ---------------------------------------------------------

    def on(self, event: str, handler: EventHandler) -> Subscription:
        return self._listeners.on(event, handler)

    def off(self, event: str | None = None, handler: EventHandler | None = None) -> int:
        return self._listeners.off(event=event, handler=handler)

    def dispatch(self, event: str) -> None:
        self._listeners.trigger(event, self)

    def click(self) -> None:
        """Simulate user activation."""
        self.dispatch("click")

    def listener_count(self, event: str | None = None) -> int:
        return self._listeners.listener_count(event)

    def release(self) -> None:
        """Release every listener bound to this handle."""
        self._listeners.off()

    # -- serialization -----------------------------------------------------

    def _open_tag(self) -> Markup:
        attrs = dict(self.attrs)
        if self.classes:
            attrs["class"] = " ".join(self.classes)
        rendered = Markup("").join(
            Markup(' {}="{}"').format(name, value)
            for name, value in attrs.items()
            if value is not None
        )
        return Markup("<{}{}>").format(Markup(self.tag), rendered)

    def to_html(self) -> Markup:
        if self.tag in VOID_TAGS:
            return self._open_tag()
        inner = Markup("").join(
            child.to_html() if isinstance(child, Element) else child
            for child in self.children
        )
        return self._open_tag() + inner + Markup("</{}>").format(Markup(self.tag))

    def __html__(self) -> Markup:
        return self.to_html()

    def __str__(self) -> str:
        return str(self.to_html())

    def __repr__(self) -> str:
        return f"Element(tag={self.tag!r}, classes={self.classes!r}, children={len(self.children)})"
