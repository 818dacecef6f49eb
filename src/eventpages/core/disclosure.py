"""
Progressive disclosure tables.

Renders every record of a sorted set but only shows the first few rows;
a one-shot reveal control shows the rest.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup

from eventpages.core.element import Element
from eventpages.core.events import Subscription
from eventpages.core.view import View

HIDDEN_CLASS = "hidden"


@dataclass(frozen=True)
class Column:
    """One table column: header label plus a cell renderer returning markup."""

    header: str
    cell: Callable[[Any], str]
    title: str | None = None
    classes: tuple[str, ...] = ()


class ProgressiveDisclosureList(View):
    """
    Table of records sorted ascending by `key`, partially revealed.

    Records past `visible_count` are rendered with the "hidden" class.
    When any are hidden a single reveal control is appended; activating it
    reveals every row and removes the control.
    """

    def __init__(
        self,
        records: Iterable[Any],
        key: Callable[[Any], Any],
        columns: Iterable[Column],
        visible_count: int = 10,
        reveal_text: str = "See All",
        classes: Iterable[str] | str = (),
        **options: Any,
    ):
        super().__init__(**options)
        # sorted() is stable; equal keys keep their input order
        self.records = sorted(records, key=key)
        self.columns = list(columns)
        self.visible_count = visible_count
        self.reveal_text = reveal_text
        self.table = Element("table", classes=classes)
        self.rows: list[Element] = []
        self.reveal_control: Element | None = None
        self._reveal_subscription: Subscription | None = None
        self.add_teardown(self._teardown_disclosure)

    @property
    def visible_rows(self) -> list[Element]:
        return [row for row in self.rows if not row.has_class(HIDDEN_CLASS)]

    @property
    def hidden_rows(self) -> list[Element]:
        return [row for row in self.rows if row.has_class(HIDDEN_CLASS)]

    def render(self) -> None:
        self._ensure_alive()
        self._release_reveal_control()

        thead = Element("thead")
        header_row = thead.append(Element("tr"))
        for column in self.columns:
            header_row.append(
                Element("th", attrs={"title": column.title}, text=column.header)
            )

        tbody = Element("tbody")
        self.rows = []
        for index, record in enumerate(self.records):
            row = Element("tr")
            if index >= self.visible_count:
                row.add_class(HIDDEN_CLASS)
            for column in self.columns:
                cell = row.append(Element("td", classes=column.classes))
                cell.set_html(Markup(column.cell(record)))
            tbody.append(row)
            self.rows.append(row)

        self.table.replace_children(thead, tbody)
        self.el.replace_children(self.table)

        if len(self.records) > self.visible_count:
            self.reveal_control = Element(
                "span",
                classes=["button"],
                attrs={"role": "button"},
                text=self.reveal_text,
            )
            self._reveal_subscription = self.reveal_control.on("click", self._on_reveal_click)
            self.el.append(self.reveal_control)

    def _on_reveal_click(self, *args: Any) -> None:
        self.reveal()

    def reveal(self) -> None:
        """Show every hidden row and remove the reveal control."""
        if self.reveal_control is None:
            return
        self._release_reveal_control()
        for row in self.rows:
            row.remove_class(HIDDEN_CLASS)

    def _release_reveal_control(self) -> None:
        if self.reveal_control is None:
            return
        self.reveal_control.off()
        self.reveal_control.remove()
        self.reveal_control = None
        self._reveal_subscription = None

    def _teardown_disclosure(self) -> None:
        self._release_reveal_control()
        self.rows = []
        self.records = []
