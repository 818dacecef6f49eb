"""
DYFI responses.

Parses the geocoded "cdi_zip.xml" aggregation of a DYFI product and lists
the locations, nearest first, in a progressively disclosed table.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any

from markupsafe import Markup
from pydantic import BaseModel, field_validator

from eventpages.catalog import Content, Product
from eventpages.core.disclosure import Column, ProgressiveDisclosureList
from eventpages.core.element import Element
from eventpages.core.fetch import FetchView
from eventpages.core.formatter import Formatter

logger = logging.getLogger(__name__)

CDI_ZIP_XML = "cdi_zip.xml"
US_COUNTRY = "United States of America"

_TEXT_FIELDS = ("name", "state", "country", "zip")
_NUMERIC_FIELDS = ("cdi", "dist", "lat", "lon", "nresp")


class DYFIResponse(BaseModel):
    """Aggregated responses for one location."""

    name: str = ""
    state: str | None = None
    country: str | None = None
    zip: str | None = None
    cdi: int | None = None
    dist: float | None = None
    lat: float | None = None
    lon: float | None = None
    nresp: int | None = None

    @field_validator("cdi", "nresp", mode="before")
    @classmethod
    def _truncate(cls, value: Any) -> Any:
        # intensities are published as decimals ("3.4"); keep the whole level
        if value is None or value == "":
            return None
        return int(float(value))

    @field_validator("dist", "lat", "lon", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_location(node: ET.Element) -> DYFIResponse:
    """Build a response record from one <location> element."""
    values: dict[str, Any] = {}
    for child in node:
        name = _local_name(child.tag)
        if name in _TEXT_FIELDS or name in _NUMERIC_FIELDS:
            values[name] = (child.text or "").strip()

    location_name = node.get("name", "")
    if len(location_name) == 5:
        # US locations are keyed by zip code
        values["country"] = US_COUNTRY
        values["zip"] = location_name
    else:
        parts = location_name.split("::")
        values["state"] = parts[1] if len(parts) > 1 else None
        values["country"] = parts[2] if len(parts) > 2 else None

    return DYFIResponse.model_validate(values)


def parse_responses(text: str) -> list[DYFIResponse]:
    """
    Parse a cdi_zip.xml document.

    Raises:
        xml.etree.ElementTree.ParseError: Malformed document.
        pydantic.ValidationError: A location carries a non-numeric value.
    """
    root = ET.fromstring(text)
    return [parse_location(node) for node in root.iter() if _local_name(node.tag) == "location"]


def format_location(response: DYFIResponse) -> Markup:
    place = ", ".join(part for part in (response.name, response.state) if part)
    if response.zip:
        place = f"{place} {response.zip}" if place else response.zip
    return Markup("{}<small>{}</small>").format(place, response.country or "")


class DYFIResponsesView(FetchView):
    """
    Table of DYFI responses sorted by distance from the epicenter.

    Options:
        formatter: Formatter for intensities.
        visible_count: Rows shown before "See All Responses" (default: 10).

    Events:
        responses: fired with the parsed records.
        responses-error: fired when the responses cannot be loaded.
    """

    SUCCESS_EVENT = "responses"
    ERROR_EVENT = "responses-error"
    DEFAULT_ERROR_MESSAGE = "Error: Unable to retrieve DYFI responses."

    def __init__(
        self,
        model: Product | None = None,
        formatter: Formatter | None = None,
        visible_count: int = 10,
        **options: Any,
    ):
        super().__init__(model=model, **options)
        self._formatter = formatter or Formatter()
        self.visible_count = visible_count
        self.list_view: ProgressiveDisclosureList | None = None
        self.el.add_class("dyfi-responses")
        self.add_teardown(self._destroy_list)

    def get_content(self) -> Content | None:
        if self.model is None:
            return None
        return self.model.get_content(CDI_ZIP_XML)

    def parse(self, text: str) -> list[DYFIResponse]:
        return parse_responses(text)

    def render(self) -> None:
        self._ensure_alive()
        self._destroy_list()
        super().render()

    def render_data(self, data: list[DYFIResponse]) -> Element | str:
        self._destroy_list()
        if not data:
            return '<div class="info">No data available.</div>'

        mmi = self._formatter.mmi
        columns = [
            Column("Location", format_location),
            Column(
                "MMI",
                lambda r: Markup('<span class="mmi{0}">{0}</span>').format(mmi(r.cdi)),
                title="Modified Mercalli Intensity",
                classes=("mmi",),
            ),
            Column("Responses", lambda r: Markup("{}").format(r.nresp), title="Number of responses"),
            Column("Distance", lambda r: Markup("{} km").format(r.dist), title="Distance from epicenter"),
        ]
        self.list_view = ProgressiveDisclosureList(
            records=data,
            # records without a distance sort last
            key=lambda r: (r.dist is None, r.dist or 0.0),
            columns=columns,
            visible_count=self.visible_count,
            reveal_text="See All Responses",
            classes="responsive dyfi",
        )
        self.list_view.render()
        return self.list_view.el

    def _destroy_list(self) -> None:
        if self.list_view is not None:
            self.list_view.destroy()
            self.list_view = None
