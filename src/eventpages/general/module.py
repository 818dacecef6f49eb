"""General summary module: origin header plus nearby places."""

from typing import Any

from markupsafe import Markup

from eventpages.catalog import Product
from eventpages.core.element import Element
from eventpages.core.model import Model
from eventpages.core.module import Module
from eventpages.general.nearby_places import NEARBY_CITIES_JSON, NearbyPlacesView


class GeneralSummaryModule(Module):
    """Summarizes the preferred origin and the places near it."""

    ID = "general-summary"
    TITLE = "General Summary"
    TYPES = ("origin", "nearby-cities")

    @classmethod
    def has_content(cls, model: Model) -> bool:
        event = model.get("event")
        if event is None:
            return False
        full_type = Product.get_full_type("origin", model.get("config"))
        return event.get_preferred_product(full_type) is not None

    def __init__(self, **options: Any):
        super().__init__(**options)
        self.nearby_places_view: NearbyPlacesView | None = None
        self.add_teardown(self._destroy_nearby_places)

    def render(self) -> None:
        self._ensure_alive()
        self._destroy_nearby_places()

        origin = self.get_product("origin")
        if origin is None:
            self.header.clear()
            self.content.set_html('<p class="alert info">No origin information available.</p>')
            self.render_footer(None)
            return

        self.header.replace_children(self.get_product_header(origin, summary_module=self.summary_module))
        self.content.replace_children(self._render_origin(origin))

        nearby = self._preferred("nearby-cities")
        if nearby is None or nearby.get_content(NEARBY_CITIES_JSON) is None:
            # older events publish nearby cities with the origin
            nearby = origin
        if nearby.get_content(NEARBY_CITIES_JSON) is not None:
            section = self.content.append(Element("section", classes=["nearby-places-section"]))
            section.append("<h3>Nearby Places</h3>")
            self.nearby_places_view = NearbyPlacesView(
                model=nearby,
                formatter=self._formatter,
                transport=self._transport,
                render_new_layout=self._new_layout(),
            )
            section.append(self.nearby_places_view.el)
            self.nearby_places_view.render()

        self.render_footer(origin)

    def _preferred(self, type: str) -> Product | None:
        event = self.event
        if event is None:
            return None
        return event.get_preferred_product(Product.get_full_type(type, self.config))

    def _render_origin(self, origin: Product) -> Element:
        el = Element("dl", classes=["origin-summary"])
        rows = (
            ("Magnitude", origin.get_property("magnitude")),
            ("Location", self._location(origin)),
            ("Depth", self._depth(origin)),
            ("Origin Time", self._origin_time(origin)),
        )
        for label, value in rows:
            if value is None:
                continue
            el.append(Markup("<dt>{}</dt><dd>{}</dd>").format(label, value))
        return el

    @staticmethod
    def _location(origin: Product) -> str | None:
        latitude = origin.get_property("latitude")
        longitude = origin.get_property("longitude")
        if latitude is None or longitude is None:
            return None
        return f"{float(latitude):.3f}, {float(longitude):.3f}"

    def _depth(self, origin: Product) -> str | None:
        depth = origin.get_property("depth")
        if depth is None:
            return None
        return self._formatter.distance(float(depth), "km")

    def _origin_time(self, origin: Product) -> str | None:
        eventtime = origin.get_property("eventtime")
        return str(eventtime) if eventtime else None

    def _new_layout(self) -> bool:
        return bool(self.display.nearby_places_new_layout)

    def _destroy_nearby_places(self) -> None:
        if self.nearby_places_view is not None:
            self.nearby_places_view.destroy()
            self.nearby_places_view = None
