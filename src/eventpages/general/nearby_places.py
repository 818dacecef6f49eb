"""
Nearby places view.

Loads a product's "nearby-cities.json" and lists the places closest to
the epicenter.
"""

from typing import Any

from markupsafe import Markup
from pydantic import BaseModel, TypeAdapter

from eventpages.catalog import Content, Product
from eventpages.core.fetch import FetchView
from eventpages.core.formatter import Formatter

NEARBY_CITIES_JSON = "nearby-cities.json"


class NearbyPlace(BaseModel):
    """One entry of a nearby-cities payload."""

    name: str
    distance: float  # km
    direction: str = ""
    population: int | None = None


_places_adapter = TypeAdapter(list[NearbyPlace])


class NearbyPlacesView(FetchView):
    """
    View for a nearby-cities product.

    Options:
        formatter: Formatter for distances and populations.
        render_new_layout: Render name/distance/population blocks instead
            of the single "12.3 km (7.6 mi) NE of Place" line.

    Events:
        places: fired with the raw payload.
        places-error: fired when the payload cannot be loaded.
    """

    SUCCESS_EVENT = "places"
    ERROR_EVENT = "places-error"
    DEFAULT_ERROR_MESSAGE = "Error loading nearby places."

    def __init__(
        self,
        model: Product | None = None,
        formatter: Formatter | None = None,
        render_new_layout: bool = False,
        **options: Any,
    ):
        super().__init__(model=model, **options)
        self._formatter = formatter or Formatter()
        self._render_new_layout = render_new_layout
        self.places: list[NearbyPlace] = []
        self.el.add_class("nearby-places")
        self.add_teardown(self._teardown_places)

    def get_content(self) -> Content | None:
        if self.model is None:
            return None
        return self.model.get_content(NEARBY_CITIES_JSON)

    def parse(self, text: str) -> list[dict[str, Any]]:
        data = super().parse(text)
        # validate up front so bad payloads take the error path
        _places_adapter.validate_python(data)
        return data

    def format_place(self, place: NearbyPlace) -> Markup:
        formatter = self._formatter
        km = formatter.distance(place.distance, "km")
        mi = formatter.distance(formatter.km_to_mi(place.distance), "mi")

        if self._render_new_layout:
            return Markup(
                '<li class="nearby-places-place">'
                '<span class="nearby-places-name">{}</span>'
                '<aside class="nearby-places-distance">{} ({}) {}</aside>'
                '<aside class="nearby-places-population">Population: {}</aside>'
                "</li>"
            ).format(
                place.name,
                km,
                mi,
                place.direction,
                formatter.number_with_commas(place.population),
            )

        return Markup("<li>{} ({}) {} of {}</li>").format(km, mi, place.direction, place.name)

    def render_data(self, data: list[dict[str, Any]]) -> str:
        self.places = _places_adapter.validate_python(data)
        markup = Markup("").join(self.format_place(place) for place in self.places)
        return Markup('<ul class="no-style">{}</ul>').format(markup)

    def _teardown_places(self) -> None:
        self.places = []
        self._formatter = None
