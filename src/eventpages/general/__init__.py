"""General summary: origin details and nearby places."""

from eventpages.general.module import GeneralSummaryModule
from eventpages.general.nearby_places import NEARBY_CITIES_JSON, NearbyPlace, NearbyPlacesView

__all__ = [
    "GeneralSummaryModule",
    "NearbyPlacesView",
    "NearbyPlace",
    "NEARBY_CITIES_JSON",
]
