"""
Tests for fetch-backed views.

Tests cover:
- Nearby places rendering (classic and new layouts)
- Supersession: only the latest request is observed
- Destroy while loading
- Missing content and transport failures
"""

import asyncio
import json

import pytest

from conftest import FakeTransport, make_product, settle
from eventpages.core.errors import ContentMissingError, FetchError
from eventpages.core.fetch import LOADING_MARKUP, FetchState
from eventpages.general.nearby_places import NearbyPlacesView

URL = "https://example.com/nearby-cities.json"
PLACES = [{"name": "Testville", "distance": 12.3, "direction": "NE", "population": 500}]


@pytest.fixture
def product():
    return make_product(type="nearby-cities", contents={"nearby-cities.json": URL})


def make_view(product, transport, **options) -> tuple[NearbyPlacesView, list]:
    view = NearbyPlacesView(model=product, transport=transport, **options)
    events: list = []
    view.on("places", lambda *args: events.append(("places",) + args))
    view.on("places-error", lambda *args: events.append(("places-error",) + args))
    return view, events


class TestNearbyPlaces:
    """Tests for NearbyPlacesView."""

    @pytest.mark.asyncio
    async def test_renders_place(self, product):
        transport = FakeTransport({URL: json.dumps(PLACES)})
        view, events = make_view(product, transport)

        view.render()
        await view.wait()

        html = str(view.el)
        assert "<li>12.3 km (7.6 mi) NE of Testville</li>" in html
        assert view.state == FetchState.SUCCESS
        assert events == [("places", PLACES)]
        assert view.places[0].name == "Testville"

    @pytest.mark.asyncio
    async def test_new_layout(self, product):
        transport = FakeTransport({URL: json.dumps(PLACES)})
        view, _ = make_view(product, transport, render_new_layout=True)

        view.render()
        await view.wait()

        html = str(view.el)
        assert '<span class="nearby-places-name">Testville</span>' in html
        assert "Population: 500" in html

    @pytest.mark.asyncio
    async def test_shows_loading_until_settled(self, product, transport):
        view, events = make_view(product, transport)

        view.render()
        await settle()

        assert view.is_loading
        assert view.el.to_html() == f'<div class="nearby-places">{LOADING_MARKUP}</div>'
        assert events == []

    @pytest.mark.asyncio
    async def test_superseded_request_is_never_observed(self, product, transport):
        view, events = make_view(product, transport)

        view.render()
        await settle()
        view.render()
        await settle()

        assert len(transport.requests) == 2
        # the first request was cancelled; the second completes
        transport.resolve(URL, json.dumps(PLACES))
        await view.wait()
        await settle()

        assert events == [("places", PLACES)]

    @pytest.mark.asyncio
    async def test_stale_completion_is_dropped(self, product, transport):
        view, events = make_view(product, transport)
        view.render()
        stale_request_id = view._request_id
        view.render()
        await settle()

        # a completion for the superseded request arrives after all
        stale = asyncio.get_running_loop().create_future()
        stale.set_result([{"name": "Stale", "distance": 1.0}])
        view._on_done(stale_request_id, stale)

        assert events == []
        assert "Stale" not in str(view.el)

        transport.resolve(URL, json.dumps(PLACES))
        await view.wait()

        assert events == [("places", PLACES)]

    @pytest.mark.asyncio
    async def test_destroy_while_loading(self, product, transport):
        view, events = make_view(product, transport)

        view.render()
        await settle()
        view.destroy()
        await settle()

        assert events == []
        assert view.state == FetchState.IDLE

    @pytest.mark.asyncio
    async def test_missing_content_skips_network(self, transport):
        view, events = make_view(make_product(type="nearby-cities"), transport)

        view.render()

        assert transport.requests == []
        assert view.state == FetchState.ERROR
        assert isinstance(view.error, ContentMissingError)
        assert events == [("places-error",)]
        assert view.el.text_content == "Error loading nearby places."

    @pytest.mark.asyncio
    async def test_transport_failure(self, product, transport):
        view, events = make_view(product, transport, error_message="Unable to load places.")

        view.render()
        await settle()
        transport.fail(URL, FetchError("HTTP 503", url=URL, status_code=503))
        await view.wait()

        assert events == [("places-error",)]
        assert view.error.status_code == 503
        assert view.el.text_content == "Unable to load places."

    @pytest.mark.asyncio
    async def test_invalid_payload_takes_error_path(self, product):
        transport = FakeTransport({URL: json.dumps([{"distance": "far"}])})
        view, events = make_view(product, transport)

        view.render()
        await view.wait()

        assert events == [("places-error",)]
        assert view.state == FetchState.ERROR

    @pytest.mark.asyncio
    async def test_cancel_without_request_is_harmless(self, product, transport):
        view, _ = make_view(product, transport)

        view.cancel()
        await view.wait()

        assert view.state == FetchState.IDLE

    @pytest.mark.asyncio
    async def test_cancelled_elsewhere_takes_error_path(self, product, transport):
        view, events = make_view(product, transport)

        view.render()
        await settle()
        # e.g. a timeout wrapper or loop shutdown, not the view's own cancel()
        view._task.cancel()
        await settle()

        assert view.state == FetchState.ERROR
        assert isinstance(view.error, FetchError)
        assert events == [("places-error",)]
        assert view.el.text_content == "Error loading nearby places."


class TestWithoutEventLoop:
    """Rendering a fetch-backed view outside a running event loop."""

    def test_render_goes_to_error_state(self, product, transport):
        view, events = make_view(product, transport)

        view.render()

        assert transport.requests == []
        assert view.state == FetchState.ERROR
        assert isinstance(view.error, FetchError)
        assert view.error.url == URL
        assert events == [("places-error",)]
