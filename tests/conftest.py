"""Shared fixtures for event pages tests."""

import asyncio
from typing import Any

import pytest

from eventpages.catalog import CatalogEvent, Content, Product
from eventpages.core.config import EventPagesConfig, reset_config
from eventpages.core.errors import FetchError
from eventpages.core.model import Model
from eventpages.core.transport import reset_transport


class FakeTransport:
    """
    Transport whose requests stay pending until the test settles them.

    URLs registered in `responses` answer immediately; every other request
    waits on a future reachable through `resolve` / `fail`.
    """

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses: dict[str, Any] = dict(responses or {})
        self.requests: list[str] = []
        self.pending: dict[str, list[asyncio.Future]] = {}

    async def fetch_text(self, url: str) -> str:
        self.requests.append(url)
        if url in self.responses:
            response = self.responses[url]
            if isinstance(response, Exception):
                raise response
            return response
        future = asyncio.get_running_loop().create_future()
        self.pending.setdefault(url, []).append(future)
        return await future

    def resolve(self, url: str, text: str, index: int = -1) -> None:
        self.pending[url][index].set_result(text)

    def fail(self, url: str, error: Exception | None = None, index: int = -1) -> None:
        self.pending[url][index].set_exception(error or FetchError("HTTP 500", url=url, status_code=500))


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks and their done-callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def make_product(
    type: str = "origin",
    source: str = "us",
    code: str = "1000abcd",
    update_time: int = 100,
    preferred_weight: int = 0,
    properties: dict[str, Any] | None = None,
    contents: dict[str, str] | None = None,
) -> Product:
    """Build a product; `contents` maps content paths to URLs."""
    return Product(
        type=type,
        source=source,
        code=code,
        update_time=update_time,
        preferred_weight=preferred_weight,
        properties=dict(properties or {}),
        contents={path: Content(path=path, url=url) for path, url in (contents or {}).items()},
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Keep process-wide config and transport from leaking between tests."""
    reset_config()
    reset_transport()
    yield
    reset_config()
    reset_transport()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def config():
    return EventPagesConfig()


@pytest.fixture
def pager_event():
    """Two versions of one pager product; the newer one is preferred."""
    return CatalogEvent(
        [
            make_product(type="pager", update_time=100),
            make_product(type="pager", update_time=200, preferred_weight=10),
        ],
        id="us1000abcd",
    )


@pytest.fixture
def origin():
    return make_product(
        type="origin",
        properties={
            "magnitude": "6.1",
            "latitude": "34.213",
            "longitude": "-118.537",
            "depth": "17.5",
            "review-status": "reviewed",
        },
        contents={
            "nearby-cities.json": "https://example.com/nearby-cities.json",
            "contents.xml": "https://example.com/origin/contents.xml",
        },
    )


@pytest.fixture
def dyfi_product():
    return make_product(
        type="dyfi",
        contents={
            "cdi_zip.xml": "https://example.com/cdi_zip.xml",
            "1000abcd_plot_atten.jpg": "https://example.com/1000abcd_plot_atten.jpg",
        },
    )


@pytest.fixture
def event(origin, dyfi_product):
    return CatalogEvent([origin, dyfi_product], id="us1000abcd")


@pytest.fixture
def page_model(event, config):
    return Model({"event": event, "config": config})
