"""Tests for the downloads listing and HTTP transport."""

import httpx
import pytest

from conftest import FakeTransport, make_product
from eventpages.catalog import Content
from eventpages.core.config import TransportConfig
from eventpages.core.download import DownloadView, format_file_size, parse_contents
from eventpages.core.errors import FetchError
from eventpages.core.transport import HttpxTransport, Transport, get_transport, set_transport

CONTENTS_URL = "https://example.com/contents.xml"
CONTENTS_XML = """<?xml version="1.0"?>
<contents xmlns="http://earthquake.usgs.gov/earthquakes/event/contents">
  <file id="cdi_zip" title="Responses by Zip Code">
    <caption><![CDATA[Aggregated <em>responses</em>]]></caption>
    <format href="cdi_zip.xml" type="text/xml"/>
    <format href="cdi_zip.txt" type="text/plain"/>
  </file>
</contents>
"""


class TestParseContents:
    """Tests for parse_contents."""

    def test_namespaced_document(self):
        [entry] = parse_contents(CONTENTS_XML)

        assert entry.id == "cdi_zip"
        assert entry.title == "Responses by Zip Code"
        assert entry.caption == "Aggregated <em>responses</em>"
        assert [f.href for f in entry.formats] == ["cdi_zip.xml", "cdi_zip.txt"]

    def test_format_file_size(self):
        assert format_file_size(None) == ""
        assert format_file_size(512) == "512 B"
        assert format_file_size(2048) == "2.0 KB"


class TestDownloadView:
    """Tests for DownloadView."""

    @pytest.mark.asyncio
    async def test_render(self):
        product = make_product(type="dyfi", contents={"cdi_zip.xml": "https://example.com/cdi_zip.xml"})
        content = Content(path="contents.xml", url=CONTENTS_URL)
        view = DownloadView(model=content, product=product, transport=FakeTransport({CONTENTS_URL: CONTENTS_XML}))

        view.render()
        await view.wait()

        html = str(view.el)
        assert '<dt class="download-title">Responses by Zip Code</dt>' in html
        assert '<a href="https://example.com/cdi_zip.xml">cdi_zip.xml</a>' in html
        assert "<li>cdi_zip.txt</li>" in html

    @pytest.mark.asyncio
    async def test_empty_listing(self):
        content = Content(path="contents.xml", url=CONTENTS_URL)
        view = DownloadView(model=content, transport=FakeTransport({CONTENTS_URL: "<contents/>"}))

        view.render()
        await view.wait()

        assert view.el.text_content == "No downloads available."


class TestHttpxTransport:
    """Tests for HttpxTransport."""

    def make_transport(self, handler) -> HttpxTransport:
        transport = HttpxTransport(TransportConfig(user_agent="eventpages-test"))
        transport._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return transport

    def test_satisfies_protocol(self):
        assert isinstance(HttpxTransport(), Transport)

    @pytest.mark.asyncio
    async def test_fetch_text(self):
        async with self.make_transport(lambda request: httpx.Response(200, text="[]")) as transport:
            assert await transport.fetch_text("https://example.com/a.json") == "[]"
        assert transport._client is None

    @pytest.mark.asyncio
    async def test_status_error(self):
        transport = self.make_transport(lambda request: httpx.Response(404))

        with pytest.raises(FetchError) as exc_info:
            await transport.fetch_text("https://example.com/missing.json")
        await transport.aclose()

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://example.com/missing.json"

    @pytest.mark.asyncio
    async def test_request_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = self.make_transport(handler)

        with pytest.raises(FetchError) as exc_info:
            await transport.fetch_text("https://example.com/a.json")
        await transport.aclose()

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport = self.make_transport(handler)

        with pytest.raises(FetchError, match="timed out"):
            await transport.fetch_text("https://example.com/a.json")
        await transport.aclose()

    def test_default_transport(self):
        fake = FakeTransport()

        assert isinstance(get_transport(), HttpxTransport)
        set_transport(fake)
        assert get_transport() is fake
