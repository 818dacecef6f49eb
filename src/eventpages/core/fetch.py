"""
Fetch-backed views.

A `FetchView` renders content that requires one asynchronous load per
render cycle:

    IDLE -> LOADING -> SUCCESS
                    -> ERROR

Every render cancels the in-flight request (if any) and issues a new one
tagged with a fresh request id. Completion is delivered by the task's
done-callback, which still fires for superseded and cancelled requests;
it only touches the view when the view is alive and the request id is
still current. Late results are dropped without a trace.

Rendering must happen inside a running event loop; without one the view
goes straight to the error state.
"""

import asyncio
import functools
import json
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from markupsafe import escape

from eventpages.catalog import Content
from eventpages.core.element import Element
from eventpages.core.errors import ContentMissingError, FetchError
from eventpages.core.transport import Transport, get_transport
from eventpages.core.view import View

logger = logging.getLogger(__name__)

LOADING_MARKUP = "Loading content&hellip;"


class FetchState(Enum):
    """Fetch lifecycle states."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FetchView(View, ABC):
    """
    Base class for views whose content comes from one remote resource.

    Subclasses name the resource (`get_content`), turn the response body
    into data (`parse`), and turn data into markup (`render_data`).

    Options:
        transport: Transport used to load content (default: process-wide).
        error_message: Message rendered when loading fails.

    Events:
        SUCCESS_EVENT: fired with the parsed data.
        ERROR_EVENT: fired with no payload; read `error_message` and `error`.
    """

    SUCCESS_EVENT = "load"
    ERROR_EVENT = "load-error"
    DEFAULT_ERROR_MESSAGE = "Error loading content."

    def __init__(
        self,
        model: Any = None,
        el: Element | None = None,
        transport: Transport | None = None,
        error_message: str | None = None,
        **options: Any,
    ):
        super().__init__(model=model, el=el, **options)
        self._transport = transport
        self.error_message = error_message or self.DEFAULT_ERROR_MESSAGE
        self.error: Exception | None = None
        self.state = FetchState.IDLE
        self._request_id = 0
        self._task: asyncio.Task | None = None
        self.add_teardown(self._teardown_fetch)

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = get_transport()
        return self._transport

    @property
    def is_loading(self) -> bool:
        return self.state == FetchState.LOADING

    @abstractmethod
    def get_content(self) -> Content | None:
        """Content descriptor to load, or None when the model has none."""
        ...

    def parse(self, text: str) -> Any:
        """Turn the response body into data. Defaults to JSON."""
        return json.loads(text)

    @abstractmethod
    def render_data(self, data: Any) -> Element | str:
        """Turn loaded data into an element or trusted markup."""
        ...

    def render(self) -> None:
        """Show a loading indicator and start loading content."""
        self._ensure_alive()
        self.cancel()
        self.el.set_html(LOADING_MARKUP)
        self.fetch_data()

    def fetch_data(self) -> None:
        content = self.get_content()
        if content is None or not content.url:
            name = content.path if content is not None else type(self).__name__
            self.on_error(ContentMissingError(name))
            return

        self._request_id += 1
        request_id = self._request_id
        self.state = FetchState.LOADING
        self.error = None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            # fetch-backed views render inside a running event loop
            self.on_error(FetchError(f"Cannot load {content.url}: {e}", url=content.url))
            return
        task = loop.create_task(self._load(content.url))
        task.add_done_callback(functools.partial(self._on_done, request_id))
        self._task = task
        logger.debug(f"{type(self).__name__} request {request_id}: {content.url}")

    async def _load(self, url: str) -> Any:
        text = await self.transport.fetch_text(url)
        return self.parse(text)

    def _on_done(self, request_id: int, task: asyncio.Task) -> None:
        if self._destroyed or request_id != self._request_id:
            if not task.cancelled():
                task.exception()
            logger.debug(f"{type(self).__name__} discarding stale request {request_id}")
            return

        if task.cancelled():
            # cancel() supersedes the request, so this came from elsewhere
            error = FetchError(f"Request {request_id} was cancelled")
        else:
            error = task.exception()

        self._task = None
        if error is not None:
            self.on_error(error)
        else:
            self.on_success(task.result())

    def on_success(self, data: Any) -> None:
        rendered = self.render_data(data)
        if isinstance(rendered, Element):
            self.el.replace_children(rendered)
        else:
            self.el.set_html(rendered)
        self.state = FetchState.SUCCESS
        self.trigger(self.SUCCESS_EVENT, data)

    def on_error(self, error: Exception | None = None) -> None:
        if error is not None:
            logger.warning(f"{type(self).__name__} failed to load content: {error}")
        self.error = error
        self.el.set_html(escape(self.error_message))
        self.state = FetchState.ERROR
        self.trigger(self.ERROR_EVENT)

    def cancel(self) -> None:
        """Abort the in-flight request, if any. Its result will be ignored."""
        if self._task is not None and not self._task.done():
            logger.debug(f"{type(self).__name__} cancelling request {self._request_id}")
            self._task.cancel()
        self._task = None
        # supersede whatever is still in flight
        self._request_id += 1
        if self.state == FetchState.LOADING:
            self.state = FetchState.IDLE

    async def wait(self) -> None:
        """Wait until the current request settles."""
        task = self._task
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
        except Exception:
            # reported through on_error by the done-callback
            pass

    def _teardown_fetch(self) -> None:
        self.cancel()
        self._transport = None
