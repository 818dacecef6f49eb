"""
Exception taxonomy for event pages.

Views recover from all of these locally; none is meant to escape a view
into its parent during a render pass.
"""


class EventPagesError(Exception):
    """Base exception for event page errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ViewDestroyedError(EventPagesError):
    """Raised when a destroyed view is asked to render."""

    pass


class ContentMissingError(EventPagesError):
    """A required content descriptor is absent from an otherwise valid product."""

    def __init__(self, content_name: str):
        super().__init__(f"Content not found: {content_name}")
        self.content_name = content_name


class FetchError(EventPagesError):
    """Transport-level failure loading auxiliary content."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ConfigError(EventPagesError):
    """Raised when a configuration file cannot be parsed."""

    pass
