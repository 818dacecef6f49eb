"""Product content descriptors."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Content:
    """A named resource belonging to a product, usually URL-bearing."""

    path: str
    url: str | None = None
    content_type: str | None = None
    length: int | None = None
    last_modified: int | None = None
    bytes: str | None = None  # inline content, when the feed embeds it

    def get(self, attribute: str, default: Any = None) -> Any:
        """Read an attribute by its feed name (e.g. "url", "contentType")."""
        names = {
            "contentType": "content_type",
            "lastModified": "last_modified",
        }
        return getattr(self, names.get(attribute, attribute), default)

    @classmethod
    def from_dict(cls, path: str, data: dict[str, Any]) -> "Content":
        return cls(
            path=path,
            url=data.get("url"),
            content_type=data.get("contentType"),
            length=data.get("length"),
            last_modified=data.get("lastModified"),
            bytes=data.get("bytes"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.url is not None:
            result["url"] = self.url
        if self.content_type is not None:
            result["contentType"] = self.content_type
        if self.length is not None:
            result["length"] = self.length
        if self.last_modified is not None:
            result["lastModified"] = self.last_modified
        if self.bytes is not None:
            result["bytes"] = self.bytes
        return result
