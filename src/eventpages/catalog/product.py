"""
Product domain model.

A product is one versioned data artifact contributed to an event, identified
by (type, source, code, update_time). Products are read-only for views.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from eventpages.catalog.content import Content

SCENARIO_SUFFIX = "-scenario"

STATUS_UPDATE = "UPDATE"
STATUS_DELETE = "DELETE"

# Feed attribute names -> dataclass fields
_ATTRIBUTE_NAMES = {
    "updateTime": "update_time",
    "preferredWeight": "preferred_weight",
}


def normalize_type(type: str) -> str:
    """Normalize a product type for use as a lookup key."""
    return type.strip().lower()


def get_full_type(type: str, config: Any = None) -> str:
    """
    Get the product type to request for `type` under `config`.

    In scenario mode the scenario variant is requested instead, e.g.
    "shakemap" becomes "shakemap-scenario". `config` may be an
    EventPagesConfig or a plain mapping with a "scenario_mode" key.
    """
    if isinstance(config, Mapping):
        scenario_mode = config.get("scenario_mode", config.get("SCENARIO_MODE", False))
    else:
        scenario_mode = getattr(config, "scenario_mode", False)

    if scenario_mode is True and not type.endswith(SCENARIO_SUFFIX):
        return type + SCENARIO_SUFFIX
    return type


@dataclass(frozen=True, eq=False)
class Product:
    """
    Versioned data artifact belonging to an event.

    `update_time` is milliseconds since the epoch and discriminates versions
    sharing the same source and code. Products compare by identity.
    """

    type: str
    source: str
    code: str
    update_time: int
    status: str = STATUS_UPDATE
    preferred_weight: int = 0
    properties: Mapping[str, Any] = field(default_factory=dict)
    contents: Mapping[str, Content] = field(default_factory=dict)

    get_full_type = staticmethod(get_full_type)

    @property
    def id(self) -> str:
        return f"urn:usgs-product:{self.source}:{self.type}:{self.code}:{self.update_time}"

    @property
    def is_deleted(self) -> bool:
        return self.status.upper() == STATUS_DELETE

    def get(self, attribute: str, default: Any = None) -> Any:
        """
        Read a product attribute, falling back to product properties.

        Accepts feed names ("updateTime") as well as attribute names.
        """
        name = _ATTRIBUTE_NAMES.get(attribute, attribute)
        if name in self.__dataclass_fields__ and name not in ("properties", "contents"):
            return getattr(self, name)
        return self.properties.get(attribute, default)

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    def get_content(self, name: str) -> Content | None:
        return self.contents.get(name)

    def is_reviewed(self) -> bool | None:
        """
        Tri-state review flag.

        Returns None when no review status was set, so callers can tell
        "not reviewed" apart from "unknown".
        """
        status = self.properties.get("review-status")
        if status is None:
            return None
        return str(status).strip().lower() == "reviewed"

    @classmethod
    def from_dict(cls, data: dict[str, Any], type: str | None = None) -> "Product":
        """Create from a product entry of an event-detail GeoJSON document."""
        contents = {
            path: Content.from_dict(path, content)
            for path, content in (data.get("contents") or {}).items()
        }
        return cls(
            type=data.get("type", type or ""),
            source=data["source"],
            code=data["code"],
            update_time=int(data.get("updateTime", 0)),
            status=data.get("status", STATUS_UPDATE),
            preferred_weight=int(data.get("preferredWeight", 0)),
            properties=dict(data.get("properties") or {}),
            contents=contents,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "code": self.code,
            "updateTime": self.update_time,
            "status": self.status,
            "preferredWeight": self.preferred_weight,
            "properties": dict(self.properties),
            "contents": {path: c.to_dict() for path, c in self.contents.items()},
        }
