"""
Observable attribute bag shared between a page and its views.

A page model typically holds:
    event   -- the CatalogEvent being summarized
    config  -- the EventPagesConfig for this render pass
    <ID>    -- per-module parameter bags ({"source", "code", "updateTime"})
"""

from collections.abc import Mapping
from typing import Any

from eventpages.core.events import EventEmitter


class Model(EventEmitter):
    """
    Attribute bag that announces changes.

    Triggers "change" with the changed keys after every non-silent `set`,
    and "change:<key>" for each changed key.
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None, **kwargs: Any):
        super().__init__()
        self._attributes: dict[str, Any] = {}
        self._attributes.update(attributes or {})
        self._attributes.update(kwargs)

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, attributes: Mapping[str, Any], silent: bool = False) -> None:
        changed = [
            key
            for key, value in attributes.items()
            if key not in self._attributes or self._attributes[key] is not value
        ]
        self._attributes.update(attributes)
        if silent or not changed:
            return
        for key in changed:
            self.trigger(f"change:{key}", self._attributes[key])
        self.trigger("change", changed)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._attributes)

    def __contains__(self, key: str) -> bool:
        return key in self._attributes
