"""Registry of the modules an event page can show."""

from eventpages.core.module import Module
from eventpages.dyfi import DYFIModule
from eventpages.general import GeneralSummaryModule

MODULES: dict[str, type[Module]] = {
    module.ID: module for module in (GeneralSummaryModule, DYFIModule)
}


def get_module(module_id: str) -> type[Module] | None:
    """Look up a module class by ID."""
    return MODULES.get(module_id)
