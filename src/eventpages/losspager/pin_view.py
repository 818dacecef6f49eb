"""PAGER summary pin."""

from types import SimpleNamespace
from typing import Any

from eventpages.core.model import Model
from eventpages.core.pin import BasicPinView
from eventpages.losspager.pager_view import PAGERView

DEFAULT_MODULE = SimpleNamespace(ID="pager", TITLE="PAGER", TYPES=("losspager",))


class PAGERPinView(BasicPinView):
    """Pin whose content is the PAGER alert summary."""

    def __init__(self, model: Model | None = None, module: Any = None, **options: Any):
        super().__init__(model=model, module=module or DEFAULT_MODULE, **options)
        self.pager_view = PAGERView(model=self.product)
        self.add_teardown(self._teardown_pager_pin)

    def render_pin_content(self) -> None:
        # the page model may have changed since construction
        self.pager_view.model = self.product
        self.pager_view.render()
        self.content.replace_children(self.pager_view.el)

    def _teardown_pager_pin(self) -> None:
        self.pager_view.destroy()
        self.pager_view = None
