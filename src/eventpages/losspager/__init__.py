"""PAGER (Prompt Assessment of Global Earthquakes for Response) views."""

from eventpages.losspager.pager_view import ALERT_LEVELS, PAGERView
from eventpages.losspager.pin_view import PAGERPinView

__all__ = ["PAGERView", "PAGERPinView", "ALERT_LEVELS"]
