"""Display formatting for event page values."""

import math
from datetime import datetime, timezone

KM_TO_MI = 0.621371

_ROMAN_NUMERALS = (
    "I", "II", "III", "IV", "V", "VI",
    "VII", "VIII", "IX", "X", "XI", "XII",
)


class Formatter:
    """
    Formats timestamps, distances and counts consistently across views.

    Example:
        formatter = Formatter()
        formatter.distance(12.34, "km")  # "12.3 km"
    """

    def __init__(self, decimals: int = 1, empty: str = "&ndash;"):
        self.decimals = decimals
        self.empty = empty

    def datetime(self, timestamp: int | float | datetime | None) -> str:
        """Format a millisecond epoch timestamp (or datetime) in UTC."""
        if timestamp is None:
            return self.empty
        if isinstance(timestamp, datetime):
            value = timestamp.astimezone(timezone.utc)
        else:
            value = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
        return value.strftime("%Y-%m-%d %H:%M:%S") + " (UTC)"

    def number(self, value: float | None, decimals: int | None = None, units: str = "") -> str:
        if value is None:
            return self.empty
        if decimals is None:
            decimals = self.decimals
        result = f"{value:.{decimals}f}"
        return f"{result} {units}" if units else result

    def distance(self, value: float | None, units: str = "km") -> str:
        return self.number(value, units=units)

    @staticmethod
    def km_to_mi(km: float) -> float:
        return km * KM_TO_MI

    @staticmethod
    def number_with_commas(value: int | float | None) -> str:
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return f"{value:,}"

    @staticmethod
    def mmi(value: int | float | None) -> str:
        """Roman numeral for an intensity value, or "" when out of range."""
        if value is None or not math.isfinite(value):
            return ""
        index = int(value)
        if 1 <= index <= len(_ROMAN_NUMERALS):
            return _ROMAN_NUMERALS[index - 1]
        return ""
