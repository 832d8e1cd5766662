"""
UFH Flow Temperature Controller exceptions.

Simple exception hierarchy for error handling.
"""


class FlowTemperatureError(Exception):
    """Base exception for the flow temperature controller."""


class ConfigurationError(FlowTemperatureError, ValueError):
    """Configuration is invalid."""


class ZoneNotFoundError(FlowTemperatureError, KeyError):
    """A zone operation named a zone that does not exist."""

    def __init__(self, zone_id: str) -> None:
        """Store the missing zone identifier."""
        super().__init__(zone_id)
        self.zone_id = zone_id

    def __str__(self) -> str:
        """Return a readable message instead of KeyError's repr."""
        return f"Unknown zone: {self.zone_id}"
