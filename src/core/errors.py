"""Scheduling exceptions.

Conflicts between bookings are not errors: they come back from
``Station.schedule`` as ``Conflict`` values. The exceptions here cover caller
mistakes such as unknown platforms or malformed input.
"""


class SchedulingError(Exception):
    """Base exception for the station scheduler."""


class PlatformNotFoundError(SchedulingError):
    """Raised when a station has no platform with the requested id."""

    def __init__(self, platform_id: int) -> None:
        super().__init__(f"Platform {platform_id} not found")
        self.platform_id = platform_id


class DuplicatePlatformError(SchedulingError):
    """Raised when a platform id is added to a station twice."""

    def __init__(self, platform_id: int) -> None:
        super().__init__(f"Platform {platform_id} already exists")
        self.platform_id = platform_id


class InvalidLineError(SchedulingError):
    """Raised when a line name is empty or not text."""


class InvalidInstantError(SchedulingError):
    """Raised when an instant is not whole seconds or a valid clock time."""
