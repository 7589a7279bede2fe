class ClockError(Exception):
    """Base exception for clock arithmetic."""


class InvalidTimeError(ClockError):
    """Raised when a time component is outside its natural range."""


class BoundaryError(ClockError):
    """Raised when a tick would move the clock past its floor or ceiling."""
