"""
Exceptions raised by the scheduling engine.
"""


class SchedulingError(Exception):
    """Base class for scheduling failures."""


class SchedulingInputError(SchedulingError, ValueError):
    """Raised when a scheduling run is handed structurally invalid input."""
