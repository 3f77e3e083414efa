"""
Exceptions
===========
Errors raised by the simulation core.

Enemy escapes and player death are normal state transitions, not errors.
"""


class StarfallError(Exception):
    """Base class for all game errors."""


class InvalidArgument(StarfallError, ValueError):
    """Rejected constructor or configuration input."""


class NoBombCharges(StarfallError):
    """A screen bomb was requested with no charges left."""
