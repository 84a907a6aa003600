"""
Errors raised by DOM Screen.

Configuration, cardinality and capability errors are programmer errors in
the test and are raised immediately. Failed assertions are reported as
plain ``AssertionError`` by the expect registry instead.
"""


class DomScreenError(Exception):
    """Base class for all DOM Screen errors."""


class ConfigurationError(DomScreenError):
    """The session was used before setup, or the host tree is unavailable."""


class CardinalityError(DomScreenError):
    """A single-element operation found zero or multiple elements."""

    def __init__(self, message: str, count: int, description: str):
        super().__init__(message)
        self.count = count
        self.description = description


class CapabilityError(DomScreenError):
    """An interaction was attempted on a node that cannot support it."""


class UnsupportedReceiverError(DomScreenError, TypeError):
    """A matcher received something that is not a screen, locator or node."""
