"""
DOM Screen - DOM assertions for tests.

Mount a UI fragment, find elements with lazy, chainable locators and
assert against them with custom matchers.
"""

__version__ = "0.4.0"

from domscreen.core import (
    DomScreen,
    DomScreenConfig,
    DomScreenSession,
    ScreenLocator,
)
from domscreen.matchers import Expect, make_screen_matchers

__all__ = [
    "DomScreen",
    "DomScreenConfig",
    "DomScreenSession",
    "Expect",
    "ScreenLocator",
    "make_screen_matchers",
    "__version__",
]
