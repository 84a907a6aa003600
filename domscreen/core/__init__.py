"""Core module - locators, screens and the node contract."""

from domscreen.core.config import DomScreenConfig
from domscreen.core.errors import (
    CapabilityError,
    CardinalityError,
    ConfigurationError,
    DomScreenError,
    UnsupportedReceiverError,
)
from domscreen.core.lifecycle import RenderLifecycle, immediate_act
from domscreen.core.locator import ScreenLocator
from domscreen.core.node import Document, Node
from domscreen.core.screen import DomScreen, DomScreenSession

__all__ = [
    "CapabilityError",
    "CardinalityError",
    "ConfigurationError",
    "Document",
    "DomScreen",
    "DomScreenConfig",
    "DomScreenError",
    "DomScreenSession",
    "Node",
    "RenderLifecycle",
    "ScreenLocator",
    "UnsupportedReceiverError",
    "immediate_act",
]
