"""Trees - concrete node backends and their render lifecycles."""

from domscreen.trees.soup_tree import SoupDocument, SoupLifecycle, SoupNode
from domscreen.trees.selenium_tree import SeleniumDocument, SeleniumLifecycle, SeleniumNode

__all__ = [
    "SeleniumDocument",
    "SeleniumLifecycle",
    "SeleniumNode",
    "SoupDocument",
    "SoupLifecycle",
    "SoupNode",
]
