"""Configuration for DOM Screen sessions."""

from dataclasses import dataclass


@dataclass
class DomScreenConfig:
    """Configuration for a DomScreenSession and its tree backend."""
    container_tag: str = "dom-screen"  # Tag of the element each render mounts into
    base_url: str = "http://localhost/"  # Initial URL of in-process documents
    html_parser: str = "html.parser"  # BeautifulSoup parser for in-process trees
    reset_title_on_cleanup: bool = True
