"""
Soup Tree - an in-process tree backed by BeautifulSoup.

Content is HTML parsed with BeautifulSoup and CSS selectors are evaluated
by soupsieve, so no browser is needed. Event listeners live on the
document; events bubble from the target up through its ancestors.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union
from urllib.parse import urljoin
import logging

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from domscreen.core.config import DomScreenConfig
from domscreen.core.events import Event
from domscreen.core.lifecycle import RenderLifecycle
from domscreen.core.node import Document, Node

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], Any]

# A component is called with its container after mounting; it may return
# more HTML to append.
SoupContent = Union[str, Callable[["SoupNode"], Optional[str]]]

_BLANK_PAGE = "<html><head><title></title></head><body></body></html>"


class SoupNode(Node):
    """Node handle wrapping a BeautifulSoup ``Tag``."""

    def __init__(self, tag: Tag, document: "SoupDocument"):
        self._tag = tag
        self._document = document

    @property
    def raw(self) -> Tag:
        """The wrapped BeautifulSoup tag."""
        return self._tag

    @property
    def tag(self) -> str:
        return self._tag.name.lower()

    @property
    def attributes(self) -> Dict[str, str]:
        attrs = {}
        for name, value in self._tag.attrs.items():
            # BeautifulSoup splits multi-valued attributes such as class.
            attrs[name] = " ".join(value) if isinstance(value, list) else value
        return attrs

    @property
    def id(self) -> Optional[str]:
        return self.get_attribute("id")

    @property
    def children(self) -> List["SoupNode"]:
        return [self._wrap(c) for c in self._tag.children if isinstance(c, Tag)]

    @property
    def parent(self) -> Optional["SoupNode"]:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return self._wrap(parent)

    @property
    def owner_document(self) -> "SoupDocument":
        return self._document

    def text_nodes(self) -> List[str]:
        return [
            str(c) for c in self._tag.children
            if isinstance(c, NavigableString) and not isinstance(c, PreformattedString)
        ]

    def descendants(self) -> Iterator["SoupNode"]:
        for tag in self._tag.find_all(True):
            yield self._wrap(tag)

    def matches(self, selector: str) -> bool:
        return soupsieve.match(selector, self._tag)

    def query_selector_all(self, selector: str) -> List["SoupNode"]:
        return [self._wrap(t) for t in soupsieve.select(selector, self._tag)]

    def dispatch_event(self, event: Event) -> None:
        self._document.dispatch(self, event)

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        self._document.add_listener(self, event_type, handler)

    def remove_event_listener(self, event_type: str, handler: EventHandler) -> None:
        self._document.remove_listener(self, event_type, handler)

    @property
    def value(self) -> str:
        if self.tag == "textarea":
            return self._tag.get_text()
        if self.tag == "select":
            option = self._selected_option()
            return _option_value(option) if option is not None else ""
        return self.get_attribute("value") or ""

    @value.setter
    def value(self, new_value: str) -> None:
        if self.tag == "textarea":
            self._tag.string = new_value
        elif self.tag == "select":
            for option in self._tag.find_all("option"):
                if _option_value(option) == new_value:
                    option["selected"] = ""
                elif option.has_attr("selected"):
                    del option["selected"]
        else:
            self._tag["value"] = new_value

    def remove(self) -> None:
        self._tag.extract()

    def inner_html(self) -> str:
        return self._tag.decode_contents()

    def append_html(self, html: str) -> None:
        """Parses an HTML fragment and appends it as the last children."""
        fragment = BeautifulSoup(html, self._document.config.html_parser)
        for child in list(fragment.contents):
            self._tag.append(child.extract())

    def _selected_option(self) -> Optional[Tag]:
        options = self._tag.find_all("option")
        for option in options:
            if option.has_attr("selected"):
                return option
        return options[0] if options else None

    def _wrap(self, tag: Tag) -> "SoupNode":
        return SoupNode(tag, self._document)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)


def _option_value(option: Tag) -> str:
    value = option.get("value")
    return value if value is not None else option.get_text().strip()


class SoupDocument(Document):
    """
    A blank page held in memory.

    Example:
        >>> doc = SoupDocument()
        >>> doc.title = "Inbox"
        >>> doc.push_state("/mail/1")
        >>> doc.url
        'http://localhost/mail/1'
    """

    def __init__(self, config: Optional[DomScreenConfig] = None):
        self.config = config or DomScreenConfig()
        self.soup = BeautifulSoup(_BLANK_PAGE, self.config.html_parser)
        self.active_element: Optional[SoupNode] = None
        self._url = self.config.base_url
        # Keyed by id() of the tag; the tag is kept alongside so the id stays unique.
        self._listeners: Dict[int, Tuple[Tag, Dict[str, List[EventHandler]]]] = {}

    @property
    def url(self) -> str:
        return self._url

    @url.setter
    def url(self, value: str) -> None:
        self._url = value

    def push_state(self, path: str) -> None:
        """Navigates to ``path``, resolved against the current URL."""
        self._url = urljoin(self._url, path)
        logger.debug(f"[SoupDocument] Navigated to {self._url}")

    @property
    def title(self) -> str:
        title = self.soup.title
        return title.get_text() if title is not None else ""

    @title.setter
    def title(self, value: str) -> None:
        self.soup.title.string = value

    @property
    def body(self) -> SoupNode:
        return SoupNode(self.soup.body, self)

    def create_element(self, tag: str) -> SoupNode:
        return SoupNode(self.soup.new_tag(tag), self)

    def append_child(self, parent: Node, child: Node) -> None:
        parent.raw.append(child.raw)

    def add_listener(self, node: SoupNode, event_type: str, handler: EventHandler) -> None:
        _, by_type = self._listeners.setdefault(id(node.raw), (node.raw, {}))
        by_type.setdefault(event_type, []).append(handler)

    def remove_listener(self, node: SoupNode, event_type: str, handler: EventHandler) -> None:
        entry = self._listeners.get(id(node.raw))
        if entry is None:
            return
        handlers = entry[1].get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def drop_listeners(self, root: SoupNode) -> None:
        """Forgets the listeners of ``root`` and its descendants."""
        for node in [root, *root.descendants()]:
            self._listeners.pop(id(node.raw), None)

    def dispatch(self, target: SoupNode, event: Event) -> None:
        event.target = target
        if event.type == "focus":
            self.active_element = target
        elif event.type == "blur" and self.active_element == target:
            self.active_element = None

        node: Optional[SoupNode] = target
        while node is not None:
            event.current_target = node
            entry = self._listeners.get(id(node.raw))
            if entry is not None:
                for handler in list(entry[1].get(event.type, [])):
                    handler(event)
            if not event.bubbles or event.propagation_stopped:
                break
            node = node.parent
        logger.debug(f"[SoupDocument] Dispatched {event.type} to {target}")


@dataclass
class SoupRoot:
    """A mount point inside a SoupDocument."""
    container: SoupNode
    mounted: bool = True


class SoupLifecycle(RenderLifecycle[SoupRoot, SoupContent]):
    """
    Render lifecycle for the in-process tree.

    ``render`` accepts an HTML string, or a component callable that gets the
    container node (to add children and listeners) and may return HTML.

    Example:
        >>> def counter(container):
        ...     container.append_html("<button>+</button><span>0</span>")
        ...     button, = container.query_selector_all("button")
        ...     button.add_event_listener("click", lambda ev: ...)
        >>> session.render(counter)
    """

    def __init__(self, document: Optional[SoupDocument] = None, config: Optional[DomScreenConfig] = None):
        self._document = document or SoupDocument(config)

    @property
    def document(self) -> SoupDocument:
        return self._document

    def create_root(self, container: SoupNode) -> SoupRoot:
        return SoupRoot(container=container)

    def render(self, root: SoupRoot, content: SoupContent) -> None:
        if not root.mounted:
            raise RuntimeError("cannot render into a destroyed root")
        self._clear(root)
        html = content(root.container) if callable(content) else content
        if html:
            root.container.append_html(html)

    def destroy_root(self, root: SoupRoot) -> None:
        self._clear(root)
        self._document.drop_listeners(root.container)
        root.mounted = False

    def _clear(self, root: SoupRoot) -> None:
        for child in root.container.children:
            self._document.drop_listeners(child)
        root.container.raw.clear()
