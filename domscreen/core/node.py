"""
Node Capability Contract.

The locator pipeline never touches a concrete tree API. It works against
the small set of operations declared here, so any tree (the in-process
BeautifulSoup tree, a live browser page driven by Selenium) can back a
screen by implementing ``Node`` and ``Document``.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from domscreen.core.events import Event


# Tags whose value can be read and written by fill() and press().
VALUE_TAGS = ("input", "textarea", "select")

# Tags whose own text is their current value rather than their text nodes.
TEXT_INPUT_TAGS = ("input", "textarea")


class Node(ABC):
    """
    Handle to one element of a rendered tree.

    Handles are compared by the identity of the element they wrap, so two
    handles created for the same element are equal and hash the same. This
    is what lets a match-set collapse duplicates found through different
    branches.
    """

    @property
    @abstractmethod
    def tag(self) -> str:
        """Lower-case tag name."""

    @property
    @abstractmethod
    def attributes(self) -> Dict[str, str]:
        """Attribute name to value."""

    @property
    @abstractmethod
    def children(self) -> List["Node"]:
        """Child elements in document order."""

    @property
    @abstractmethod
    def parent(self) -> Optional["Node"]:
        """Parent element, or None when detached or at the top."""

    @property
    @abstractmethod
    def owner_document(self) -> "Document":
        """The document this node belongs to."""

    @abstractmethod
    def text_nodes(self) -> List[str]:
        """Raw strings of the direct text-node children, in order."""

    @abstractmethod
    def descendants(self) -> Iterator["Node"]:
        """All descendant elements in document order, excluding self."""

    @abstractmethod
    def matches(self, selector: str) -> bool:
        """Whether this element itself matches a CSS selector."""

    @abstractmethod
    def query_selector_all(self, selector: str) -> List["Node"]:
        """Descendant elements matching a CSS selector, excluding self."""

    @abstractmethod
    def dispatch_event(self, event: "Event") -> None:
        """Deliver an event to this element."""

    @property
    @abstractmethod
    def value(self) -> str:
        """Current value of an input, textarea or select."""

    @value.setter
    @abstractmethod
    def value(self, new_value: str) -> None:
        ...

    @abstractmethod
    def remove(self) -> None:
        """Detach this element from its parent."""

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def __str__(self) -> str:
        attrs = "".join(f' {k}="{v}"' for k, v in self.attributes.items())
        return f"<{self.tag}{attrs}>"


class Document(ABC):
    """The page that owns a tree: URL, title and element factory."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Current URL of the page."""

    @property
    @abstractmethod
    def title(self) -> str:
        ...

    @title.setter
    @abstractmethod
    def title(self, value: str) -> None:
        ...

    @property
    @abstractmethod
    def body(self) -> Node:
        """The element screens are mounted under."""

    @abstractmethod
    def create_element(self, tag: str) -> Node:
        """Create a detached element."""

    @abstractmethod
    def append_child(self, parent: Node, child: Node) -> None:
        """Attach ``child`` as the last child of ``parent``."""
