"""
Screen Locator - lazy, immutable element queries.

A locator is a root element plus an ordered list of steps. Chaining appends
a step and returns a new locator; nothing touches the tree until elements
are requested.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple, TYPE_CHECKING
import logging

from domscreen.core.errors import CapabilityError, CardinalityError
from domscreen.core.events import Event, KEY_PRESS, is_printable
from domscreen.core.node import Node, VALUE_TAGS
from domscreen.core import strategies
from domscreen.core.strategies import NodeSet, TextQuery

if TYPE_CHECKING:
    from domscreen.core.lifecycle import Act

logger = logging.getLogger(__name__)

Matcher = Callable[[NodeSet], NodeSet]


@dataclass(frozen=True)
class LocatorStep:
    """One named transformation in a locator chain."""
    description: str
    match: Matcher


class ScreenLocator:
    """
    Lazily finds elements on a screen.

    Locators and filters are chained together and only executed when the
    elements are needed, so a locator always reflects the current state of
    the tree.

    Example:
        >>> loc = screen.locate("ul").locate_text("milk").first()
        >>> loc.describe()
        ['locate(ul)', 'locateText(milk)', 'first()']
        >>> loc.click()
    """

    def __init__(self, act: "Act", root: Node, steps: Tuple[LocatorStep, ...] = ()):
        self.act = act
        self.root = root
        self._steps = steps

    @classmethod
    def of(cls, act: "Act", root: Node) -> "ScreenLocator":
        """Returns a locator with no steps, matching only ``root``."""
        return cls(act, root, ())

    @property
    def steps(self) -> Tuple[LocatorStep, ...]:
        return self._steps

    def locate(self, selector: str) -> "ScreenLocator":
        """
        Returns a locator of all descendant elements matching the CSS
        selector. An empty selector returns this locator unchanged.
        """
        if selector == "":
            return self
        return self._chain(
            f"locate({selector})",
            lambda prev: strategies.match_query_selector(prev, selector),
        )

    def locate_role(self, role: str) -> "ScreenLocator":
        """Returns a locator of all descendant elements with a matching role."""
        return self._chain(f"locateRole({role})", lambda prev: strategies.match_role(prev, role))

    def locate_text(self, query: TextQuery) -> "ScreenLocator":
        """
        Returns a locator of all descendant elements whose own text contains
        the substring, or matches the compiled pattern.
        """
        if isinstance(query, str):
            return self._chain(f"locateText({query})", lambda prev: strategies.match_text(prev, query))
        return self._chain(
            f"locateText(regexp: {strategies.describe_query(query)})",
            lambda prev: strategies.match_regexp(prev, query),
        )

    def filter_text(self, query: TextQuery) -> "ScreenLocator":
        """Returns a locator that keeps the current elements whose own text matches."""
        return self._chain(
            f"filterText({strategies.describe_query(query)})",
            lambda prev: strategies.filter_text(prev, query),
        )

    def first(self) -> "ScreenLocator":
        """Returns a locator of the first element found."""
        return self._chain("first()", strategies.first_of)

    def describe(self) -> List[str]:
        """Returns the step descriptions, in order."""
        return [step.description for step in self._steps]

    def format_description(self) -> str:
        return " -> ".join(self.describe())

    def all_elements(self) -> List[Node]:
        """Evaluates every step from the root and returns the elements found."""
        found: NodeSet = {self.root: None}
        for step in self._steps:
            found = step.match(found)
        logger.debug(f"[ScreenLocator] {self.format_description() or '<root>'} matched {len(found)} element(s)")
        return list(found)

    def element(self) -> Node:
        """
        Returns the only element located.

        Raises:
            CardinalityError: if zero or more than one element is found
        """
        return self._single("but expected one")

    def click(self) -> None:
        """Clicks the only element found."""
        elem = self._single("to click")

        def run() -> None:
            elem.dispatch_event(Event("focus"))
            elem.dispatch_event(Event("click"))
            elem.dispatch_event(Event("blur"))

        self.act(run)

    def press(self, key: str) -> None:
        """
        Presses a single key on the only element found.

        Printable characters are appended to the element's value. Control
        keys (Enter, Tab, arrows) fire their events but leave the value
        alone.

        Raises:
            CardinalityError: if zero or more than one element is found
            CapabilityError: if the element is not a form control, or the
                key is not in ``KEY_PRESS``
        """
        elem = self._single("to press")
        if elem.tag not in VALUE_TAGS:
            raise CapabilityError(f"cannot press key on tag: {elem.tag}")
        key_ev = KEY_PRESS.get(key)
        if key_ev is None:
            raise CapabilityError(f"unknown key: {key}; maybe not yet added to KEY_PRESS?")

        def run() -> None:
            elem.dispatch_event(Event("focus"))
            elem.dispatch_event(key_ev.to_event("keydown"))
            elem.dispatch_event(key_ev.to_event("keyup"))
            if is_printable(key_ev):
                elem.value = elem.value + key_ev.key
            elem.dispatch_event(key_ev.to_event("keypress"))
            elem.dispatch_event(Event("input"))
            elem.dispatch_event(Event("change"))

        self.act(run)

    def fill(self, value: str) -> None:
        """Replaces the value of the only form field found."""
        elem = self._single("to fill")
        if elem.tag not in VALUE_TAGS:
            raise CapabilityError(f"cannot fill out tag: {elem.tag}")

        def run() -> None:
            elem.dispatch_event(Event("focus"))
            elem.value = value
            elem.dispatch_event(Event("input"))
            elem.dispatch_event(Event("change"))
            elem.dispatch_event(Event("blur"))

        self.act(run)

    def blur(self) -> None:
        elem = self._single("to blur")
        self.act(lambda: elem.dispatch_event(Event("blur")))

    def _single(self, action: str) -> Node:
        elems = self.all_elements()
        if len(elems) == 1:
            return elems[0]
        desc = self.format_description()
        kind = "no" if not elems else "multiple"
        raise CardinalityError(f"{kind} elements found {action}: {desc}", len(elems), desc)

    def _chain(self, description: str, match: Matcher) -> "ScreenLocator":
        return ScreenLocator(self.act, self.root, self._steps + (LocatorStep(description, match),))

    def __repr__(self) -> str:
        desc = self.format_description()
        return f"ScreenLocator({self.root}{' -> ' + desc if desc else ''})"
