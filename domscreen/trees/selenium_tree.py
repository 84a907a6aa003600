"""
Selenium Tree - screens mounted into a live browser page.

Nodes wrap Selenium ``WebElement``s. Anything WebDriver has no direct
command for (own text nodes, selector self-match, event dispatch, value
setters) runs as a short script in the page.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, TYPE_CHECKING
import inspect
import logging

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

from domscreen.core.events import Event
from domscreen.core.lifecycle import RenderLifecycle
from domscreen.core.node import Document, Node

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver
    from selenium.webdriver.remote.webelement import WebElement

logger = logging.getLogger(__name__)

ATTRIBUTES_SCRIPT = """
const attrs = {};
for (const a of arguments[0].attributes) { attrs[a.name] = a.value; }
return attrs;
"""

TEXT_NODES_SCRIPT = """
const out = [];
for (const c of arguments[0].childNodes) {
    if (c.nodeType === Node.TEXT_NODE) { out.push(c.nodeValue); }
}
return out;
"""

MATCHES_SCRIPT = "return arguments[0].matches(arguments[1]);"

PARENT_SCRIPT = "return arguments[0].parentElement;"

# Uses the prototype's value setter so frameworks tracking the property
# see the change when the following input/change events fire.
SET_VALUE_SCRIPT = """
const el = arguments[0];
const proto = Object.getPrototypeOf(el);
const desc = Object.getOwnPropertyDescriptor(proto, 'value');
if (!desc || !desc.set) { throw new Error('element does not have a value setter'); }
desc.set.call(el, arguments[1]);
"""

DISPATCH_SCRIPT = """
const el = arguments[0], type = arguments[1], init = arguments[2];
let ev;
if (init.key !== undefined) {
    ev = new KeyboardEvent(type, init);
} else if (type === 'focus' || type === 'blur') {
    if (type === 'focus' && el.focus) { el.focus(); }
    if (type === 'blur' && el.blur) { el.blur(); }
    ev = new FocusEvent(type, init);
} else if (type === 'click') {
    ev = new MouseEvent(type, init);
} else {
    ev = new Event(type, init);
}
el.dispatchEvent(ev);
"""

REMOVE_SCRIPT = "arguments[0].remove();"
CREATE_ELEMENT_SCRIPT = "return document.createElement(arguments[0]);"
APPEND_CHILD_SCRIPT = "arguments[0].appendChild(arguments[1]);"
SET_TITLE_SCRIPT = "document.title = arguments[0];"
SET_INNER_HTML_SCRIPT = "arguments[0].innerHTML = arguments[1];"
READY_STATE_SCRIPT = "return document.readyState;"


class SeleniumNode(Node):
    """Node handle wrapping a Selenium WebElement."""

    def __init__(self, element: "WebElement", driver: "WebDriver"):
        self._element = element
        self._driver = driver

    @property
    def raw(self) -> "WebElement":
        return self._element

    @property
    def tag(self) -> str:
        return self._element.tag_name.lower()

    @property
    def attributes(self) -> Dict[str, str]:
        return self._driver.execute_script(ATTRIBUTES_SCRIPT, self._element) or {}

    @property
    def children(self) -> List["SeleniumNode"]:
        return self._wrap_all(self._element.find_elements(By.XPATH, "./*"))

    @property
    def parent(self) -> Optional["SeleniumNode"]:
        parent = self._driver.execute_script(PARENT_SCRIPT, self._element)
        return self._wrap(parent) if parent is not None else None

    @property
    def owner_document(self) -> "SeleniumDocument":
        return SeleniumDocument(self._driver)

    def text_nodes(self) -> List[str]:
        return list(self._driver.execute_script(TEXT_NODES_SCRIPT, self._element) or [])

    def descendants(self) -> Iterator["SeleniumNode"]:
        for elem in self._element.find_elements(By.CSS_SELECTOR, "*"):
            yield self._wrap(elem)

    def matches(self, selector: str) -> bool:
        return bool(self._driver.execute_script(MATCHES_SCRIPT, self._element, selector))

    def query_selector_all(self, selector: str) -> List["SeleniumNode"]:
        return self._wrap_all(self._element.find_elements(By.CSS_SELECTOR, selector))

    def dispatch_event(self, event: Event) -> None:
        init: Dict[str, Any] = {"bubbles": event.bubbles, "cancelable": event.cancelable}
        if event.key is not None:
            init.update({"key": event.key, "code": event.code, "keyCode": event.key_code})
        self._driver.execute_script(DISPATCH_SCRIPT, self._element, event.type, init)

    @property
    def value(self) -> str:
        return self._element.get_property("value") or ""

    @value.setter
    def value(self, new_value: str) -> None:
        self._driver.execute_script(SET_VALUE_SCRIPT, self._element, new_value)

    def remove(self) -> None:
        self._driver.execute_script(REMOVE_SCRIPT, self._element)

    def _wrap(self, element: "WebElement") -> "SeleniumNode":
        return SeleniumNode(element, self._driver)

    def _wrap_all(self, elements: List["WebElement"]) -> List["SeleniumNode"]:
        return [self._wrap(e) for e in elements]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SeleniumNode) and other._element == self._element

    def __hash__(self) -> int:
        return hash(self._element)


class SeleniumDocument(Document):
    """The page currently loaded in a WebDriver."""

    def __init__(self, driver: "WebDriver"):
        self.driver = driver

    @property
    def url(self) -> str:
        return self.driver.current_url

    @property
    def title(self) -> str:
        return self.driver.title

    @title.setter
    def title(self, value: str) -> None:
        self.driver.execute_script(SET_TITLE_SCRIPT, value)

    @property
    def body(self) -> SeleniumNode:
        return SeleniumNode(self.driver.find_element(By.TAG_NAME, "body"), self.driver)

    def create_element(self, tag: str) -> SeleniumNode:
        return SeleniumNode(self.driver.execute_script(CREATE_ELEMENT_SCRIPT, tag), self.driver)

    def append_child(self, parent: Node, child: Node) -> None:
        self.driver.execute_script(APPEND_CHILD_SCRIPT, parent.raw, child.raw)


@dataclass
class SeleniumRoot:
    container: SeleniumNode


class SeleniumLifecycle(RenderLifecycle[SeleniumRoot, str]):
    """
    Render lifecycle that mounts HTML into the page loaded in ``driver``.

    ``act`` waits for ``document.readyState`` to be complete after each
    callback so follow-up queries see a settled page.

    Example:
        >>> driver = webdriver.Chrome()
        >>> driver.get("https://example.com/app")
        >>> session = DomScreenSession.init_test(SeleniumLifecycle(driver), after_each=hooks.append)
    """

    def __init__(self, driver: "WebDriver", stability_timeout: float = 5.0):
        self.driver = driver
        self.stability_timeout = stability_timeout

    @property
    def document(self) -> SeleniumDocument:
        return SeleniumDocument(self.driver)

    def create_root(self, container: SeleniumNode) -> SeleniumRoot:
        return SeleniumRoot(container=container)

    def render(self, root: SeleniumRoot, content: str) -> None:
        self.driver.execute_script(SET_INNER_HTML_SCRIPT, root.container.raw, content)

    def destroy_root(self, root: SeleniumRoot) -> None:
        self.driver.execute_script(SET_INNER_HTML_SCRIPT, root.container.raw, "")

    def act(self, callback: Callable[[], Any]) -> Any:
        result = callback()
        if inspect.isawaitable(result):
            return self._settle_async(result)
        self._wait_for_stability()
        return result

    async def _settle_async(self, awaitable: Any) -> Any:
        result = await awaitable
        self._wait_for_stability()
        return result

    def _wait_for_stability(self) -> None:
        try:
            WebDriverWait(self.driver, self.stability_timeout).until(
                lambda d: d.execute_script(READY_STATE_SCRIPT) == "complete"
            )
        except TimeoutException:
            logger.warning(
                f"[SeleniumLifecycle] Page not ready after {self.stability_timeout}s, continuing"
            )
