"""
DOM Screen - mounted screens and the session that owns them.

A session is created once per test module (or per test, with the pytest
fixture) by an explicit setup call. It renders content into fresh
containers, hands back a ``DomScreen`` for each, and tears every container
down again when the test's cleanup hook fires.
"""

from typing import Any, Callable, List, Optional, TYPE_CHECKING
import logging

from domscreen.core.config import DomScreenConfig
from domscreen.core.errors import ConfigurationError, DomScreenError
from domscreen.core.locator import ScreenLocator
from domscreen.core.node import Node
from domscreen.core.strategies import TextQuery

if TYPE_CHECKING:
    from domscreen.core.lifecycle import Act, RenderLifecycle
    from domscreen.matchers.expect import Expect

logger = logging.getLogger(__name__)

INIT_HINT = """
HINT: set up a session at the top of the test module. For example:

   from domscreen import DomScreenSession
   from domscreen.trees import SoupLifecycle

   session = DomScreenSession.init_test(SoupLifecycle(), after_each=register_cleanup)

or request the dom_session fixture from the domscreen pytest plugin.
"""


class DomScreen:
    """
    A rendered container and the root locator over it.

    Example:
        >>> screen = session.render("<button>Save</button>")
        >>> screen.locate_text("Save").click()
    """

    def __init__(self, container: Node, act: "Act"):
        self.container = container
        self._loc = ScreenLocator.of(act, container)

    def locate(self, selector: str) -> ScreenLocator:
        """Returns a locator for all elements matching a selector."""
        return self._loc.locate(selector)

    def locate_role(self, role: str) -> ScreenLocator:
        """Returns a locator for all elements with a matching role."""
        return self._loc.locate_role(role)

    def locate_text(self, query: TextQuery) -> ScreenLocator:
        """Returns a locator of all elements that directly contain the text."""
        return self._loc.locate_text(query)

    def __repr__(self) -> str:
        return f"DomScreen({self.container})"


class DomScreenSession:
    """
    Owns the render lifecycle, the controlled-environment runner and the
    cleanups of every screen rendered through it.

    Sessions are independent: several may live in one process, each with
    its own cleanup list and matcher registry.
    """

    def __init__(
        self,
        lifecycle: "RenderLifecycle",
        act: Optional["Act"] = None,
        config: Optional[DomScreenConfig] = None,
    ):
        self.lifecycle = lifecycle
        self.config = config or DomScreenConfig()
        self.expect: Optional["Expect"] = None
        self._act = act or lifecycle.act
        self._cleanups: List[Callable[[], None]] = []
        self._cleanup_registered = False

    @classmethod
    def init_test(
        cls,
        lifecycle: "RenderLifecycle",
        *,
        after_each: Callable[[Callable[[], None]], Any],
        act: Optional["Act"] = None,
        expect: Optional["Expect"] = None,
        config: Optional[DomScreenConfig] = None,
    ) -> "DomScreenSession":
        """
        Creates a session, adds the screen matchers to ``expect`` and
        registers the session cleanup with the test runner.

        Args:
            lifecycle: Render lifecycle that mounts content
            after_each: Test runner hook; called once with the cleanup function
            act: Controlled-environment runner (defaults to the lifecycle's)
            expect: Matcher registry to extend (a new one when omitted)
            config: Session configuration

        Returns:
            The ready session
        """
        from domscreen.matchers.expect import Expect
        from domscreen.matchers.screen_matchers import make_screen_matchers

        session = cls(lifecycle, act=act, config=config)
        session.expect = expect if expect is not None else Expect()
        session.expect.extend(make_screen_matchers(session.act, session.config))
        after_each(session.cleanup)
        session._cleanup_registered = True
        logger.info(f"[DomScreen] Session initialized with {type(lifecycle).__name__}")
        return session

    @property
    def is_initialized(self) -> bool:
        return self._cleanup_registered

    def act(self, callback: Callable[[], Any]) -> Any:
        """Runs the callback in the controlled environment."""
        self._verify_init("act")
        return self._act(callback)

    def render(self, content: Any) -> DomScreen:
        """Renders content into a new container and returns its screen."""
        self._verify_init("render")
        document = self.lifecycle.document
        if document is None:
            raise ConfigurationError("document is not defined. Is a tree backend configured for the lifecycle?")

        container = document.create_element(self.config.container_tag)
        document.append_child(document.body, container)
        root = self.lifecycle.create_root(container)

        def teardown() -> None:
            self.lifecycle.destroy_root(root)
            if container.parent is None:
                raise DomScreenError("container parent is None during cleanup.")
            container.remove()
            if self.config.reset_title_on_cleanup:
                document.title = ""

        self._cleanups.append(teardown)
        self._act(lambda: self.lifecycle.render(root, content))
        logger.info(f"[DomScreen] Rendered screen #{len(self._cleanups)}")
        return DomScreen(container, self.act)

    def cleanup(self) -> None:
        """Tears down every rendered screen, in render order. Safe to call twice."""
        cleanups, self._cleanups = self._cleanups, []
        if cleanups:
            logger.info(f"[DomScreen] Cleaning up {len(cleanups)} screen(s)")
        for teardown in cleanups:
            self._act(teardown)

    def _verify_init(self, operation: str) -> None:
        if not self._cleanup_registered:
            raise ConfigurationError(
                f"DomScreenSession.init_test() not called before {operation}().{INIT_HINT}"
            )
