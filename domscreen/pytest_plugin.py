"""
pytest plugin - one DOM Screen session per test.

Registered through the ``pytest11`` entry point, so installing domscreen is
enough to get the fixtures:

    def test_greeting(dom_session, dom_expect):
        screen = dom_session.render("<h1 class='title'>Hello</h1>")
        dom_expect(screen.locate("h1")).to_contain_text("Hello")

Every screen rendered through ``dom_session`` is torn down after the test.
"""

from typing import Callable, Iterator, List

import pytest

from domscreen.core.config import DomScreenConfig
from domscreen.core.screen import DomScreenSession
from domscreen.matchers.expect import Expect
from domscreen.trees.soup_tree import SoupLifecycle


@pytest.fixture
def dom_config() -> DomScreenConfig:
    """Override to change the session configuration."""
    return DomScreenConfig()


@pytest.fixture
def dom_lifecycle(dom_config: DomScreenConfig) -> SoupLifecycle:
    """Override to mount into another tree, e.g. a SeleniumLifecycle."""
    return SoupLifecycle(config=dom_config)


@pytest.fixture
def dom_session(dom_lifecycle, dom_config: DomScreenConfig) -> Iterator[DomScreenSession]:
    after_each: List[Callable[[], None]] = []
    session = DomScreenSession.init_test(
        dom_lifecycle,
        after_each=after_each.append,
        config=dom_config,
    )
    yield session
    for hook in after_each:
        hook()


@pytest.fixture
def dom_expect(dom_session: DomScreenSession) -> Expect:
    return dom_session.expect
