from unittest.mock import MagicMock

import pytest

from domscreen.core.events import Event, KEY_PRESS
from domscreen.core.locator import ScreenLocator
from domscreen.core.screen import DomScreenSession
from domscreen.trees import selenium_tree
from domscreen.trees.selenium_tree import SeleniumLifecycle, SeleniumNode
from selenium.webdriver.common.by import By


def make_element(tag="div"):
    elem = MagicMock(name=f"<{tag}>")
    elem.tag_name = tag.upper()
    elem.find_elements.return_value = []
    return elem


@pytest.fixture
def page():
    """A mock WebDriver whose page has a body and creates containers on demand."""
    driver = MagicMock()
    body = make_element("body")
    container = make_element("dom-screen")
    attached = {"container": False}

    def execute_script(script, *args):
        if script == selenium_tree.READY_STATE_SCRIPT:
            return "complete"
        if script == selenium_tree.CREATE_ELEMENT_SCRIPT:
            return container
        if script == selenium_tree.APPEND_CHILD_SCRIPT:
            attached["container"] = True
            return None
        if script == selenium_tree.REMOVE_SCRIPT:
            attached["container"] = False
            return None
        if script == selenium_tree.PARENT_SCRIPT:
            return body if attached["container"] else None
        return None

    driver.execute_script.side_effect = execute_script
    driver.find_element.return_value = body
    driver.current_url = "https://example.com/app/inbox?x=1"
    driver.title = "Inbox"
    return driver, body, container


def test_node_basics():
    driver = MagicMock()
    elem = make_element("INPUT")
    elem.get_property.return_value = "typed"
    node = SeleniumNode(elem, driver)

    assert node.tag == "input"
    assert node.value == "typed"
    assert node == SeleniumNode(elem, driver)
    assert len({node, SeleniumNode(elem, driver)}) == 1


def test_query_selector_all_uses_css():
    driver = MagicMock()
    child = make_element("p")
    elem = make_element("div")
    elem.find_elements.return_value = [child]

    found = SeleniumNode(elem, driver).query_selector_all("p.note")

    elem.find_elements.assert_called_once_with(By.CSS_SELECTOR, "p.note")
    assert [n.raw for n in found] == [child]


def test_text_nodes_and_matches_use_scripts():
    driver = MagicMock()
    driver.execute_script.return_value = ["  hello ", " world"]
    node = SeleniumNode(make_element(), driver)

    assert node.text_nodes() == ["  hello ", " world"]
    driver.execute_script.return_value = True
    assert node.matches(".x") is True
    driver.execute_script.assert_called_with(selenium_tree.MATCHES_SCRIPT, node.raw, ".x")


def test_value_setter_uses_prototype_setter():
    driver = MagicMock()
    node = SeleniumNode(make_element("input"), driver)
    node.value = "abc"
    driver.execute_script.assert_called_once_with(selenium_tree.SET_VALUE_SCRIPT, node.raw, "abc")


def test_dispatch_key_event():
    driver = MagicMock()
    node = SeleniumNode(make_element("input"), driver)
    node.dispatch_event(KEY_PRESS["Enter"].to_event("keydown"))
    driver.execute_script.assert_called_once_with(
        selenium_tree.DISPATCH_SCRIPT,
        node.raw,
        "keydown",
        {"bubbles": True, "cancelable": True, "key": "Enter", "code": "Enter", "keyCode": 13},
    )


def test_dispatch_plain_event():
    driver = MagicMock()
    node = SeleniumNode(make_element("button"), driver)
    node.dispatch_event(Event("click"))
    driver.execute_script.assert_called_once_with(
        selenium_tree.DISPATCH_SCRIPT, node.raw, "click", {"bubbles": True, "cancelable": False}
    )


def test_locator_over_selenium_nodes():
    driver = MagicMock()
    root = make_element("dom-screen")
    a, b = make_element("li"), make_element("li")
    root.find_elements.return_value = [a, b, a]

    loc = ScreenLocator.of(lambda cb: cb(), SeleniumNode(root, driver)).locate("li")

    assert [n.raw for n in loc.all_elements()] == [a, b]


def test_session_render_and_cleanup(page):
    driver, body, container = page
    hooks = []
    session = DomScreenSession.init_test(SeleniumLifecycle(driver), after_each=hooks.append)

    screen = session.render("<p>hi</p>")

    assert screen.container.raw is container
    driver.execute_script.assert_any_call(selenium_tree.APPEND_CHILD_SCRIPT, body, container)
    driver.execute_script.assert_any_call(selenium_tree.SET_INNER_HTML_SCRIPT, container, "<p>hi</p>")

    hooks[0]()
    hooks[0]()

    driver.execute_script.assert_any_call(selenium_tree.SET_INNER_HTML_SCRIPT, container, "")
    driver.execute_script.assert_any_call(selenium_tree.REMOVE_SCRIPT, container)
    driver.execute_script.assert_any_call(selenium_tree.SET_TITLE_SCRIPT, "")
    removes = [c for c in driver.execute_script.call_args_list if c.args[0] == selenium_tree.REMOVE_SCRIPT]
    assert len(removes) == 1


def test_document_url_and_title(page):
    driver, _, _ = page
    hooks = []
    session = DomScreenSession.init_test(SeleniumLifecycle(driver), after_each=hooks.append)
    screen = session.render("<p>hi</p>")

    session.expect(screen).to_have_title("Inbox")
    session.expect(screen).not_.to_have_title("Outbox")
    hooks[0]()


def test_act_waits_for_ready_state(page):
    driver, _, _ = page
    lifecycle = SeleniumLifecycle(driver)
    assert lifecycle.act(lambda: 42) == 42
    driver.execute_script.assert_any_call(selenium_tree.READY_STATE_SCRIPT)
