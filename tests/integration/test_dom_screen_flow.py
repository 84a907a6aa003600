"""
End-to-end tests of DOM Screen through the pytest plugin fixtures.

Each test renders into the in-process tree, drives it through locators and
asserts with the registered matchers.
"""

import asyncio
import re

import pytest

from domscreen.core.errors import CardinalityError


class TestDomScreenRender:
    """Rendering and matchers against a fresh screen."""

    def test_simple(self, dom_session, dom_expect):
        screen = dom_session.render('<div class="div-cls">Hello, world!</div>')
        dom_expect(screen.locate("div")).to_match_selector(".div-cls")

    def test_render_twice(self, dom_session):
        dom_session.render('<div class="div-cls">Hello, world!</div>')
        dom_session.render('<div class="div-cls">Hello, world!</div>')

    def test_locate_text(self, dom_session, dom_expect):
        screen = dom_session.render("""
            <div>
                top
                <div>
                    mid
                    <div>bottom</div>
                </div>
            </div>
        """)
        dom_expect(screen.locate_text("bottom")).to_contain_text(re.compile(r"^bottom$"))

    def test_to_have_class(self, dom_session, dom_expect):
        screen = dom_session.render('<div class="div-cls">Hello, world!</div>')
        dom_expect(screen).to_have_class("div-cls")
        dom_expect(screen.locate(".div-cls")).to_have_class("div-cls")
        dom_expect(screen.locate("div > div")).not_.to_have_class("div-cls")
        dom_expect(screen.locate("div")).not_.to_have_class("not-found")

    def test_to_match_selector(self, dom_session, dom_expect):
        screen = dom_session.render('<div class="div-cls">Hello, world!</div>')
        dom_expect(screen).to_match_selector("div")
        dom_expect(screen.locate("div")).to_have_class("div-cls")
        dom_expect(screen.locate("div")).to_match_selector("div")
        dom_expect(screen).not_.to_match_selector("p")
        dom_expect(screen.locate(".foo")).not_.to_match_selector("div")

    def test_to_contain_text(self, dom_session, dom_expect):
        screen = dom_session.render('<div class="div-cls">Hello, world!</div>')
        dom_expect(screen).not_.to_contain_text("Hello")
        dom_expect(screen.locate("div")).to_contain_text("Hello")
        dom_expect(screen.locate("div")).to_contain_text(re.compile(r"^Hello, world!$"))
        dom_expect(screen.locate("div")).not_.to_contain_text(re.compile(r"^world!$"))

    def test_failed_assertion_message(self, dom_session, dom_expect):
        screen = dom_session.render("<p>hi</p>")
        with pytest.raises(AssertionError) as exc:
            dom_expect(screen.locate("p")).to_contain_text("bye")
        message = str(exc.value)
        assert "to_contain_text" in message
        assert "screen.locate(p)" in message
        assert "bye" in message
        assert "no elements" in message

    def test_to_be_in_document(self, dom_session, dom_expect):
        screen = dom_session.render("<ul><li>milk</li></ul>")
        dom_expect(screen.locate("li")).to_be_in_document()
        dom_expect(screen.locate_text("eggs")).not_.to_be_in_document()

    def test_to_have_title(self, dom_session, dom_expect):
        def page(container):
            container.owner_document.title = "Inbox"
            return "<h1>Inbox</h1>"

        screen = dom_session.render(page)
        dom_expect(screen).to_have_title("Inbox")
        dom_expect(screen).not_.to_have_title("")


class TestDomScreenInteraction:
    """Locator interactions wired to components."""

    def test_fill_input(self, dom_session, dom_expect):
        seen = []

        def form(container):
            container.append_html("<input>")
            inp = container.query_selector_all("input")[0]
            inp.add_event_listener("change", lambda ev: seen.append(ev.target.value))

        screen = dom_session.render(form)
        inp = screen.locate("input")
        inp.fill("Hello, world!")
        dom_expect(inp).to_contain_text("Hello, world!")
        assert seen == ["Hello, world!"]

    def test_input_press_key(self, dom_session, dom_expect):
        screen = dom_session.render("<input>")
        inp = screen.locate("input")
        inp.press("F")
        dom_expect(inp).to_contain_text("F")

        # Non-printable keys leave the value alone.
        inp.press("Enter")
        dom_expect(inp).to_contain_text("F")
        assert inp.element().value == "F"

    def test_counter_component(self, dom_session, dom_expect):
        def counter(container):
            container.append_html('<button>+</button><span id="count">0</span>')
            button = container.query_selector_all("button")[0]
            count = container.query_selector_all("#count")[0]

            def increment(ev):
                count.raw.string = str(int(count.raw.get_text()) + 1)

            button.add_event_listener("click", increment)

        screen = dom_session.render(counter)
        screen.locate("button").click()
        screen.locate("button").click()
        dom_expect(screen.locate("#count")).to_contain_text(re.compile(r"^2$"))

    def test_click_ambiguous(self, dom_session):
        screen = dom_session.render("<button>a</button><button>b</button>")
        with pytest.raises(CardinalityError, match="multiple elements found to click: locate\\(button\\)"):
            screen.locate("button").click()
        screen.locate_text("b").click()

    def test_url_path_waits_for_navigation(self, dom_session, dom_expect):
        screen = dom_session.render('<a href="/inbox">Inbox</a>')
        document = dom_session.lifecycle.document

        def navigate(ev):
            asyncio.get_running_loop().call_later(0.004, document.push_state, "/inbox")

        screen.locate("a").element().add_event_listener("click", navigate)

        async def scenario():
            screen.locate("a").click()
            await dom_expect(screen).to_have_url_path("/inbox")
            await dom_expect(screen).not_.to_have_url_path("/")

        asyncio.run(scenario())

    def test_url_path_failure_after_retries(self, dom_session, dom_expect):
        screen = dom_session.render("<div></div>")
        with pytest.raises(AssertionError, match="Current URL"):
            asyncio.run(dom_expect(screen).to_have_url_path("/never"))


class TestDomScreenCleanup:

    def test_cleanup_leaves_empty_body(self, dom_session):
        dom_session.render("<div>one</div>")
        dom_session.render("<div>two</div>")
        dom_session.cleanup()
        dom_session.cleanup()
        assert dom_session.lifecycle.document.body.children == []
