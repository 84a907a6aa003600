"""
Screen Matchers - assertions over screens, locators and nodes.

Each matcher normalizes its receiver to a ScreenLocator, evaluates it once
and reports the matched elements on failure. ``to_have_url_path`` depends
on navigation settling and is wrapped in ``wait_for_success``.
"""

from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse
import asyncio
import logging

from domscreen.core.config import DomScreenConfig
from domscreen.core.errors import UnsupportedReceiverError
from domscreen.core.lifecycle import Act
from domscreen.core.locator import ScreenLocator
from domscreen.core.node import Node
from domscreen.core.screen import DomScreen
from domscreen.core.strategies import TextQuery, describe_query
from domscreen.matchers.expect import MatcherContext, MatcherResult
from domscreen.reporters import formatting

logger = logging.getLogger(__name__)

SyncMatcher = Callable[..., MatcherResult]


class ScreenMatchers:
    """
    The DOM matchers, bound to one session's runner.

    Bare nodes passed as receivers become zero-step locators that run their
    interactions through ``act``.
    """

    def __init__(self, act: Act, config: Optional[DomScreenConfig] = None):
        self.act = act
        self.config = config or DomScreenConfig()

    def to_match_selector(self, context: MatcherContext, receiver: Any, selector: str) -> MatcherResult:
        loc = self.verify_receiver(receiver)
        got_direct = [el for el in loc.all_elements() if el.matches(selector)]
        got_desc = loc.locate(selector).all_elements()
        passed = bool(got_direct) or bool(got_desc)

        def message() -> str:
            return "\n".join([
                formatting.format_matcher(
                    "to_match_selector", self.describe_locator(loc), selector, context.is_not
                ),
                "",
                f"Expected: selector {formatting.format_expected(selector)} to{' not' if passed else ''} "
                f"match any element in the DOM root after applying locators",
                f"DOM root: {formatting.format_received(loc.root)}",
                f"Locators: {formatting.color_received(loc.format_description())}",
                f"Matched:  {format_located(got_direct + got_desc)}",
            ])

        return MatcherResult(passed, message)

    def to_have_class(self, context: MatcherContext, receiver: Any, class_names: str) -> MatcherResult:
        """Space-separated class names must all be present on one element."""
        loc = self.verify_receiver(receiver)
        class_sel = "." + ".".join(class_names.split())
        got_direct = [el for el in loc.all_elements() if el.matches(class_sel)]
        got_desc = loc.locate(class_sel).all_elements()
        passed = bool(got_direct) or bool(got_desc)

        def message() -> str:
            return "\n".join([
                formatting.format_matcher(
                    "to_have_class", self.describe_locator(loc), class_names, context.is_not
                ),
                "",
                f"Expected: class names {formatting.format_expected(class_names)} to{' not' if passed else ''} "
                f"match any element in the DOM root after applying locators",
                f"DOM root: {formatting.format_received(loc.root)}",
                f"Locators: {formatting.color_received(loc.format_description())}",
                f"Matched:  {format_located(got_direct + got_desc)}",
            ])

        return MatcherResult(passed, message)

    def to_contain_text(self, context: MatcherContext, receiver: Any, query: TextQuery) -> MatcherResult:
        loc = self.verify_receiver(receiver)
        got = loc.filter_text(query).all_elements()
        passed = bool(got)

        def message() -> str:
            kind = "contain substring" if isinstance(query, str) else "match regexp"
            expected = describe_query(query)
            return "\n".join([
                formatting.format_matcher(
                    "to_contain_text", self.describe_locator(loc), expected, context.is_not
                ),
                "",
                f"Expected: one element to {kind} {formatting.format_expected(expected)} "
                f"to{' not' if passed else ''} match DOM root node after applying locators",
                f"DOM root: {formatting.format_received(loc.root)}",
                f"Locators: {formatting.color_received(loc.format_description())}",
                f"Matched:  {format_located(got)}",
            ])

        return MatcherResult(passed, message)

    def to_have_url_path(self, context: MatcherContext, receiver: Any, path: str) -> MatcherResult:
        loc = self.verify_receiver(receiver)
        got_path = urlparse(loc.root.owner_document.url).path or "/"
        passed = got_path == path

        def message() -> str:
            return "\n".join([
                formatting.format_matcher(
                    "to_have_url_path", self.describe_locator(loc), path, context.is_not
                ),
                "",
                f"Expected: URL {formatting.format_expected(path)} to{' not' if passed else ''} "
                f"match the current page URL",
                f"Current URL: {formatting.format_received(got_path)}",
            ])

        return MatcherResult(passed, message)

    def to_have_title(self, context: MatcherContext, receiver: Any, title: str) -> MatcherResult:
        loc = self.verify_receiver(receiver)
        got_title = loc.root.owner_document.title
        passed = got_title == title

        def message() -> str:
            return "\n".join([
                formatting.format_matcher(
                    "to_have_title", self.describe_locator(loc), title, context.is_not
                ),
                "",
                f"Expected: title {formatting.format_expected(title)} to{' not' if passed else ''} "
                f"match the current page title",
                f"Current title: {formatting.format_received(got_title)}",
            ])

        return MatcherResult(passed, message)

    def to_be_in_document(self, context: MatcherContext, receiver: Any) -> MatcherResult:
        loc = self.verify_receiver(receiver)
        got = loc.all_elements()
        passed = bool(got)

        def message() -> str:
            return "\n".join([
                formatting.format_matcher(
                    "to_be_in_document", self.describe_locator(loc), "", context.is_not
                ),
                "",
                f"Expected: to{' not' if passed else ''} be in the document",
                f"DOM root: {formatting.format_received(loc.root)}",
                f"Locators: {formatting.color_received(loc.format_description())}",
                f"Matched:  {format_located(got)}",
            ])

        return MatcherResult(passed, message)

    def verify_receiver(self, receiver: Any) -> ScreenLocator:
        """Normalizes a matcher receiver to a locator."""
        if isinstance(receiver, DomScreen):
            return receiver.locate("")
        if isinstance(receiver, ScreenLocator):
            return receiver
        if isinstance(receiver, Node):
            return ScreenLocator.of(self.act, receiver)
        raise UnsupportedReceiverError(
            f"Expected receiver to be a DomScreen, ScreenLocator or Node, got {receiver!r}"
        )

    def describe_locator(self, loc: ScreenLocator) -> str:
        if loc.root.tag == self.config.container_tag:
            msg = "screen"
            steps = ".".join(loc.describe())
            if steps:
                msg += f".{steps}"
            return msg
        msg = formatting.stringify(loc.root)
        steps = loc.format_description()
        if steps:
            msg += f" -> {steps}"
        return msg


def format_located(elems: List[Node]) -> str:
    if not elems:
        return formatting.color_received("no elements")
    return formatting.format_received(elems[0] if len(elems) == 1 else elems)


class RetryPolicy:
    """Fixed polling schedule for matchers that wait on async settling."""
    MAX_ATTEMPTS = 4
    INITIAL_DELAY_MS = 5


def wait_for_success(act: Act, matcher: SyncMatcher) -> Callable[..., Any]:
    """
    Wraps a synchronous matcher so it is polled until it succeeds.

    The whole polling loop runs inside a single ``act`` call. Each attempt
    that fails waits before the next one, starting at
    ``RetryPolicy.INITIAL_DELAY_MS`` and doubling. Success respects
    negation. When every attempt fails, the last result is returned as is.
    """
    async def retrying(context: MatcherContext, receiver: Any, *args: Any) -> MatcherResult:
        async def attempts() -> MatcherResult:
            delay_ms = RetryPolicy.INITIAL_DELAY_MS
            result = matcher(context, receiver, *args)
            for attempt in range(2, RetryPolicy.MAX_ATTEMPTS + 1):
                if result.pass_ != context.is_not:
                    return result
                logger.debug(f"[wait_for_success] attempt {attempt - 1} failed, retrying in {delay_ms}ms")
                await asyncio.sleep(delay_ms / 1000)
                delay_ms *= 2
                result = matcher(context, receiver, *args)
            return result

        return await act(attempts)

    retrying.__name__ = getattr(matcher, "__name__", "retrying")
    return retrying


def make_screen_matchers(act: Act, config: Optional[DomScreenConfig] = None) -> Dict[str, Callable[..., Any]]:
    """Returns the screen matchers by name, ready for ``Expect.extend``."""
    m = ScreenMatchers(act, config)
    return {
        "to_match_selector": m.to_match_selector,
        "to_have_class": m.to_have_class,
        "to_contain_text": m.to_contain_text,
        "to_have_url_path": wait_for_success(act, m.to_have_url_path),
        "to_have_title": m.to_have_title,
        "to_be_in_document": m.to_be_in_document,
    }
