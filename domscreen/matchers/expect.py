"""
Expect - a small registry of custom matchers with jest-style negation.

Matchers are plain functions ``matcher(context, receiver, *args)`` that
return a ``MatcherResult``. Any assertion library can register them
through its own extension mechanism; ``Expect`` is the one used by the
domscreen pytest plugin.

Example:
    >>> expect = Expect()
    >>> expect.extend(make_screen_matchers(session.act))
    >>> expect(screen.locate("h1")).to_contain_text("Inbox")
    >>> expect(screen).not_.to_have_class("loading")
    >>> await expect(screen).to_have_url_path("/inbox")
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping
import inspect

from domscreen.reporters import formatting


@dataclass
class MatcherContext:
    """State handed to every matcher call."""
    is_not: bool = False
    stringify: Callable[[Any], str] = field(default=formatting.stringify, repr=False)


@dataclass
class MatcherResult:
    """Outcome of a matcher. ``message`` is only built on failure."""
    pass_: bool
    message: Callable[[], str] = field(repr=False)


Matcher = Callable[..., Any]


class Expect:
    """Callable matcher registry: ``expect(receiver).matcher_name(*args)``."""

    def __init__(self) -> None:
        self._matchers: Dict[str, Matcher] = {}

    def extend(self, matchers: Mapping[str, Matcher]) -> None:
        """Registers matchers by name, replacing any with the same name."""
        self._matchers.update(matchers)

    @property
    def matchers(self) -> Dict[str, Matcher]:
        return dict(self._matchers)

    def __call__(self, receiver: Any) -> "Expectation":
        return Expectation(self._matchers, receiver)


class Expectation:
    """Pending assertion about one receiver."""

    def __init__(self, matchers: Dict[str, Matcher], receiver: Any, is_not: bool = False):
        self._matchers = matchers
        self._receiver = receiver
        self._is_not = is_not

    @property
    def not_(self) -> "Expectation":
        return Expectation(self._matchers, self._receiver, not self._is_not)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        matcher = self._matchers.get(name)
        if matcher is None:
            raise AttributeError(f"no matcher named {name!r}; registered: {sorted(self._matchers)}")

        def invoke(*args: Any) -> Any:
            __tracebackhide__ = True
            context = MatcherContext(is_not=self._is_not)
            result = matcher(context, self._receiver, *args)
            if inspect.isawaitable(result):
                return self._check_async(result)
            self._check(result)
            return None

        invoke.__name__ = name
        return invoke

    async def _check_async(self, pending: Awaitable[MatcherResult]) -> None:
        __tracebackhide__ = True
        self._check(await pending)

    def _check(self, result: MatcherResult) -> None:
        __tracebackhide__ = True
        if result.pass_ == self._is_not:
            raise AssertionError(result.message())
