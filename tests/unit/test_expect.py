import asyncio

import pytest

from domscreen.matchers.expect import Expect, MatcherContext, MatcherResult


def to_equal(context, receiver, expected):
    return MatcherResult(receiver == expected, lambda: f"{receiver} vs {expected} (not={context.is_not})")


async def to_equal_later(context, receiver, expected):
    return to_equal(context, receiver, expected)


@pytest.fixture
def expect():
    e = Expect()
    e.extend({"to_equal": to_equal, "to_equal_later": to_equal_later})
    return e


def test_passing_matcher_returns_none(expect):
    assert expect(1).to_equal(1) is None


def test_failing_matcher_raises_with_message(expect):
    with pytest.raises(AssertionError, match=r"1 vs 2 \(not=False\)"):
        expect(1).to_equal(2)


def test_not_inverts(expect):
    expect(1).not_.to_equal(2)
    with pytest.raises(AssertionError, match=r"not=True"):
        expect(1).not_.to_equal(1)
    expect(1).not_.not_.to_equal(1)


def test_async_matcher(expect):
    asyncio.run(expect(1).to_equal_later(1))
    with pytest.raises(AssertionError):
        asyncio.run(expect(1).to_equal_later(2))


def test_unknown_matcher(expect):
    with pytest.raises(AttributeError, match="no matcher named 'to_be_blue'"):
        expect(1).to_be_blue()


def test_extend_replaces_by_name(expect):
    expect.extend({"to_equal": lambda ctx, r, e: MatcherResult(True, lambda: "")})
    expect(1).to_equal(2)


def test_matchers_copy(expect):
    expect.matchers.clear()
    assert "to_equal" in expect.matchers


def test_context_defaults():
    ctx = MatcherContext()
    assert ctx.is_not is False
    assert ctx.stringify(None) == "None"
