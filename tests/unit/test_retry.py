import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

from domscreen.matchers.expect import MatcherContext, MatcherResult
from domscreen.matchers.screen_matchers import RetryPolicy, wait_for_success


def failing():
    return MatcherResult(False, lambda: "still failing")


def passing():
    return MatcherResult(True, lambda: "passed")


@patch("asyncio.sleep", new_callable=AsyncMock)
def test_exhausts_after_four_attempts(mock_sleep):
    """A matcher that never passes is evaluated exactly four times."""
    matcher = MagicMock(return_value=failing())
    retrying = wait_for_success(lambda cb: cb(), matcher)

    result = asyncio.run(retrying(MatcherContext(), "receiver", "/path"))

    assert matcher.call_count == RetryPolicy.MAX_ATTEMPTS == 4
    assert result.pass_ is False
    assert result.message() == "still failing"
    assert [c.args[0] for c in mock_sleep.await_args_list] == [0.005, 0.01, 0.02]


@patch("asyncio.sleep", new_callable=AsyncMock)
def test_stops_on_first_success(mock_sleep):
    matcher = MagicMock(side_effect=[failing(), passing(), failing()])
    retrying = wait_for_success(lambda cb: cb(), matcher)

    result = asyncio.run(retrying(MatcherContext(), "receiver", "/path"))

    assert result.pass_ is True
    assert matcher.call_count == 2
    assert mock_sleep.await_count == 1


@patch("asyncio.sleep", new_callable=AsyncMock)
def test_negated_success_stops_when_predicate_fails(mock_sleep):
    matcher = MagicMock(side_effect=[passing(), failing()])
    retrying = wait_for_success(lambda cb: cb(), matcher)

    result = asyncio.run(retrying(MatcherContext(is_not=True), "receiver", "/path"))

    assert result.pass_ is False
    assert matcher.call_count == 2


@patch("asyncio.sleep", new_callable=AsyncMock)
def test_runs_inside_one_act_call(mock_sleep):
    act = MagicMock(side_effect=lambda cb: cb())
    matcher = MagicMock(return_value=failing())
    retrying = wait_for_success(act, matcher)

    asyncio.run(retrying(MatcherContext(), "receiver", "/path"))

    act.assert_called_once()
    assert matcher.call_args.args == (MatcherContext(), "receiver", "/path")
