"""Matchers - assertion predicates and the expect registry."""

from domscreen.matchers.expect import Expect, MatcherContext, MatcherResult
from domscreen.matchers.screen_matchers import make_screen_matchers, wait_for_success

__all__ = ["Expect", "MatcherContext", "MatcherResult", "make_screen_matchers", "wait_for_success"]
