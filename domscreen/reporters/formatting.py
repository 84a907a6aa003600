"""
Formatting helpers for matcher failure messages.

Received values are red, expected values green, and the ``expect(...)``
hint is dimmed, the same colours pytest and jest use for assertion diffs.
"""

from typing import Any, Optional

import click


def red(s: str) -> str:
    return s if s == "" else click.style(s, fg="red")


def green(s: str) -> str:
    return s if s == "" else click.style(s, fg="green")


def dim(s: str) -> str:
    return s if s == "" else click.style(s, dim=True)


def stringify(value: Any, max_width: Optional[int] = None) -> str:
    """Stringify a value for a failure message."""
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        items = list(value)
        if max_width is not None and len(items) > max_width:
            shown = ", ".join(str(v) for v in items[:max_width])
            return f"[{shown}, ... +{len(items) - max_width} more]"
        return "[" + ", ".join(str(v) for v in items) + "]"
    return str(value)


def format_matcher(matcher_name: str, received: str, expected: str, is_not: bool = False) -> str:
    """Canonically format the ``expect(received).matcher(expected)`` hint."""
    hint = dim("expect(")
    hint += red(received)
    hint += dim(")")
    if is_not:
        hint += dim(".not_")
    hint += dim(f".{matcher_name}(")
    hint += green(expected)
    hint += dim(")")
    return hint


def color_received(val: str) -> str:
    return red(val)


def format_received(val: Any) -> str:
    return color_received(stringify(val))


def color_expected(val: str) -> str:
    return green(val)


def format_expected(val: Any) -> str:
    return color_expected(stringify(val))
