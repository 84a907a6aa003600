"""
Match Strategies - pure element-set transformations.

Every function takes an ordered node set and returns a new one. Sets are
plain dicts keyed by node so membership is unique and iteration follows
insertion (traversal) order.
"""

from typing import Callable, Dict, Iterable, Pattern, Union
import re

from domscreen.core.node import Node, TEXT_INPUT_TAGS

NodeSet = Dict[Node, None]
TextQuery = Union[str, Pattern[str]]

_WHITESPACE = re.compile(r"\s+")


def node_set(nodes: Iterable[Node] = ()) -> NodeSet:
    """Build an ordered node set, dropping duplicates."""
    return dict.fromkeys(nodes)


def match_descendants(prev: NodeSet, is_match: Callable[[Node], bool]) -> NodeSet:
    """Matches all elements descendant from the set where is_match is true."""
    results: NodeSet = {}
    for node in prev:
        for desc in node.descendants():
            if is_match(desc):
                results[desc] = None
    return results


def match_query_selector(prev: NodeSet, selector: str) -> NodeSet:
    """Matches all descendant elements selected by the CSS selector."""
    results: NodeSet = {}
    for node in prev:
        for desc in node.query_selector_all(selector):
            results[desc] = None
    return results


def match_role(prev: NodeSet, role: str) -> NodeSet:
    """
    Matches descendants whose role attribute lists ``role`` as a token.

    Only explicit roles count. Implicit roles (an ``<a href>`` being a link,
    for instance) are not inferred.
    """
    def has_role(node: Node) -> bool:
        roles = (node.get_attribute("role") or "").split()
        return role in roles

    return match_descendants(prev, has_role)


def match_text(prev: NodeSet, text: str) -> NodeSet:
    return match_descendants(prev, lambda node: text in get_normalized_text(node))


def match_regexp(prev: NodeSet, pattern: Pattern[str]) -> NodeSet:
    return match_descendants(prev, lambda node: pattern.search(get_normalized_text(node)) is not None)


def filter_text(prev: NodeSet, query: TextQuery) -> NodeSet:
    """Keeps the nodes of the set itself whose own text matches."""
    results: NodeSet = {}
    for node in prev:
        if text_matches(get_normalized_text(node), query):
            results[node] = None
    return results


def first_of(prev: NodeSet) -> NodeSet:
    """Narrows the set to its first member, or nothing."""
    for node in prev:
        return {node: None}
    return {}


def text_matches(text: str, query: TextQuery) -> bool:
    if isinstance(query, str):
        return query in text
    return query.search(text) is not None


def get_normalized_text(node: Node) -> str:
    """
    Returns the own text of a node.

    Text inputs report their current value. Any other element reports only
    its direct text-node children (text of nested elements is excluded),
    with whitespace runs collapsed to one space and the ends trimmed.
    """
    if node.tag in TEXT_INPUT_TAGS:
        return node.value
    return normalize_whitespace("".join(node.text_nodes()))


def normalize_whitespace(s: str) -> str:
    return _WHITESPACE.sub(" ", s).strip()


def describe_query(query: TextQuery) -> str:
    """Renders a text query for step descriptions."""
    if isinstance(query, str):
        return query
    return f"/{query.pattern}/"
