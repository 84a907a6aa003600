"""
Render Lifecycle - the contract with whatever mounts content into a tree.

The core only sequences calls to ``create_root``, ``render``,
``destroy_root`` and ``act``. What a root or a piece of content is stays
up to the lifecycle.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, TypeVar
import inspect

from domscreen.core.node import Document, Node

RootT = TypeVar("RootT")
ContentT = TypeVar("ContentT")

# A controlled-environment runner. Calls the callback and guarantees that all
# work it triggered has flushed by the time it returns. When the callback
# returns an awaitable, the runner returns an awaitable too.
Act = Callable[[Callable[[], Any]], Any]


def immediate_act(callback: Callable[[], Any]) -> Any:
    """
    Runner for trees with no pending work of their own.

    Synchronous callbacks run straight away. For async callbacks a
    coroutine is returned that settles the callback when awaited.
    """
    result = callback()
    if inspect.isawaitable(result):
        return _settle(result)
    return result


async def _settle(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


class RenderLifecycle(ABC, Generic[RootT, ContentT]):
    """Mounts content into containers of one document."""

    @property
    @abstractmethod
    def document(self) -> Document:
        """The document screens are created in."""

    @abstractmethod
    def create_root(self, container: Node) -> RootT:
        ...

    @abstractmethod
    def render(self, root: RootT, content: ContentT) -> None:
        ...

    @abstractmethod
    def destroy_root(self, root: RootT) -> None:
        ...

    def act(self, callback: Callable[[], Any]) -> Any:
        return immediate_act(callback)
