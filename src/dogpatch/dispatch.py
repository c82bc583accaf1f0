"""Response contexts: where completion callbacks are executed."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class ResponseContext(Protocol):
    """
    Anything that can run a callable later, in order.

    concurrent.futures.Executor already satisfies this protocol.
    """

    def submit(self, fn: Callable[..., Any], /, *args: Any) -> Any: ...


class EventLoopContext:
    """Runs callbacks on an asyncio event loop, FIFO, from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def submit(self, fn: Callable[..., Any], /, *args: Any) -> asyncio.Handle:
        return self.loop.call_soon_threadsafe(fn, *args)

    def __repr__(self) -> str:
        return f"EventLoopContext(loop={self.loop!r})"


def serial_context(name: str = "dogpatch-responses") -> ThreadPoolExecutor:
    """
    Create a single-threaded executor.

    Every callback submitted to it runs on the same thread, in submission
    order. The caller owns the executor and should shut it down.
    """
    return ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
