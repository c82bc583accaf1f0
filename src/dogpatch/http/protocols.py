"""Protocol definitions for the transport abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, runtime_checkable

from .task import TaskState


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable status metadata delivered alongside a response body.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        url: Final URL after any redirects
        headers: All response headers
        content_type: Content-Type header value
    """

    status_code: int
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content_type: str = ""

    @property
    def is_success(self) -> bool:
        """True for any 2xx status code."""
        return 200 <= self.status_code < 300


# (data, response, error): delivered exactly once per task.
CompletionHandler = Callable[[Optional[bytes], Optional[HttpResponse], Optional[BaseException]], None]


@runtime_checkable
class TransportTask(Protocol):
    """
    One in-flight request/response exchange.

    Implementations deliver the response envelope to their completion
    handler at most once, and never before start() is called.
    """

    @property
    def url(self) -> str: ...

    @property
    def state(self) -> TaskState: ...

    def start(self) -> None:
        """Begin the request. Callers must call this exactly once."""
        ...

    def cancel(self) -> None:
        """Cancel the request if it has not completed yet."""
        ...


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for objects that produce transport tasks.

    This abstraction allows for:
    - Deterministic test doubles (see dogpatch.testing)
    - Different backends (requests, aiohttp)
    - A single completion contract across the codebase
    """

    def create_task(self, url: str, completion_handler: CompletionHandler) -> TransportTask:
        """
        Create a suspended task targeting url.

        Args:
            url: Absolute URL to GET
            completion_handler: Called once with (data, response, error)

        Returns:
            A task in the SUSPENDED state
        """
        ...
