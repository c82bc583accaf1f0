"""Shared single-shot delivery logic for transport tasks."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .protocols import CompletionHandler, HttpResponse

logger = logging.getLogger(__name__)


class TaskState(str, Enum):
    """Lifecycle of a transport task."""

    SUSPENDED = "suspended"
    RUNNING = "running"
    CANCELING = "canceling"
    COMPLETED = "completed"


class TaskCancelledError(Exception):
    """Delivered as the envelope error when a task is cancelled before completing."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request cancelled: {url}")
        self.url = url


class BaseTransportTask:
    """
    Base class holding the url, the completion handler and the state machine.

    Subclasses implement _begin() and _abort(); delivery goes through
    _complete(), which guarantees the handler runs at most once even when
    a cancel races the network response.
    """

    def __init__(self, url: str, completion_handler: CompletionHandler) -> None:
        self._url = url
        self._completion_handler = completion_handler
        self._state = TaskState.SUSPENDED
        self._started = False
        self._lock = threading.Lock()

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> TaskState:
        return self._state

    def start(self) -> None:
        with self._lock:
            if self._started:
                raise RuntimeError(f"Task for {self._url} already started")
            self._started = True
            cancelled = self._state is TaskState.CANCELING
            if not cancelled:
                self._state = TaskState.RUNNING

        # Cancelled while suspended: deliver the cancellation now, never before start()
        if cancelled:
            self._complete(None, None, TaskCancelledError(self._url))
            return

        logger.debug(f"Starting request: GET {self._url}")
        self._begin()

    def cancel(self) -> None:
        with self._lock:
            if self._state is TaskState.COMPLETED or self._state is TaskState.CANCELING:
                return
            was_running = self._state is TaskState.RUNNING
            self._state = TaskState.CANCELING
        if was_running:
            self._abort()

    def _complete(
        self,
        data: Optional[bytes],
        response: Optional[HttpResponse],
        error: Optional[BaseException],
    ) -> bool:
        """
        Deliver the envelope to the completion handler.

        Returns:
            True if this call delivered, False if a delivery already happened
        """
        with self._lock:
            if self._state is TaskState.COMPLETED:
                return False
            self._state = TaskState.COMPLETED
        self._completion_handler(data, response, error)
        return True

    def _deliver(
        self,
        data: Optional[bytes],
        response: Optional[HttpResponse],
        error: Optional[BaseException],
    ) -> None:
        """Deliver from a background context, where nobody can catch handler failures."""
        try:
            self._complete(data, response, error)
        except Exception:
            logger.exception(f"Completion handler for {self._url} raised")

    def _begin(self) -> None:
        raise NotImplementedError

    def _abort(self) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self._url!r}, state={self._state.value})"
