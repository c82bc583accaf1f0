"""Thread-backed transport built on requests."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType
from typing import Optional

import requests

from .protocols import CompletionHandler, HttpResponse
from .task import BaseTransportTask, TaskCancelledError, TaskState

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "dogpatch/1.0 (+https://github.com/dogpatch/dogpatch)"


class RequestsTask(BaseTransportTask):
    """A GET request executed on the transport's worker pool."""

    def __init__(self, transport: RequestsTransport, url: str, completion_handler: CompletionHandler) -> None:
        super().__init__(url, completion_handler)
        self._transport = transport
        self._future: Optional[Future[None]] = None

    def _begin(self) -> None:
        self._future = self._transport._executor.submit(self._run)

    def _abort(self) -> None:
        # A blocking requests call cannot be interrupted; if the worker has
        # already picked it up, _run() notices CANCELING when it returns.
        if self._future is not None and self._future.cancel():
            self._deliver(None, None, TaskCancelledError(self.url))

    def _run(self) -> None:
        try:
            response = self._transport._session.get(self.url, timeout=self._transport.timeout)
        except requests.RequestException as e:
            logger.warning(f"Request failed for {self.url}: {e}")
            self._deliver(None, None, e)
            return
        except Exception as e:
            # Anything else would otherwise sit unseen on the Future
            logger.exception(f"Unexpected error requesting {self.url}")
            self._deliver(None, None, e)
            return

        if self.state is TaskState.CANCELING:
            self._deliver(None, None, TaskCancelledError(self.url))
            return

        logger.debug(f"Got {response.status_code} for {self.url} ({len(response.content)} bytes)")
        metadata = HttpResponse(
            status_code=response.status_code,
            url=str(response.url),
            headers=dict(response.headers),
            content_type=response.headers.get("Content-Type", ""),
        )
        self._deliver(response.content or None, metadata, None)


class RequestsTransport:
    """
    Transport that runs each task on a shared thread pool.

    Completion handlers are invoked on the worker thread that performed the
    request, so callers that care about the delivery thread should give the
    client a response context.

    Example:
        with RequestsTransport(timeout=10.0) as transport:
            task = transport.create_task("https://example.com/api/v1/dogs", handler)
            task.start()
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        max_workers: int = 4,
    ) -> None:
        """
        Initialize the transport.

        Args:
            session: Session to reuse; a new one is created when omitted
            timeout: Per-request timeout in seconds
            user_agent: Custom User-Agent string
            headers: Extra headers sent with every request
            max_workers: Size of the worker pool
        """
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._session.headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT
        self._session.headers["Accept"] = "application/json"
        if headers:
            self._session.headers.update(headers)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dogpatch-transport")

    def create_task(self, url: str, completion_handler: CompletionHandler) -> RequestsTask:
        return RequestsTask(self, url, completion_handler)

    def close(self) -> None:
        """Wait for in-flight tasks, then release the pool and session."""
        self._executor.shutdown(wait=True)
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
