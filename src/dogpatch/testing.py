"""
Deterministic transport for tests.

MockTransport never touches the network. Each task it creates records
whether it was started and keeps its completion handler, so a test can
deliver any (data, response, error) envelope synchronously:

    transport = MockTransport()
    client = DogPatchClient("https://example.com/api/v1/", transport)
    task = client.fetch_dogs(on_complete)
    task.respond(status_code=500)
"""

from __future__ import annotations

from typing import Optional

from .http.protocols import CompletionHandler, HttpResponse
from .http.task import BaseTransportTask


class MockTransportTask(BaseTransportTask):
    """Transport task whose completion is triggered manually."""

    def __init__(self, url: str, completion_handler: CompletionHandler) -> None:
        super().__init__(url, completion_handler)
        self.start_count = 0
        self.cancel_count = 0

    @property
    def called_start(self) -> bool:
        return self.start_count > 0

    @property
    def completion_handler(self) -> CompletionHandler:
        return self._completion_handler

    def start(self) -> None:
        self.start_count += 1
        if self.start_count == 1:
            super().start()

    def cancel(self) -> None:
        self.cancel_count += 1
        super().cancel()

    def complete(
        self,
        data: Optional[bytes] = None,
        response: Optional[HttpResponse] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        """Invoke the stored completion handler inline with the given envelope."""
        if not self.called_start:
            raise RuntimeError(f"Task for {self.url} completed before start()")
        if not self._complete(data, response, error):
            raise RuntimeError(f"Completion handler for {self.url} already invoked")

    def respond(
        self,
        status_code: int = 200,
        data: Optional[bytes] = None,
        error: Optional[BaseException] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        """Complete with an HttpResponse for this task's URL."""
        response = HttpResponse(
            status_code=status_code,
            url=self.url,
            headers=headers or {},
            content_type=(headers or {}).get("Content-Type", "application/json"),
        )
        self.complete(data, response, error)

    def _begin(self) -> None:
        pass

    def _abort(self) -> None:
        pass


class MockTransport:
    """Records every task it creates; tasks never complete on their own."""

    def __init__(self) -> None:
        self.tasks: list[MockTransportTask] = []

    @property
    def last_task(self) -> Optional[MockTransportTask]:
        return self.tasks[-1] if self.tasks else None

    def create_task(self, url: str, completion_handler: CompletionHandler) -> MockTransportTask:
        task = MockTransportTask(url, completion_handler)
        self.tasks.append(task)
        return task
