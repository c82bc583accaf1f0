"""Asyncio transport built on aiohttp."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Optional

import aiohttp

from .protocols import CompletionHandler, HttpResponse
from .requests_transport import DEFAULT_USER_AGENT
from .task import BaseTransportTask, TaskCancelledError

logger = logging.getLogger(__name__)


class AiohttpTask(BaseTransportTask):
    """A GET request scheduled as an asyncio task on the running loop."""

    def __init__(self, transport: AiohttpTransport, url: str, completion_handler: CompletionHandler) -> None:
        super().__init__(url, completion_handler)
        self._transport = transport
        self._task: Optional[asyncio.Task[None]] = None

    def _begin(self) -> None:
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run())
        self._task.add_done_callback(self._on_done)

    def _abort(self) -> None:
        if self._task is not None:
            self._task.cancel()

    def _on_done(self, task: asyncio.Task[None]) -> None:
        # Covers cancellation before the coroutine's first step, where _run never executes.
        if task.cancelled():
            self._deliver(None, None, TaskCancelledError(self.url))
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Unexpected error requesting {self.url}: {error!r}")
            self._deliver(None, None, error)

    async def _run(self) -> None:
        try:
            data, metadata = await self._transport._fetch(self.url)
        except self._transport.TRANSPORT_EXCEPTIONS as e:
            logger.warning(f"Request failed for {self.url}: {e}")
            self._deliver(None, None, e)
            return
        self._deliver(data, metadata, None)


class AiohttpTransport:
    """
    Transport for asyncio applications.

    Tasks must be created and started from inside the event loop that owns
    the transport's session. Completion handlers run on that loop.

    Example:
        async with AiohttpTransport() as transport:
            client = DogPatchClient("https://example.com/api/v1/", transport)
            client.fetch_dogs(on_complete)
    """

    MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB

    TRANSPORT_EXCEPTIONS = (
        aiohttp.ClientError,
        asyncio.TimeoutError,
        ConnectionError,
        ValueError,
    )

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        max_content_size: int = MAX_CONTENT_SIZE,
    ) -> None:
        """
        Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: Custom User-Agent string
            headers: Extra headers sent with every request
            max_content_size: Maximum response size in bytes
        """
        self.timeout = timeout
        self._user_agent = user_agent or DEFAULT_USER_AGENT
        self._headers = headers or {}
        self._max_content_size = max_content_size
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AiohttpTransport:
        """Enter async context and create session."""
        self._session = aiohttp.ClientSession(
            headers={"User-Agent": self._user_agent, "Accept": "application/json", **self._headers},
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def create_task(self, url: str, completion_handler: CompletionHandler) -> AiohttpTask:
        if self._session is None:
            raise RuntimeError("Transport not initialized. Use 'async with' context manager.")
        return AiohttpTask(self, url, completion_handler)

    async def _fetch(self, url: str) -> tuple[Optional[bytes], HttpResponse]:
        if self._session is None:
            raise ConnectionError("Transport closed before the request started.")

        async with self._session.get(
            url,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            allow_redirects=True,
        ) as response:
            content_length = response.headers.get("Content-Length")
            if content_length and int(content_length) > self._max_content_size:
                raise ValueError(f"Content too large: {content_length} bytes")

            content = b""
            async for chunk in response.content.iter_chunked(8192):
                content += chunk
                if len(content) > self._max_content_size:
                    raise ValueError(f"Content size limit exceeded: >{self._max_content_size} bytes")

            logger.debug(f"Got {response.status} for {url} ({len(content)} bytes)")
            metadata = HttpResponse(
                status_code=response.status,
                url=str(response.url),
                headers=dict(response.headers),
                content_type=response.headers.get("Content-Type", ""),
            )
            return content or None, metadata
