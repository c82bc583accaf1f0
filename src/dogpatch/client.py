"""The DogPatch API client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional
from urllib.parse import urljoin, urlparse

from .http.protocols import HttpResponse, Transport, TransportTask
from .models.dog import Dog, decode_dogs

if TYPE_CHECKING:
    from .dispatch import ResponseContext
    from .models.config import ClientConfig

# (dogs, error): at most one of them is set.
DogsCallback = Callable[[Optional[list[Dog]], Optional[BaseException]], None]


class InvalidBaseURLError(ValueError):
    """Raised at construction when the base URL is not an absolute URL."""


class DogPatchClient:
    """
    Client for the DogPatch API.

    Requests go through an injected Transport; results are handed to a
    completion callback, on the response context when one is configured
    or inline on the transport's delivery thread otherwise.

    Example:
        with RequestsTransport() as transport:
            client = DogPatchClient(
                "https://example.com/api/v1/",
                transport,
                response_context=serial_context(),
            )
            client.fetch_dogs(lambda dogs, error: print(dogs, error))
    """

    DOGS_PATH = "dogs"

    def __init__(
        self,
        base_url: str,
        transport: Transport,
        response_context: Optional[ResponseContext] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Absolute API root, e.g. https://example.com/api/v1/
            transport: Produces the tasks that perform requests
            response_context: Where callbacks run; None means inline

        Raises:
            InvalidBaseURLError: If base_url has no scheme or host
        """
        try:
            parsed = urlparse(base_url)
        except ValueError as e:
            raise InvalidBaseURLError(f"Base URL is malformed: {base_url!r}") from e
        if not parsed.scheme or not parsed.netloc:
            raise InvalidBaseURLError(f"Base URL must be absolute: {base_url!r}")

        self._base_url = base_url
        self._transport = transport
        self._response_context = response_context

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: Optional[Transport] = None,
        response_context: Optional[ResponseContext] = None,
    ) -> DogPatchClient:
        """Build a client from config, creating a RequestsTransport if none is given."""
        if transport is None:
            from .http.requests_transport import RequestsTransport

            transport = RequestsTransport(
                timeout=config.network.timeout,
                user_agent=config.network.user_agent,
                headers=config.network.headers,
                max_workers=config.network.max_workers,
            )
        return cls(config.base_url, transport, response_context)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def response_context(self) -> Optional[ResponseContext]:
        return self._response_context

    @property
    def dogs_url(self) -> str:
        return urljoin(self._base_url, self.DOGS_PATH)

    def fetch_dogs(self, on_complete: DogsCallback) -> TransportTask:
        """
        GET the dogs collection.

        Args:
            on_complete: Called once with (dogs, error)

        Returns:
            The started task, for cancellation or inspection
        """

        def handle(data: Optional[bytes], response: Optional[HttpResponse], error: Optional[BaseException]) -> None:
            dogs, failure = self._classify(data, response, error)
            self._dispatch(on_complete, dogs, failure)

        task = self._transport.create_task(self.dogs_url, handle)
        task.start()
        return task

    def _classify(
        self,
        data: Optional[bytes],
        response: Optional[HttpResponse],
        error: Optional[BaseException],
    ) -> tuple[Optional[list[Dog]], Optional[BaseException]]:
        if error is not None:
            return None, error

        # Non-success statuses without a transport error mean "no data", not a failure
        if not isinstance(response, HttpResponse) or not response.is_success:
            return None, None

        if data is None:
            return None, None

        try:
            return decode_dogs(data), None
        except ValueError as e:
            return None, e

    def _dispatch(
        self,
        on_complete: DogsCallback,
        dogs: Optional[list[Dog]],
        error: Optional[BaseException],
    ) -> None:
        if self._response_context is None:
            on_complete(dogs, error)
        else:
            self._response_context.submit(on_complete, dogs, error)

    def __repr__(self) -> str:
        return f"DogPatchClient(base_url={self._base_url!r}, transport={type(self._transport).__name__})"
