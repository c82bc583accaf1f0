"""Transport abstraction and adapters for dogpatch."""

from .aiohttp_transport import AiohttpTask, AiohttpTransport
from .protocols import CompletionHandler, HttpResponse, Transport, TransportTask
from .requests_transport import RequestsTask, RequestsTransport
from .task import BaseTransportTask, TaskCancelledError, TaskState

__all__ = [
    "AiohttpTask",
    "AiohttpTransport",
    "BaseTransportTask",
    "CompletionHandler",
    "HttpResponse",
    "RequestsTask",
    "RequestsTransport",
    "TaskCancelledError",
    "TaskState",
    "Transport",
    "TransportTask",
]
