"""
dogpatch - Client for the DogPatch dog listings API.

Usage:
    from dogpatch import DogPatchClient, RequestsTransport, serial_context

    with RequestsTransport() as transport:
        client = DogPatchClient(
            "https://example.com/api/v1/",
            transport,
            response_context=serial_context(),
        )
        client.fetch_dogs(lambda dogs, error: print(dogs or error))
"""

__version__ = "1.0.0"

from .client import DogPatchClient, DogsCallback, InvalidBaseURLError
from .dispatch import EventLoopContext, ResponseContext, serial_context
from .http import (
    AiohttpTransport,
    HttpResponse,
    RequestsTransport,
    TaskCancelledError,
    TaskState,
    Transport,
    TransportTask,
)
from .logging_config import setup_logging
from .models import ClientConfig, Dog, NetworkConfig, decode_dogs, decode_error_category

__all__ = [
    "__version__",
    # Client
    "DogPatchClient",
    "DogsCallback",
    "InvalidBaseURLError",
    # Transport
    "AiohttpTransport",
    "HttpResponse",
    "RequestsTransport",
    "TaskCancelledError",
    "TaskState",
    "Transport",
    "TransportTask",
    # Response contexts
    "EventLoopContext",
    "ResponseContext",
    "serial_context",
    # Models
    "ClientConfig",
    "Dog",
    "NetworkConfig",
    "decode_dogs",
    "decode_error_category",
    # Logging
    "setup_logging",
]
