"""Dogpatch domain and configuration models."""

from .config import ClientConfig, NetworkConfig
from .dog import Dog, decode_dogs, decode_error_category

__all__ = [
    # Config
    "ClientConfig",
    "NetworkConfig",
    # Domain
    "Dog",
    "decode_dogs",
    "decode_error_category",
]
