"""Module for Fedora repository connection and client."""

from .client import FedoraHttpClient
from .connection import (
    close_fedora_client,
    create_fedora_client,
    get_fedora_client,
    reset_fedora_client,
)

__all__ = [
    "FedoraHttpClient",
    "create_fedora_client",
    "get_fedora_client",
    "close_fedora_client",
    "reset_fedora_client",
]
