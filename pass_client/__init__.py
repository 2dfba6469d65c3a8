"""Client for PASS entities stored in a Fedora repository and indexed in Elasticsearch."""

from .client import PassClient
from .errors import (
    InvalidArgumentError,
    MultipleMatchesError,
    PassClientError,
    RequestError,
    ResourceNotFoundError,
    UpdateConflictError,
)
from .repositories.protocols import Digest, UploadParams

__all__ = [
    "PassClient",
    "Digest",
    "UploadParams",
    "PassClientError",
    "InvalidArgumentError",
    "RequestError",
    "ResourceNotFoundError",
    "UpdateConflictError",
    "MultipleMatchesError",
]
