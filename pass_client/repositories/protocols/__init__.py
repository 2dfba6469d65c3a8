"""Client protocols for the repository and the search index."""

from .crud_client import CrudClient, Digest, DigestAlgorithm, IncomingLinks, UploadParams
from .index_client import IndexClient

__all__ = [
    # CRUD protocol and types
    "CrudClient",
    "Digest",
    "DigestAlgorithm",
    "IncomingLinks",
    "UploadParams",
    # Index protocol
    "IndexClient",
]
