"""Protocol definition and types for repository CRUD operations."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, Protocol, TypeVar

from pass_client.db.fedora.client import RequestContent
from pass_client.models import PassEntity
from pass_client.models.registry import EntityTypeRef

T = TypeVar("T", bound=PassEntity)

# Field name -> URIs of the resources referencing an entity through that field
IncomingLinks = dict[str, set[str]]

DigestAlgorithm = Literal["sha256", "sha1", "md5"]

_DIGEST_HEADER_NAMES: dict[str, str] = {"sha256": "sha-256", "sha1": "sha", "md5": "md5"}


@dataclass(frozen=True)
class Digest:
    """A checksum the repository verifies uploaded content against."""

    algorithm: DigestAlgorithm
    value: str

    def __post_init__(self) -> None:
        if self.algorithm not in _DIGEST_HEADER_NAMES:
            raise ValueError(f"Unsupported digest algorithm: {self.algorithm}")
        if not self.value:
            raise ValueError("Digest value cannot be empty")

    def to_header(self) -> str:
        return f"{_DIGEST_HEADER_NAMES[self.algorithm]}={self.value}"


@dataclass(frozen=True)
class UploadParams:
    """Optional request parameters for a binary upload.

    At most one digest can be given, so the repository never has to
    choose between conflicting checksums.
    """

    content_type: str | None = None
    slug: str | None = None
    digest: Digest | None = None
    filename: str | None = None

    def to_headers(self) -> dict[str, str]:
        headers = {"Content-Type": self.content_type or "application/octet-stream"}
        if self.slug:
            headers["Slug"] = self.slug
        if self.digest:
            headers["Digest"] = self.digest.to_header()
        if self.filename:
            escaped = self.filename.replace("\\", "\\\\").replace('"', '\\"')
            headers["Content-Disposition"] = f'attachment; filename="{escaped}"'
        return headers


class CrudClient(Protocol):
    """Protocol for create, read, update and delete operations on entities.

    Implementations include FedoraCrudClient.
    """

    def create_resource(self, entity: PassEntity) -> str:
        """Persist a new entity in its type's container.

        Args:
            entity: The entity to create. Its id should be None.

        Returns:
            The URI assigned to the new resource.
        """
        ...

    def create_and_read_resource(self, entity: T) -> T:
        """Persist a new entity and return it as stored, including server-set fields."""
        ...

    def read_resource(self, uri: str, entity_type: EntityTypeRef) -> PassEntity:
        """Retrieve the entity at uri, with its version tag populated."""
        ...

    def update_resource(self, entity: PassEntity) -> None:
        """Update the resource matching the entity's id.

        Raises:
            UpdateConflictError: If the resource changed since the entity's
                version tag was read.
        """
        ...

    def update_and_read_resource(self, entity: T) -> T:
        """Update the resource and return it as stored afterwards."""
        ...

    def delete_resource(self, uri: str) -> None:
        """Delete the resource at uri."""
        ...

    def get_incoming(self, uri: str) -> IncomingLinks:
        """Map each relationship field to the URIs of resources linking to uri through it."""
        ...

    def upload(
        self, uri: str, content: RequestContent, params: UploadParams | None = None
    ) -> str:
        """Upload binary content to the resource at uri and return the new binary's URI."""
        ...

    def process_all_entities(
        self, visitor: Callable[[str], Any], entity_type: EntityTypeRef | None = None
    ) -> int:
        """Call visitor with the URI of every entity, optionally of one type only.

        Returns:
            The number of entities visited.
        """
        ...
