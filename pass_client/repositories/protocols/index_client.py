"""Protocol definition for search index lookups."""

from collections.abc import Mapping
from typing import Any, Protocol

from pass_client.models.registry import EntityTypeRef


class IndexClient(Protocol):
    """Protocol for attribute lookups against the search index.

    The index is updated asynchronously from the repository, so an entity
    that was just written may not be found yet. Implementations do not
    retry; callers that need read-after-write behaviour must poll.
    """

    def find_by_attribute(
        self, entity_type: EntityTypeRef, attribute: str, value: Any
    ) -> str | None:
        """Find the URI of the single entity whose attribute matches value.

        Returns:
            The matching URI, or None if nothing matches.

        Raises:
            MultipleMatchesError: If more than one entity matches.
        """
        ...

    def find_all_by_attribute(
        self,
        entity_type: EntityTypeRef,
        attribute: str,
        value: Any,
        limit: int | None = None,
        offset: int = 0,
    ) -> set[str]:
        """Find the URIs of all entities whose attribute matches value.

        A value of None matches entities where the attribute is absent or null.
        """
        ...

    def find_all_by_attributes(
        self,
        entity_type: EntityTypeRef,
        criteria: Mapping[str, Any],
        limit: int | None = None,
        offset: int = 0,
    ) -> set[str]:
        """Find the URIs of all entities matching every attribute/value pair."""
        ...
