"""Elasticsearch implementation of the IndexClient protocol.

Every lookup is an exact match on one or more indexed attributes, scoped
to the documents of a single entity type. Text values must equal the whole
indexed value, ignoring case; they never match a word or phrase inside it.
"""

import logging
from collections.abc import Collection, Mapping
from datetime import datetime
from enum import Enum
import sys
from typing import Any

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from pass_client.core.settings import Settings
from pass_client.db.elasticsearch import ElasticsearchHttpClient
from pass_client.errors import InvalidArgumentError, MultipleMatchesError
from pass_client.models import EntityRegistry
from pass_client.models.registry import EntityTypeRef
from pass_client.models.support import to_zulu
from pass_client.repositories.protocols import IndexClient

logger = logging.getLogger(__name__)

TYPE_FIELD = "@type"
ID_FIELD = "@id"


class ElasticsearchIndexClient(IndexClient):
    """Attribute lookups against the Elasticsearch index.

    No retries are made: the index lags behind the repository, and an
    entity written moments ago may not be returned yet.
    """

    def __init__(
        self,
        client: ElasticsearchHttpClient,
        registry: EntityRegistry,
        settings: Settings,
    ):
        """Initialize the index client.

        Args:
            client: HTTP client for the search API.
            registry: Entity types that may be searched for.
            settings: Client settings (indices and the default limit).
        """
        self.client: ElasticsearchHttpClient = client
        self.registry: EntityRegistry = registry
        self.indices: list[str] = settings.indices
        self.default_limit: int = settings.elasticsearch_limit

    @override
    def find_by_attribute(
        self, entity_type: EntityTypeRef, attribute: str, value: Any
    ) -> str | None:
        criteria = {attribute: value}
        type_name = self._validate(entity_type, criteria, limit=None, offset=0)
        # two results are enough to tell one match from many
        uris = self._search(type_name, criteria, limit=2, offset=0)

        if len(uris) > 1:
            raise MultipleMatchesError(type_name, criteria)
        return uris[0] if uris else None

    @override
    def find_all_by_attribute(
        self,
        entity_type: EntityTypeRef,
        attribute: str,
        value: Any,
        limit: int | None = None,
        offset: int = 0,
    ) -> set[str]:
        return self.find_all_by_attributes(entity_type, {attribute: value}, limit, offset)

    @override
    def find_all_by_attributes(
        self,
        entity_type: EntityTypeRef,
        criteria: Mapping[str, Any],
        limit: int | None = None,
        offset: int = 0,
    ) -> set[str]:
        type_name = self._validate(entity_type, criteria, limit, offset)
        if limit is None:
            limit = self.default_limit
        return set(self._search(type_name, criteria, limit, offset))

    def _validate(
        self,
        entity_type: EntityTypeRef | None,
        criteria: Mapping[str, Any] | None,
        limit: int | None,
        offset: int,
    ) -> str:
        """Reject invalid arguments before anything is sent to the index."""
        type_name = self.registry.get(entity_type).name

        if not criteria:
            raise InvalidArgumentError("at least one attribute must be given")
        for attribute, value in criteria.items():
            if not attribute:
                raise InvalidArgumentError("attribute cannot be null or empty")
            if isinstance(value, Collection) and not isinstance(value, (str, bytes)):
                raise InvalidArgumentError(
                    f"value for {attribute} cannot be a Collection, it must be a single value"
                )
        if limit is not None and limit < 0:
            raise InvalidArgumentError("limit cannot be negative")
        if offset < 0:
            raise InvalidArgumentError("offset cannot be negative")
        return type_name

    def _search(
        self, type_name: str, criteria: Mapping[str, Any], limit: int, offset: int
    ) -> list[str]:
        body = build_query(type_name, criteria, limit, offset)
        logger.debug("Searching for %s where %s: %s", type_name, dict(criteria), body)

        response = self.client.search(self.indices, body)
        uris = decode_hits(response)
        logger.debug("Search for %s matched %d records", type_name, len(uris))
        return uris


def _to_query_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return to_zulu(value)
    return value


def _exact_match(attribute: str, value: Any) -> dict[str, Any]:
    """Term clause matching the whole value of a keyword attribute."""
    if isinstance(value, str):
        return {"term": {attribute: {"value": _to_query_value(value), "case_insensitive": True}}}
    return {"term": {attribute: {"value": _to_query_value(value)}}}


def build_query(
    type_name: str, criteria: Mapping[str, Any], limit: int, offset: int
) -> dict[str, Any]:
    """Build a search request matching all criteria on documents of one type.

    A None value matches documents where the attribute is missing or null.
    """
    filters: list[dict[str, Any]] = [{"term": {TYPE_FIELD: type_name}}]
    must_not: list[dict[str, Any]] = []

    for attribute, value in criteria.items():
        if value is None:
            must_not.append({"exists": {"field": attribute}})
        else:
            filters.append(_exact_match(attribute, value))

    bool_query: dict[str, Any] = {"filter": filters}
    if must_not:
        bool_query["must_not"] = must_not

    return {
        "query": {"bool": bool_query},
        "size": limit,
        "from": offset,
        "_source": [ID_FIELD],
    }


def decode_hits(response: Mapping[str, Any]) -> list[str]:
    """Extract the document URIs of a search response, in hit order, without repeats."""
    uris: list[str] = []
    for hit in response.get("hits", {}).get("hits", []):
        source = hit.get("_source") or {}
        uri = source.get(ID_FIELD) or hit.get("_id")
        if uri and uri not in uris:
            uris.append(uri)
    return uris
