"""Fedora implementation of the CrudClient protocol.

Creates, reads, updates and deletes entities in the repository, using
entity tags for optimistic concurrency control on updates.
"""

import json
import logging
from collections.abc import Callable
import sys
from typing import Any, TypeVar

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

import httpx

from pass_client.adapters import JsonAdapter
from pass_client.core.settings import Settings
from pass_client.db.fedora import FedoraHttpClient
from pass_client.db.fedora.client import RequestContent
from pass_client.errors import (
    InvalidArgumentError,
    RequestError,
    ResourceNotFoundError,
    UpdateConflictError,
)
from pass_client.models import EntityRegistry, PassEntity
from pass_client.models.registry import EntityTypeRef
from pass_client.repositories.protocols import CrudClient, IncomingLinks, UploadParams
from pass_client.repositories.repository_crawler import (
    IGNORE_CONTAINERS,
    SKIP_ACLS,
    RepositoryCrawler,
    depth,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=PassEntity)

JSONLD_CONTENTTYPE = "application/ld+json; charset=utf-8"
JSONLD_PATCH_CONTENTTYPE = "application/merge-patch+json; charset=utf-8"
COMPACTED_ACCEPTTYPE = "application/ld+json"
SERVER_MANAGED_OMITTYPE = "http://fedora.info/definitions/v4/repository#ServerManaged"
INCOMING_INCLUDETYPE = "http://fedora.info/definitions/v4/repository#InboundReferences"
PREFER_LENIENT_VAL = 'handling=lenient; received="minimal"'
ETAG_WEAK_PREFIX = "W/"

PREFER_READ = f'return=representation; omit="{SERVER_MANAGED_OMITTYPE}"'
PREFER_INCOMING = (
    f'return=representation; include="{INCOMING_INCLUDETYPE}"; '
    f'omit="{SERVER_MANAGED_OMITTYPE}"'
)


def _is_2xx(response: httpx.Response) -> bool:
    return 200 <= response.status_code <= 299


def _raise_for_status(response: httpx.Response, action: str, uri: str | None) -> None:
    """Raise the error matching a non-2xx response."""
    if _is_2xx(response):
        return
    if response.status_code in (404, 410):
        raise ResourceNotFoundError(str(uri), response.status_code, response.text)
    raise RequestError(
        f"Failed to {action} {uri} - unexpected status code "
        f"{response.status_code}: {response.text}",
        status_code=response.status_code,
        body=response.text,
    )


def strip_weak_prefix(etag: str | None) -> str | None:
    """Remove the weak validator prefix from an entity tag, if it has one."""
    if etag is not None and ETAG_WEAK_PREFIX in etag:
        return etag.replace(ETAG_WEAK_PREFIX, "")
    return etag


class FedoraCrudClient(CrudClient):
    """Repository for entity CRUD operations against Fedora.

    Updates are sent as merge-patch documents by default. With
    ``overwrite_on_update=True`` they replace the whole resource instead,
    which removes fields that are not set on the entity. The mode is fixed
    for the lifetime of the client.
    """

    def __init__(
        self,
        client: FedoraHttpClient,
        adapter: JsonAdapter,
        registry: EntityRegistry,
        settings: Settings,
        overwrite_on_update: bool = False,
    ):
        """Initialize the CRUD client.

        Args:
            client: HTTP client for the repository.
            adapter: Converts entities to and from JSON-LD.
            registry: Entity types and their containers.
            settings: Client settings (used for the base and container URLs).
            overwrite_on_update: Use PUT instead of PATCH for updates.
        """
        self.client: FedoraHttpClient = client
        self.adapter: JsonAdapter = adapter
        self.registry: EntityRegistry = registry
        self.settings: Settings = settings
        self.crawler: RepositoryCrawler = RepositoryCrawler(client)
        self._overwrite_on_update: bool = overwrite_on_update

    @property
    def overwrite_on_update(self) -> bool:
        return self._overwrite_on_update

    @override
    def create_resource(self, entity: PassEntity) -> str:
        created = self._create(entity)
        if created.id is None:
            raise RequestError("Repository did not return an id for the created resource")
        return created.id

    @override
    def create_and_read_resource(self, entity: T) -> T:
        return self._create(entity)

    @override
    def read_resource(self, uri: str, entity_type: EntityTypeRef) -> PassEntity:
        """Read an entity, recording its entity tag as the version tag.

        Raises:
            ResourceNotFoundError: If there is no resource at uri.
            RequestError: If the read fails for any other reason.
        """
        _require_uri(uri)
        registered = self.registry.get(entity_type)

        response = self.client.request(
            "GET",
            uri,
            headers={"Accept": COMPACTED_ACCEPTTYPE, "Prefer": PREFER_READ},
        )
        logger.info("Resource read status for %s: %s", uri, response.status_code)
        _raise_for_status(response, "read", uri)

        entity = self.adapter.to_model(response.content, registered.model)
        entity.version_tag = strip_weak_prefix(response.headers.get("ETag"))
        return entity

    @override
    def update_resource(self, entity: PassEntity) -> None:
        self._update(entity)

    @override
    def update_and_read_resource(self, entity: T) -> T:
        uri = self._update(entity)
        return self.read_resource(uri, entity.type)  # pyright: ignore[reportReturnType]

    @override
    def delete_resource(self, uri: str) -> None:
        _require_uri(uri)
        response = self.client.request("DELETE", uri)
        logger.info("Resource deletion status for %s: %s", uri, response.status_code)
        _raise_for_status(response, "delete", uri)

    @override
    def get_incoming(self, uri: str) -> IncomingLinks:
        """Find the resources that link to uri, grouped by the linking field.

        Returns:
            Mapping of field name to the URIs of resources that reference
            uri through that field. Empty if nothing links to uri.
        """
        _require_uri(uri)
        response = self.client.request(
            "GET",
            uri,
            headers={"Accept": COMPACTED_ACCEPTTYPE, "Prefer": PREFER_INCOMING},
        )
        logger.info("Resource read status for %s: %s", uri, response.status_code)
        _raise_for_status(response, "read", uri)

        try:
            raw: Any = json.loads(response.content) if response.content else {}
        except ValueError as e:
            raise RequestError(f"Response for {uri} is not valid JSON", body=response.text) from e

        graph = raw.get("@graph") if isinstance(raw, dict) else None
        if not graph:
            return {}

        result: IncomingLinks = {}
        for node in graph:
            incoming_link = node.get("@id")
            # the remaining nodes, other than the entity itself, are incoming links
            if incoming_link is None or incoming_link == uri:
                continue
            for field_name in node:
                if field_name == "@id":
                    continue
                result.setdefault(field_name, set()).add(incoming_link)
        return result

    @override
    def upload(
        self, uri: str, content: RequestContent, params: UploadParams | None = None
    ) -> str:
        """POST binary content as a child of the resource at uri.

        Returns:
            The URI of the created binary.
        """
        _require_uri(uri)
        params = params or UploadParams()
        headers = params.to_headers()

        response = self.client.request("POST", uri, headers=headers, content=content)
        logger.info("Binary upload status for %s: %s", uri, response.status_code)
        _raise_for_status(response, "upload binary content to", uri)

        location = response.headers.get("Location")
        if not location:
            raise RequestError(
                f"Repository did not return a location for content uploaded to {uri}",
                status_code=response.status_code,
                body=response.text,
            )
        return location

    @override
    def process_all_entities(
        self, visitor: Callable[[str], Any], entity_type: EntityTypeRef | None = None
    ) -> int:
        if entity_type is None:
            return self.crawler.visit(
                self.settings.fedora_base_url,
                visitor,
                ignore=IGNORE_CONTAINERS,
                skip=depth(2).or_(SKIP_ACLS),
            )

        container = self.settings.container_url(self.registry.get(entity_type).container)
        return self.crawler.visit(
            container,
            visitor,
            ignore=IGNORE_CONTAINERS,
            skip=depth(1).or_(SKIP_ACLS),
        )

    def _create(self, entity: T) -> T:
        registered = self.registry.for_entity(entity)
        container = self.settings.container_url(registered.container)
        body = self.adapter.to_json(entity, include_context=True)

        response = self.client.request(
            "POST",
            container,
            headers={
                "Content-Type": JSONLD_CONTENTTYPE,
                "Accept": COMPACTED_ACCEPTTYPE,
                "Prefer": PREFER_READ,
            },
            content=body,
        )
        _raise_for_status(response, "create resource in", container)

        created = self.adapter.to_model(response.content, registered.model)
        if created.id is None and response.headers.get("Location"):
            created = created.model_copy(update={"id": response.headers["Location"]})
        created.version_tag = strip_weak_prefix(response.headers.get("ETag"))
        logger.info("Creation status and location: %s: %s", response.status_code, created.id)
        return created  # pyright: ignore[reportReturnType]

    def _update(self, entity: PassEntity) -> str:
        if entity.id is None:
            raise InvalidArgumentError("Cannot update an entity that has no id")
        # unknown types are rejected before anything is sent
        self.registry.for_entity(entity)

        headers = {"Accept": COMPACTED_ACCEPTTYPE}
        if self._overwrite_on_update:
            method = "PUT"
            headers["Content-Type"] = JSONLD_CONTENTTYPE
            headers["Prefer"] = PREFER_LENIENT_VAL
        else:
            method = "PATCH"
            headers["Content-Type"] = JSONLD_PATCH_CONTENTTYPE

        if entity.version_tag is not None:
            headers["If-Match"] = entity.version_tag
        else:
            logger.warning(
                "Executing update without 'If-Match' header: a %s, id '%s' has a null 'version tag'",
                entity.type,
                entity.id,
            )

        response = self.client.request(
            method, entity.id, headers=headers, content=self.adapter.to_json(entity)
        )
        if response.status_code == 412:
            raise UpdateConflictError(entity.id)
        logger.info("Resource update status for %s: %s", entity.id, response.status_code)
        _raise_for_status(response, "update", entity.id)
        return entity.id


def _require_uri(uri: str | None) -> None:
    if not uri:
        raise InvalidArgumentError("uri cannot be null or empty")
