"""Client facade combining the repository and search index clients.

This module defines PassClient, the single entry point applications use
for CRUD, crawling and attribute lookups. Each operation is dispatched to
the repository CRUD client or the index client.
"""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pass_client.adapters import JsonAdapter
from pass_client.core.settings import Settings, get_settings
from pass_client.db.elasticsearch import (
    ElasticsearchHttpClient,
    create_elasticsearch_client,
    get_elasticsearch_client,
)
from pass_client.db.fedora import FedoraHttpClient, create_fedora_client, get_fedora_client
from pass_client.db.fedora.client import RequestContent
from pass_client.models import EntityRegistry, PassEntity, default_registry
from pass_client.models.registry import EntityTypeRef
from pass_client.repositories import ElasticsearchIndexClient, FedoraCrudClient
from pass_client.repositories.protocols import (
    CrudClient,
    IncomingLinks,
    IndexClient,
    UploadParams,
)

T = TypeVar("T", bound=PassEntity)


class PassClient:
    """Typed access to PASS entities in the repository and the search index."""

    def __init__(
        self,
        settings: Settings | None = None,
        overwrite_on_update: bool = False,
        registry: EntityRegistry | None = None,
        fedora: FedoraHttpClient | None = None,
        elasticsearch: ElasticsearchHttpClient | None = None,
        crud_client: CrudClient | None = None,
        index_client: IndexClient | None = None,
    ):
        """Initialize the client with its dependencies.

        Args:
            settings: Client settings. If omitted, settings are loaded from the
                environment and the shared HTTP clients are used; otherwise
                the client creates and owns HTTP clients of its own.
            overwrite_on_update: Replace whole resources on update (PUT)
                instead of merging changed fields (PATCH). Fixed for the
                lifetime of the client.
            registry: Entity types known to the client.
            fedora: HTTP client for the repository.
            elasticsearch: HTTP client for the search index.
            crud_client: Replaces the default repository CRUD client.
            index_client: Replaces the default index client.
        """
        shared = settings is None
        self.settings: Settings = settings or get_settings()
        self.registry: EntityRegistry = registry or default_registry()
        self._owned: list[FedoraHttpClient | ElasticsearchHttpClient] = []

        if crud_client is None:
            if fedora is None and shared:
                fedora = get_fedora_client()
            elif fedora is None:
                fedora = create_fedora_client(self.settings)
                self._owned.append(fedora)
            crud_client = FedoraCrudClient(
                client=fedora,
                adapter=JsonAdapter(context=self.settings.jsonld_context),
                registry=self.registry,
                settings=self.settings,
                overwrite_on_update=overwrite_on_update,
            )

        if index_client is None:
            if elasticsearch is None and shared:
                elasticsearch = get_elasticsearch_client()
            elif elasticsearch is None:
                elasticsearch = create_elasticsearch_client(self.settings)
                self._owned.append(elasticsearch)
            index_client = ElasticsearchIndexClient(
                client=elasticsearch, registry=self.registry, settings=self.settings
            )

        self.crud_client: CrudClient = crud_client
        self.index_client: IndexClient = index_client

    def create_resource(self, entity: PassEntity) -> str:
        return self.crud_client.create_resource(entity)

    def create_and_read_resource(self, entity: T) -> T:
        return self.crud_client.create_and_read_resource(entity)

    def read_resource(self, uri: str, entity_type: EntityTypeRef) -> PassEntity:
        return self.crud_client.read_resource(uri, entity_type)

    def update_resource(self, entity: PassEntity) -> None:
        self.crud_client.update_resource(entity)

    def update_and_read_resource(self, entity: T) -> T:
        return self.crud_client.update_and_read_resource(entity)

    def delete_resource(self, uri: str) -> None:
        self.crud_client.delete_resource(uri)

    def get_incoming(self, uri: str) -> IncomingLinks:
        return self.crud_client.get_incoming(uri)

    def upload(
        self, uri: str, content: RequestContent, params: UploadParams | None = None
    ) -> str:
        return self.crud_client.upload(uri, content, params)

    def process_all_entities(
        self, visitor: Callable[[str], Any], entity_type: EntityTypeRef | None = None
    ) -> int:
        return self.crud_client.process_all_entities(visitor, entity_type)

    def find_by_attribute(
        self, entity_type: EntityTypeRef, attribute: str, value: Any
    ) -> str | None:
        return self.index_client.find_by_attribute(entity_type, attribute, value)

    def find_all_by_attribute(
        self,
        entity_type: EntityTypeRef,
        attribute: str,
        value: Any,
        limit: int | None = None,
        offset: int = 0,
    ) -> set[str]:
        return self.index_client.find_all_by_attribute(
            entity_type, attribute, value, limit, offset
        )

    def find_all_by_attributes(
        self,
        entity_type: EntityTypeRef,
        criteria: Mapping[str, Any],
        limit: int | None = None,
        offset: int = 0,
    ) -> set[str]:
        return self.index_client.find_all_by_attributes(entity_type, criteria, limit, offset)

    def close(self) -> None:
        """Close the HTTP clients this client created.

        Shared and injected HTTP clients are left open.
        """
        for http_client in self._owned:
            http_client.close()
        self._owned.clear()

    def __enter__(self) -> "PassClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
