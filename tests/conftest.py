"""Pytest configuration and shared fixtures for all tests.

This module provides function-scoped fixtures for:
- Client settings pointing at fake backends
- In-memory Fedora and Elasticsearch stand-ins
- CRUD, index and facade clients wired to those stand-ins
"""

from collections.abc import Generator

import httpx
import pytest

from pass_client.adapters import JsonAdapter
from pass_client.client import PassClient
from pass_client.core.settings import Settings
from pass_client.db.elasticsearch import ElasticsearchHttpClient
from pass_client.db.fedora import FedoraHttpClient
from pass_client.models import EntityRegistry, default_registry
from pass_client.repositories import ElasticsearchIndexClient, FedoraCrudClient
from tests.utils.fake_elasticsearch import FakeElasticsearch
from tests.utils.fake_fedora import FakeFedora

FEDORA_BASE_URL = "http://localhost:8080/fcrepo/rest/"
ELASTICSEARCH_URL = "http://localhost:9200"
CONTEXT_URL = "https://oa-pass.github.io/pass-data-model/src/main/resources/context-3.4.jsonld"


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings pointing at the fake backends."""
    return Settings(
        fedora_base_url=FEDORA_BASE_URL,
        fedora_user="fedoraAdmin",
        fedora_password="moo",
        elasticsearch_url=ELASTICSEARCH_URL,
        elasticsearch_indices="pass",
        elasticsearch_limit=200,
        jsonld_context=CONTEXT_URL,
    )


@pytest.fixture
def registry() -> EntityRegistry:
    return default_registry()


@pytest.fixture
def fake_fedora(registry: EntityRegistry) -> FakeFedora:
    """Fake repository with one empty container per entity type."""
    fedora = FakeFedora(FEDORA_BASE_URL)
    root = FEDORA_BASE_URL.rstrip("/")
    for entity_type in registry:
        fedora.add_container(f"{FEDORA_BASE_URL}{entity_type.container}", parent=root)
    return fedora


@pytest.fixture
def fake_index() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest.fixture
def fedora_http(fake_fedora: FakeFedora) -> Generator[FedoraHttpClient, None, None]:
    client = FedoraHttpClient(
        base_url=FEDORA_BASE_URL,
        client=httpx.Client(transport=fake_fedora.transport()),
    )
    yield client
    client.close()


@pytest.fixture
def elasticsearch_http(
    fake_index: FakeElasticsearch,
) -> Generator[ElasticsearchHttpClient, None, None]:
    client = ElasticsearchHttpClient(
        hosts=[ELASTICSEARCH_URL],
        client=httpx.Client(transport=fake_index.transport()),
    )
    yield client
    client.close()


@pytest.fixture
def crud_client(
    fedora_http: FedoraHttpClient, registry: EntityRegistry, test_settings: Settings
) -> FedoraCrudClient:
    return FedoraCrudClient(
        client=fedora_http,
        adapter=JsonAdapter(context=CONTEXT_URL),
        registry=registry,
        settings=test_settings,
    )


@pytest.fixture
def overwriting_crud_client(
    fedora_http: FedoraHttpClient, registry: EntityRegistry, test_settings: Settings
) -> FedoraCrudClient:
    return FedoraCrudClient(
        client=fedora_http,
        adapter=JsonAdapter(context=CONTEXT_URL),
        registry=registry,
        settings=test_settings,
        overwrite_on_update=True,
    )


@pytest.fixture
def index_client(
    elasticsearch_http: ElasticsearchHttpClient,
    registry: EntityRegistry,
    test_settings: Settings,
) -> ElasticsearchIndexClient:
    return ElasticsearchIndexClient(
        client=elasticsearch_http, registry=registry, settings=test_settings
    )


@pytest.fixture
def pass_client(
    test_settings: Settings,
    fedora_http: FedoraHttpClient,
    elasticsearch_http: ElasticsearchHttpClient,
) -> Generator[PassClient, None, None]:
    client = PassClient(
        settings=test_settings, fedora=fedora_http, elasticsearch=elasticsearch_http
    )
    yield client
    client.close()
