"""Tests for the shared Fedora and Elasticsearch client singletons."""

from collections.abc import Generator

import pytest

from pass_client import PassClient
from pass_client.core.settings import Settings
from pass_client.db.elasticsearch import (
    close_elasticsearch_client,
    create_elasticsearch_client,
    get_elasticsearch_client,
    reset_elasticsearch_client,
)
from pass_client.db.fedora import (
    close_fedora_client,
    create_fedora_client,
    get_fedora_client,
    reset_fedora_client,
)


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("PASS_FEDORA_BASE_URL", "http://fedora.example.org/rest")
    monkeypatch.setenv("PASS_ELASTICSEARCH_URL", "http://es1:9200,http://es2:9200")
    reset_fedora_client()
    reset_elasticsearch_client()
    yield
    reset_fedora_client()
    reset_elasticsearch_client()


class TestFedoraConnection:
    def test_client_is_shared(self) -> None:
        client = get_fedora_client()

        assert get_fedora_client() is client
        assert client.base_url == "http://fedora.example.org/rest/"

    def test_closed_client_is_replaced(self) -> None:
        client = get_fedora_client()

        close_fedora_client()

        assert client.is_closed
        assert get_fedora_client() is not client


class TestElasticsearchConnection:
    def test_client_uses_configured_hosts(self) -> None:
        client = get_elasticsearch_client()

        assert get_elasticsearch_client() is client
        assert client.hosts == ["http://es1:9200", "http://es2:9200"]

    def test_closed_client_is_replaced(self) -> None:
        client = get_elasticsearch_client()

        close_elasticsearch_client()

        assert client.is_closed
        assert get_elasticsearch_client() is not client


class TestPassClientConnections:
    """PassClient uses the shared clients unless it is given its own settings."""

    def test_default_client_uses_shared_connections(self) -> None:
        client = PassClient()

        assert client.crud_client.client is get_fedora_client()  # pyright: ignore[reportAttributeAccessIssue]
        assert client.index_client.client is get_elasticsearch_client()  # pyright: ignore[reportAttributeAccessIssue]

        client.close()

        assert not get_fedora_client().is_closed
        assert not get_elasticsearch_client().is_closed

    def test_explicit_settings_create_owned_connections(self) -> None:
        settings = Settings(fedora_base_url="http://other.example.org/rest/")

        client = PassClient(settings=settings)
        fedora = client.crud_client.client  # pyright: ignore[reportAttributeAccessIssue]

        assert fedora is not get_fedora_client()
        assert fedora.base_url == "http://other.example.org/rest/"
        client.close()
        assert fedora.is_closed

    def test_create_clients_from_settings(self) -> None:
        settings = Settings(
            fedora_base_url="http://fedora.example.org/rest",
            elasticsearch_url="http://es3:9200",
        )

        assert create_fedora_client(settings).base_url == "http://fedora.example.org/rest/"
        assert create_elasticsearch_client(settings).hosts == ["http://es3:9200"]
