"""Elasticsearch connection management.

This module provides a singleton search client used by the index client
for attribute lookups.
"""

from pass_client.core.settings import Settings, get_settings

from .client import ElasticsearchHttpClient

_client: ElasticsearchHttpClient | None = None


def create_elasticsearch_client(settings: Settings) -> ElasticsearchHttpClient:
    """Create a new search client configured from settings."""
    return ElasticsearchHttpClient(
        hosts=settings.elasticsearch_urls,
        timeout=settings.http_timeout,
        user_agent=settings.http_agent,
    )


def get_elasticsearch_client() -> ElasticsearchHttpClient:
    """Get the Elasticsearch client singleton.

    Returns:
        ElasticsearchHttpClient: The singleton search client instance.
    """
    global _client
    if _client is None or _client.is_closed:
        _client = create_elasticsearch_client(get_settings())

    return _client


def close_elasticsearch_client() -> None:
    """Close the Elasticsearch client."""
    global _client
    if _client:
        _client.close()
        _client = None


def reset_elasticsearch_client() -> None:
    """Reset the Elasticsearch client for testing purposes."""
    close_elasticsearch_client()
    get_settings.cache_clear()
