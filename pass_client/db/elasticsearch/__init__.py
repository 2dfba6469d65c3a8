"""Module for Elasticsearch connection and client."""

from .client import ElasticsearchHttpClient
from .connection import (
    close_elasticsearch_client,
    create_elasticsearch_client,
    get_elasticsearch_client,
    reset_elasticsearch_client,
)

__all__ = [
    "ElasticsearchHttpClient",
    "create_elasticsearch_client",
    "get_elasticsearch_client",
    "close_elasticsearch_client",
    "reset_elasticsearch_client",
]
