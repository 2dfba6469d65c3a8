from .elasticsearch_index_client import ElasticsearchIndexClient
from .fedora_crud_client import FedoraCrudClient
from .repository_crawler import (
    IGNORE_CONTAINERS,
    IGNORE_ROOT,
    NEVER,
    SKIP_ACLS,
    CrawlNode,
    CrawlPredicate,
    RepositoryCrawler,
    any_of,
    depth,
)

__all__ = [
    "FedoraCrudClient",
    "ElasticsearchIndexClient",
    "RepositoryCrawler",
    "CrawlNode",
    "CrawlPredicate",
    "any_of",
    "depth",
    "IGNORE_ROOT",
    "NEVER",
    "IGNORE_CONTAINERS",
    "SKIP_ACLS",
]
