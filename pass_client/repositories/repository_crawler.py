"""Depth-first crawler over the repository's containment hierarchy.

The crawler walks from a root resource down through the resources it
contains, calling a visitor with the URI of each resource it visits.
Two kinds of predicate control the walk:

- ignore predicates: the node is not visited, but its children are;
- skip predicates: neither the node nor anything below it is visited.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from pass_client.db.fedora import FedoraHttpClient
from pass_client.errors import RequestError, ResourceNotFoundError

logger = logging.getLogger(__name__)

LDP_NS = "http://www.w3.org/ns/ldp#"
ACL_NS = "http://www.w3.org/ns/auth/acl#"
INFRASTRUCTURE_NAMESPACES = (
    LDP_NS,
    "ldp:",
    "http://fedora.info/definitions/v4/repository#",
    "http://fedora.info/definitions/fcrepo#",
    "fedora:",
    "fcrepo:",
)
INFRASTRUCTURE_TYPES = frozenset(
    {
        "Container",
        "BasicContainer",
        "DirectContainer",
        "IndirectContainer",
        "RDFSource",
        "NonRDFSource",
        "Resource",
        "RepositoryRoot",
    }
)
CONTAINS_KEYS = ("contains", "ldp:contains", f"{LDP_NS}contains")
NON_RDF_SOURCE = f"{LDP_NS}NonRDFSource"

ACCEPT_JSONLD = "application/ld+json"
PREFER_CONTAINMENT = f'return=representation; include="{LDP_NS}PreferContainment"'


@dataclass(frozen=True)
class CrawlNode:
    """A resource reached during a crawl.

    ``types`` is None until the resource has been fetched.
    """

    uri: str
    depth: int
    types: frozenset[str] | None = None


class CrawlPredicate:
    """A rule over crawl nodes that can be OR-ed with other rules."""

    def __init__(self, test: Callable[[CrawlNode], bool], name: str | None = None):
        self._test: Callable[[CrawlNode], bool] = test
        self.name: str = name or getattr(test, "__name__", "predicate")

    def __call__(self, node: CrawlNode) -> bool:
        return self._test(node)

    def or_(self, other: Callable[[CrawlNode], bool]) -> "CrawlPredicate":
        return any_of(self, other)

    def __or__(self, other: Callable[[CrawlNode], bool]) -> "CrawlPredicate":
        return self.or_(other)

    def __repr__(self) -> str:
        return f"CrawlPredicate({self.name})"


def any_of(*predicates: Callable[[CrawlNode], bool]) -> CrawlPredicate:
    """Combine predicates with logical OR. No predicates never matches."""
    names = " | ".join(getattr(p, "name", getattr(p, "__name__", "?")) for p in predicates)
    return CrawlPredicate(lambda node: any(p(node) for p in predicates), names or "never")


def depth(max_depth: int) -> CrawlPredicate:
    """Skip rule matching any node deeper than max_depth (the root is depth 0)."""
    if max_depth < 0:
        raise ValueError("max_depth cannot be negative")
    return CrawlPredicate(lambda node: node.depth > max_depth, f"depth({max_depth})")


def _is_infrastructure_type(rdf_type: str) -> bool:
    return rdf_type in INFRASTRUCTURE_TYPES or rdf_type.startswith(INFRASTRUCTURE_NAMESPACES)


def _is_acl(node: CrawlNode) -> bool:
    if any(t.startswith((ACL_NS, "acl:")) or t == "Authorization" for t in node.types or ()):
        return True
    segments = urlparse(node.uri).path.rstrip("/").split("/")
    return "fcr:acl" in segments or "acls" in segments


IGNORE_ROOT = CrawlPredicate(lambda node: node.depth == 0, "IGNORE_ROOT")

# A pure container has no types besides LDP/Fedora infrastructure types
IGNORE_CONTAINERS = CrawlPredicate(
    lambda node: node.types is not None
    and all(_is_infrastructure_type(t) for t in node.types),
    "IGNORE_CONTAINERS",
)

SKIP_ACLS = CrawlPredicate(_is_acl, "SKIP_ACLS")

NEVER = any_of()


class RepositoryCrawler:
    """Sequential depth-first crawler over repository containers.

    The root of a crawl is its starting point and is never passed to the
    visitor; visiting starts with the resources the root contains.
    """

    def __init__(self, client: FedoraHttpClient):
        self.client: FedoraHttpClient = client

    def visit(
        self,
        root: str,
        visitor: Callable[[str], Any],
        ignore: Callable[[CrawlNode], bool] = NEVER,
        skip: Callable[[CrawlNode], bool] = NEVER,
    ) -> int:
        """Crawl from root and call visitor for every node visited.

        Args:
            root: URI of the resource to start from (depth 0).
            visitor: Called with the URI of every visited node. Exceptions
                raised by the visitor abort the crawl.
            ignore: Nodes matching this rule are not visited, but their
                children are.
            skip: Nodes matching this rule are neither visited nor
                descended into. The rule is tried once before the node is
                fetched, with ``types`` None, and again once its types are
                known, so a node skipped by depth or path is never requested.

        Returns:
            The number of nodes visited.
        """
        ignore_rule = any_of(IGNORE_ROOT, ignore)
        seen: set[str] = set()
        count = 0

        # explicit stack of (uri, depth), children pushed in reverse listing order
        stack: list[tuple[str, int]] = [(root, 0)]
        while stack:
            uri, node_depth = stack.pop()
            if uri in seen:
                continue
            seen.add(uri)

            # depth and path rules are checked before anything is fetched
            if skip(CrawlNode(uri=uri, depth=node_depth)):
                logger.debug("Skipping %s and its children", uri)
                continue

            types, children = self._describe(uri)
            node = CrawlNode(uri=uri, depth=node_depth, types=types)

            if skip(node):
                logger.debug("Skipping %s and its children", uri)
                continue

            if ignore_rule(node):
                logger.debug("Ignoring %s", uri)
            else:
                visitor(uri)
                count += 1

            stack.extend((child, node_depth + 1) for child in reversed(children))

        logger.info("Visited %d resources under %s", count, root)
        return count

    def _describe(self, uri: str) -> tuple[frozenset[str], list[str]]:
        """Fetch a resource's RDF types and the URIs of the resources it contains."""
        response = self.client.request(
            "GET",
            uri,
            headers={"Accept": ACCEPT_JSONLD, "Prefer": PREFER_CONTAINMENT},
        )
        if response.status_code in (404, 410):
            raise ResourceNotFoundError(uri, response.status_code, response.text)
        if not 200 <= response.status_code <= 299:
            raise RequestError(
                f"Failed to list {uri} - unexpected status code "
                f"{response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        # binaries answer with their own content, not a JSON-LD description
        if not _is_json(response.headers.get("Content-Type")):
            return frozenset({NON_RDF_SOURCE}), []

        try:
            document = json.loads(response.content) if response.content else {}
        except ValueError as e:
            raise RequestError(f"Listing of {uri} is not valid JSON", body=response.text) from e

        node = _find_node(document, uri)
        if node is None:
            return frozenset(), []
        return frozenset(_as_list(node.get("@type"))), _contained(node)


def _find_node(document: Any, uri: str) -> dict[str, Any] | None:
    if isinstance(document, list):
        nodes = document
    elif isinstance(document, dict) and "@graph" in document:
        nodes = document["@graph"]
    elif isinstance(document, dict):
        return document
    else:
        return None

    for node in nodes:
        if isinstance(node, dict) and node.get("@id", "").rstrip("/") == uri.rstrip("/"):
            return node
    return nodes[0] if len(nodes) == 1 and isinstance(nodes[0], dict) else None


def _is_json(content_type: str | None) -> bool:
    if not content_type:
        return True
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type.endswith(("/json", "+json"))


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _contained(node: dict[str, Any]) -> list[str]:
    children: list[str] = []
    for key in CONTAINS_KEYS:
        for child in _as_list(node.get(key)):
            child_uri = child.get("@id") if isinstance(child, dict) else child
            if isinstance(child_uri, str) and child_uri not in children:
                children.append(child_uri)
    return children
