"""In-memory stand-in for the Elasticsearch search API, served through httpx.MockTransport."""

import json
from typing import Any

import httpx


def _matches_term(doc_value: Any, term: Any) -> bool:
    """Whole-value equality against a keyword field, as a term query does."""
    if isinstance(term, dict):
        query_value = term["value"]
        case_insensitive = term.get("case_insensitive", False)
    else:
        query_value, case_insensitive = term, False

    values = doc_value if isinstance(doc_value, list) else [doc_value]
    for value in values:
        if case_insensitive and isinstance(value, str) and isinstance(query_value, str):
            if value.lower() == query_value.lower():
                return True
        elif value == query_value:
            return True
    return False


class FakeElasticsearch:
    """Evaluates the bool queries the index client sends over a list of documents."""

    def __init__(self):
        self.documents: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []

    def index(self, document: dict[str, Any]) -> None:
        self.documents.append(document)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method != "POST" or not request.url.path.endswith("/_search"):
            return httpx.Response(404, json={"error": "no handler"})

        body = json.loads(request.content)
        query = body["query"]["bool"]
        matched = [doc for doc in self.documents if self._matches(doc, query)]

        start = body.get("from", 0)
        page = matched[start : start + body.get("size", 10)]
        hits = [
            {"_id": doc["@id"], "_source": {"@id": doc["@id"]}} for doc in page
        ]
        return httpx.Response(
            200,
            json={"hits": {"total": {"value": len(matched)}, "hits": hits}},
        )

    def _matches(self, doc: dict[str, Any], query: dict[str, Any]) -> bool:
        for clause in query.get("filter", []):
            if "term" not in clause:
                raise ValueError(f"Unsupported query clause: {clause}")
            (name, term), = clause["term"].items()
            if name not in doc or not _matches_term(doc[name], term):
                return False
        for clause in query.get("must_not", []):
            name = clause["exists"]["field"]
            if doc.get(name) is not None:
                return False
        return True
