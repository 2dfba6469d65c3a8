"""JSON-LD adapter for PASS entities.

Converts entity models to the compacted JSON-LD documents the repository
accepts, and decodes repository responses back into models.
"""

import json
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from pass_client.errors import RequestError
from pass_client.models import PassEntity

T = TypeVar("T", bound=PassEntity)


class JsonAdapter:
    """Two-way conversion between entities and JSON-LD documents."""

    def __init__(self, context: str | None = None):
        """Initialize the adapter.

        Args:
            context: JSON-LD context URL added to documents written with
                include_context=True when the entity has none of its own.
        """
        self.context: str | None = context

    def to_document(self, entity: PassEntity, include_context: bool = True) -> dict[str, Any]:
        """Convert an entity to a JSON-LD document.

        None values and empty lists are left out, as is the version tag.
        """
        document = entity.model_dump(mode="json", by_alias=True, exclude_none=True)
        document = {k: v for k, v in document.items() if v != []}
        if include_context:
            if "@context" not in document and self.context:
                document["@context"] = self.context
        else:
            document.pop("@context", None)
        return document

    def to_json(self, entity: PassEntity, include_context: bool = True) -> bytes:
        """Serialize an entity to a UTF-8 encoded JSON-LD document."""
        return json.dumps(self.to_document(entity, include_context)).encode("utf-8")

    def to_model(self, data: bytes | str, model: type[T]) -> T:
        """Decode a JSON-LD document into an entity of the given model.

        Accepts either a single node or a document with an ``@graph``; in the
        latter case the first node typed as the model is used.

        Raises:
            RequestError: If the document cannot be decoded into the model.
        """
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise RequestError(f"Response is not valid JSON: {e}") from e

        type_tag: str = model.model_fields["type"].default
        node = _select_node(raw, type_tag)
        if node is None:
            raise RequestError(f"Response does not contain a {type_tag} resource")

        node = dict(node)
        if isinstance(node.get("@type"), list):
            node["@type"] = type_tag
        try:
            return model.model_validate(node)
        except PydanticValidationError as e:
            raise RequestError(f"Response could not be decoded as {type_tag}: {e}") from e


def _select_node(raw: Any, type_tag: str) -> dict[str, Any] | None:
    if not isinstance(raw, dict):
        return None
    graph = raw.get("@graph")
    if graph is None:
        return raw
    for node in graph:
        types = node.get("@type")
        if types == type_tag or (isinstance(types, list) and type_tag in types):
            if "@context" in raw and "@context" not in node:
                node = {**node, "@context": raw["@context"]}
            return node
    return None
