"""Registry of entity types known to the client.

Every operation that depends on the type of an entity (which container it
lives in, which model decodes it, which documents a search is scoped to)
looks the type up here by its type tag.
"""

from dataclasses import dataclass

from pass_client.errors import InvalidArgumentError

from .base_model import PassEntity
from .funder_model import Funder, Journal
from .grant_model import Grant
from .repository_model import Repository
from .submission_model import Submission
from .user_model import User

ABSTRACT_TYPE = "PassEntity"


@dataclass(frozen=True)
class EntityType:
    """A registered entity type."""

    name: str
    model: type[PassEntity]
    container: str


EntityTypeRef = str | type[PassEntity]


class EntityRegistry:
    """Maps type tags to entity types."""

    def __init__(self, entity_types: list[EntityType] | None = None):
        self._types: dict[str, EntityType] = {}
        for entity_type in entity_types or []:
            self.register(entity_type)

    def register(self, entity_type: EntityType) -> None:
        if entity_type.name == ABSTRACT_TYPE:
            raise InvalidArgumentError(
                f"{ABSTRACT_TYPE} is abstract and cannot be registered"
            )
        self._types[entity_type.name] = entity_type

    def get(self, ref: EntityTypeRef | None) -> EntityType:
        """Resolve a type tag or model class to its registered entity type.

        Raises:
            InvalidArgumentError: If ref is None, the abstract base type,
                or not registered.
        """
        if ref is None:
            raise InvalidArgumentError("entity type cannot be null")
        name = ref if isinstance(ref, str) else _type_tag(ref)
        if name == ABSTRACT_TYPE:
            raise InvalidArgumentError(
                f"entity type cannot be the abstract {ABSTRACT_TYPE}, "
                "it must be a specific entity type"
            )
        try:
            return self._types[name]
        except KeyError:
            raise InvalidArgumentError(f"Unknown entity type: {name}") from None

    def for_entity(self, entity: PassEntity) -> EntityType:
        """Resolve the registered type of an entity instance by its type tag."""
        return self.get(entity.type)

    def __iter__(self):
        return iter(self._types.values())

    def __contains__(self, name: object) -> bool:
        return name in self._types


def _type_tag(model: type[PassEntity]) -> str:
    if model is PassEntity:
        return ABSTRACT_TYPE
    field = model.model_fields.get("type")
    if field is None or not isinstance(field.default, str):
        raise InvalidArgumentError(f"{model.__name__} does not declare a type tag")
    return field.default


def default_registry() -> EntityRegistry:
    """Registry with all entity types of the PASS data model."""
    return EntityRegistry(
        [
            EntityType("Grant", Grant, "grants"),
            EntityType("User", User, "users"),
            EntityType("Submission", Submission, "submissions"),
            EntityType("Repository", Repository, "repositories"),
            EntityType("Funder", Funder, "funders"),
            EntityType("Journal", Journal, "journals"),
        ]
    )
