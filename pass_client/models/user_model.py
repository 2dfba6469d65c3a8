"""User model."""

from enum import Enum
from typing import Literal

from pydantic import Field

from .base_model import PassEntity
from .support import Identifier


class UserRole(str, Enum):
    """Roles a user can hold."""

    ADMIN = "admin"
    SUBMITTER = "submitter"


class User(PassEntity):
    """A person who uses the system or is referenced by a grant."""

    type: Literal["User"] = Field(default="User", alias="@type")
    username: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    email: str | None = None
    affiliation: list[str] = Field(default_factory=list)
    locator_ids: list[str] = Field(
        default_factory=list,
        description="Serialized domain:type:value identifiers for the user",
    )
    orcid_id: str | None = None
    roles: list[UserRole] = Field(default_factory=list)

    def add_locator_id(self, identifier: Identifier) -> None:
        """Append a locator id built from an Identifier."""
        serialized = identifier.serialize()
        if serialized is None:
            raise ValueError("Identifier must have a domain, type and value")
        self.locator_ids.append(serialized)
