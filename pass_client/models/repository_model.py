"""Repository model.

Describes a target repository that submissions can be deposited into.
"""

from enum import Enum
from typing import Literal

from pydantic import Field

from .base_model import PassEntity


class IntegrationType(str, Enum):
    """How the system integrates with a repository."""

    FULL = "full"
    ONE_WAY = "one-way"
    WEB_LINK = "web-link"


class Repository(PassEntity):
    """A target repository."""

    type: Literal["Repository"] = Field(default="Repository", alias="@type")
    name: str | None = None
    description: str | None = None
    url: str | None = None
    agreement_text: str | None = None
    form_schema: str | None = None
    integration_type: IntegrationType | None = None
    repository_key: str | None = None
    schemas: list[str] = Field(default_factory=list)
