"""Base models for PASS repository entities.

This module defines the base configuration and the common identity
fields shared by every entity stored in the repository.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Base configuration for all models
class PassBaseModel(BaseModel):
    """Base model with the JSON-LD naming conventions of the PASS data model."""

    model_config = ConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
        validate_assignment=True,
    )


class PassEntity(PassBaseModel):
    """An identified resource in the repository.

    Concrete entity types override ``type`` with their discriminator.
    ``PassEntity`` itself is abstract and is never registered, so it can
    neither be created in a container nor searched for.
    """

    id: str | None = Field(
        default=None,
        alias="@id",
        description="Absolute URI of the resource, assigned by the repository",
        # assigned once by the repository, never edited afterwards
        frozen=True,
    )
    type: str = Field(..., alias="@type", description="Entity type discriminator")
    context: str | dict[str, Any] | list[Any] | None = Field(
        default=None, alias="@context", description="JSON-LD context"
    )
    version_tag: str | None = Field(
        default=None,
        exclude=True,
        description="Concurrency token taken from the last read's entity tag",
    )
