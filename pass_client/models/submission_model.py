"""Submission model."""

from enum import Enum
from typing import Literal

from pydantic import Field

from .base_model import PassEntity
from .support import ZuluDateTime


class SubmissionSource(str, Enum):
    """Where a submission was initiated."""

    PASS = "pass"
    OTHER = "other"


class Submission(PassEntity):
    """A publication submitted to one or more repositories."""

    type: Literal["Submission"] = Field(default="Submission", alias="@type")
    metadata: str | None = Field(default=None, description="Serialized submission metadata")
    source: SubmissionSource | None = None
    submitted: bool | None = None
    submitted_date: ZuluDateTime | None = None
    submission_status: str | None = None
    aggregated_deposit_status: str | None = None
    publication: str | None = Field(default=None, description="URI of the publication")
    repositories: list[str] = Field(default_factory=list)
    submitter: str | None = Field(
        default=None, description="URI of the submitting user, or a mailto: URI"
    )
    preparers: list[str] = Field(default_factory=list)
    grants: list[str] = Field(default_factory=list)
    effective_policies: list[str] = Field(default_factory=list)
