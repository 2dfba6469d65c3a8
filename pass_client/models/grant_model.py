"""Grant model.

A Grant is an award from a funder that may carry public access
requirements for the publications it supports.
"""

from enum import Enum
from typing import Literal

from pydantic import Field

from .base_model import PassEntity
from .support import ZuluDateTime


class AwardStatus(str, Enum):
    """Status of an award."""

    ACTIVE = "active"
    PRE_AWARD = "pre-award"
    TERMINATED = "terminated"


class Grant(PassEntity):
    """A research grant."""

    type: Literal["Grant"] = Field(default="Grant", alias="@type")
    award_number: str | None = Field(default=None, description="Award number from funder")
    award_status: AwardStatus | None = Field(default=None, description="Status of award")
    local_key: str | None = Field(
        default=None,
        description="Key assigned to the grant by the institution's local system",
    )
    project_name: str | None = Field(default=None, description="Title of the research project")
    primary_funder: str | None = Field(
        default=None, description="URI of the funder that is the original source of funds"
    )
    direct_funder: str | None = Field(
        default=None, description="URI of the funder from which funds are directly received"
    )
    pi: str | None = Field(default=None, description="URI of the principal investigator")
    co_pis: list[str] = Field(
        default_factory=list, description="URIs of the co-principal investigators"
    )
    award_date: ZuluDateTime | None = Field(default=None, description="Date the grant was awarded")
    start_date: ZuluDateTime | None = Field(default=None, description="Date the grant started")
    end_date: ZuluDateTime | None = Field(default=None, description="Date the grant ended")
