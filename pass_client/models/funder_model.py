"""Funder and Journal models."""

from typing import Literal

from pydantic import Field

from .base_model import PassEntity


class Funder(PassEntity):
    """An organization that funds grants."""

    type: Literal["Funder"] = Field(default="Funder", alias="@type")
    name: str | None = None
    url: str | None = None
    policy: str | None = Field(default=None, description="URI of the funder's policy")
    local_key: str | None = None


class Journal(PassEntity):
    """A journal that publications appear in."""

    type: Literal["Journal"] = Field(default="Journal", alias="@type")
    journal_name: str | None = None
    issns: list[str] = Field(default_factory=list)
    publisher: str | None = None
    nlmta: str | None = None
    pmc_participation: str | None = None
