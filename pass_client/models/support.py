"""Support types shared by several entity models."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer


def to_zulu(value: datetime) -> str:
    """Format a datetime as a UTC timestamp with millisecond precision.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def to_utc_millis(value: datetime) -> datetime:
    """Normalize a datetime to UTC at millisecond precision, as stored.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


ZuluDateTime = Annotated[
    datetime, AfterValidator(to_utc_millis), PlainSerializer(to_zulu, return_type=str)
]


class Identifier:
    """A ``domain:type:value`` identifier, as used in user locator ids."""

    def __init__(self, domain: str | None, type: str | None, value: str | None):
        self.domain: str | None = domain
        self.type: str | None = type
        self.value: str | None = value

    def serialize(self) -> str | None:
        if self.domain is not None and self.type is not None and self.value is not None:
            return ":".join((self.domain, self.type, self.value))
        return None

    @classmethod
    def deserialize(cls, serialized: str) -> "Identifier | None":
        parts = serialized.split(":", 2)
        if len(parts) == 3:
            return cls(parts[0], parts[1], parts[2])
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return (self.domain, self.type, self.value) == (
            other.domain,
            other.type,
            other.value,
        )

    def __hash__(self) -> int:
        return hash((self.domain, self.type, self.value))

    def __repr__(self) -> str:
        return f"Identifier({self.domain!r}, {self.type!r}, {self.value!r})"
