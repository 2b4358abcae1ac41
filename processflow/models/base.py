from datetime import datetime, UTC
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Catalog values are whole numbers, imported documents may carry floats.
Number = Union[int, float]


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ImpactLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    very_high = "very_high"


class CamelModel(BaseModel):
    """Immutable model that reads and writes camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        # NaN and infinities cannot be summed into a report.
        allow_inf_nan=False,
    )
