from datetime import datetime
from typing import Tuple

from pydantic import Field, field_validator

from .base import CamelModel, as_utc, utcnow
from .step import StepInstance


class Flow(CamelModel):
    """A named, ordered sequence of step instances."""
    id: str
    name: str
    description: str = ""
    steps: Tuple[StepInstance, ...] = ()
    created_at: datetime = Field(default_factory=utcnow)
    modified_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at", "modified_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)
