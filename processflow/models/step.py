from typing import Tuple

from pydantic import Field

from .base import CamelModel, ImpactLevel, Number


class StepTemplate(CamelModel):
    """Nominal parameters of a catalog process step."""
    id: str
    name: str
    duration_minutes: Number
    power_watts: Number
    chemicals: Tuple[str, ...] = ()
    temperature_c: Number
    env_impact: ImpactLevel


class StepInstance(StepTemplate):
    """A template placed in a flow, with its own identity and position."""
    instance_id: str
    position: int = Field(ge=0)

    def template(self) -> StepTemplate:
        """Template fields of this instance, without identity or position."""
        return StepTemplate(**self.model_dump(include=set(StepTemplate.model_fields)))
