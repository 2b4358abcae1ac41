from .base import CamelModel, ImpactLevel, Number, as_utc, utcnow
from .step import StepTemplate, StepInstance
from .flow import Flow
from .impact import ImpactSummary
from .dto import CreateFlowDTO, UpdateFlowDTO, AddStepDTO, FlowPage

__all__ = [
    "CamelModel", "ImpactLevel", "Number", "as_utc", "utcnow",
    "StepTemplate", "StepInstance",
    "Flow",
    "ImpactSummary",
    "CreateFlowDTO", "UpdateFlowDTO", "AddStepDTO", "FlowPage",
]
