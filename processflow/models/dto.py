from typing import List, Optional

from pydantic import Field

from .base import CamelModel
from .flow import Flow


# --- Requests ---

class CreateFlowDTO(CamelModel):
    """Request to create a flow; the name defaults to "Process Flow N"."""
    name: Optional[str] = Field(default=None, min_length=1)


class UpdateFlowDTO(CamelModel):
    """Rename a flow and/or change its description."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


class AddStepDTO(CamelModel):
    """Catalog template to append to a flow."""
    template_id: str


# --- Responses ---

class FlowPage(CamelModel):
    items: List[Flow]
    limit: int
    offset: int
    total: int
