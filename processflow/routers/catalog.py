
from typing import List

from fastapi import APIRouter, status

from processflow.models import StepTemplate
from processflow.services import catalog

router = APIRouter()

@router.get("/catalog/categories", status_code=status.HTTP_200_OK)
def list_categories():
    return {"items": catalog.list_categories()}

@router.get("/catalog/categories/{category}/steps", response_model=List[StepTemplate])
def list_steps(category: str):
    # Unknown categories are an empty list, not a 404.
    return catalog.list_steps(category)

@router.get("/catalog/steps/{template_id}", response_model=StepTemplate)
def get_template(template_id: str):
    return catalog.get_template(template_id)
