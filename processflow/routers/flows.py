from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from processflow.config import settings
from processflow.deps import get_store
from processflow.models import AddStepDTO, CreateFlowDTO, Flow, FlowPage, ImpactSummary, UpdateFlowDTO
from processflow.services import catalog, sequencer, serialization
from processflow.services.impact import summarize
from processflow.services.store import FlowStore
from processflow.util.pagination import clamp_limit, clamp_offset

router = APIRouter()

@router.post("/flows", response_model=Flow, status_code=status.HTTP_201_CREATED)
def create_flow(body: Optional[CreateFlowDTO] = None, store: FlowStore = Depends(get_store)):
    return store.create_flow(body.name if body else None)

@router.get("/flows", response_model=FlowPage)
def list_flows(limit: Optional[int] = None, offset: Optional[int] = None, store: FlowStore = Depends(get_store)):
    flows = store.list_flows()
    limit, offset = clamp_limit(limit), clamp_offset(offset)
    return FlowPage(items=flows[offset:offset + limit], limit=limit, offset=offset, total=len(flows))

@router.post("/flows:import", response_model=Flow, status_code=status.HTTP_201_CREATED)
async def import_flow(file: UploadFile = File(...), store: FlowStore = Depends(get_store)):
    data = await serialization.read_document(file, settings.max_import_bytes)
    # Parsing fails before anything reaches the store.
    return store.add_flow(serialization.import_flow(data))

@router.get("/flows/{flow_id}", response_model=Flow)
def get_flow(flow_id: str, store: FlowStore = Depends(get_store)):
    return store.get_flow(flow_id)

@router.put("/flows/{flow_id}", response_model=Flow)
def update_flow(flow_id: str, body: UpdateFlowDTO, store: FlowStore = Depends(get_store)):
    return store.rename_flow(flow_id, body.name, body.description)

@router.post("/flows/{flow_id}/steps", response_model=Flow, status_code=status.HTTP_201_CREATED)
def append_step(flow_id: str, body: AddStepDTO, store: FlowStore = Depends(get_store)):
    template = catalog.get_template(body.template_id)
    return store.edit_steps(flow_id, lambda steps: sequencer.append_step(steps, template))

@router.post("/flows/{flow_id}/steps/{index}:duplicate", response_model=Flow, status_code=status.HTTP_201_CREATED)
def duplicate_step(flow_id: str, index: int, store: FlowStore = Depends(get_store)):
    return store.edit_steps(flow_id, lambda steps: sequencer.duplicate_step(steps, index))

@router.delete("/flows/{flow_id}/steps/{index}", response_model=Flow)
def remove_step(flow_id: str, index: int, store: FlowStore = Depends(get_store)):
    return store.edit_steps(flow_id, lambda steps: sequencer.remove_step(steps, index))

@router.get("/flows/{flow_id}/impact", response_model=ImpactSummary)
def impact(flow_id: str, store: FlowStore = Depends(get_store)):
    return summarize(store.get_flow(flow_id).steps)

@router.get("/flows/{flow_id}/export")
def export_flow(flow_id: str, store: FlowStore = Depends(get_store)):
    flow = store.get_flow(flow_id)
    filename = quote(serialization.export_filename(flow))
    return Response(
        content=serialization.export_flow(flow),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{filename}"},
    )
