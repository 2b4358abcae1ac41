"""
Serialization Gateway
Translates between stored Flows and portable JSON documents.
"""

import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..errors import FlowImportError, ImportErrorKind
from ..models import CamelModel, Flow, StepInstance, utcnow
from ..util.ids import new_id
from .sequencer import renumber

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# Step keys used by unversioned (schema 0) documents.
LEGACY_STEP_KEYS = {
    "duration": "durationMinutes",
    "power": "powerWatts",
    "temperature": "temperatureC",
    "stepIndex": "position",
}
# Legacy step ids were "<template id>_<epoch millis>", with one more
# "_<millis>" suffix for every time the step was copied.
LEGACY_INSTANCE_ID = re.compile(r"^(?P<template>.+?)(?:_\d+)+$")


class FlowDocument(CamelModel):
    """
    Wire shape of an exported flow. Only ``name`` and ``createdAt`` are
    required on import; ``id`` and ``modifiedAt`` are replaced anyway.
    """
    schema_version: int = SCHEMA_VERSION
    id: Optional[str] = None
    name: str
    description: str = ""
    steps: Tuple[StepInstance, ...] = ()
    created_at: datetime
    modified_at: Optional[datetime] = None


def export_flow(flow: Flow) -> str:
    """
    Render *flow* as a JSON document.

    Keys are camelCase in declaration order, so exporting the same flow twice
    yields identical text.
    """
    document = FlowDocument(**flow.model_dump())
    return document.model_dump_json(by_alias=True, indent=2)


def export_filename(flow: Flow) -> str:
    return re.sub(r"\s+", "_", flow.name) + ".json"


def upgrade_legacy_step(step: Any) -> Any:
    """
    Rewrite one step of an unversioned document to the current key names.

    Legacy format:
        {id: "cvd_oxide_1718000000000", duration: 120, power: 2500,
         temperature: 400, stepIndex: 0, ...}

    Current format:
        {id: "cvd_oxide", instanceId: "cvd_oxide_1718000000000",
         durationMinutes: 120, powerWatts: 2500, temperatureC: 400,
         position: 0, ...}
    """
    if not isinstance(step, dict):
        return step  # left for shape validation to reject
    upgraded = {LEGACY_STEP_KEYS.get(key, key): value for key, value in step.items()}
    if "instanceId" not in upgraded and isinstance(upgraded.get("id"), str):
        upgraded["instanceId"] = upgraded["id"]
        match = LEGACY_INSTANCE_ID.match(upgraded["id"])
        if match:
            upgraded["id"] = match.group("template")
    return upgraded


def _decode(document: Union[str, bytes]) -> Dict[str, Any]:
    try:
        if isinstance(document, bytes):
            document = document.decode("utf-8")
        raw = json.loads(document)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FlowImportError(ImportErrorKind.parse_failure, f"invalid JSON document: {exc}") from exc

    if not isinstance(raw, dict):
        raise FlowImportError(
            ImportErrorKind.invalid_shape,
            f"expected a JSON object, got {type(raw).__name__}",
        )
    return raw


def _upgrade(raw: Dict[str, Any]) -> Dict[str, Any]:
    version = raw.get("schemaVersion", 0)
    if not isinstance(version, int) or isinstance(version, bool):
        raise FlowImportError(ImportErrorKind.invalid_shape, "schemaVersion must be an integer")
    if version > SCHEMA_VERSION:
        raise FlowImportError(
            ImportErrorKind.unsupported_version,
            f"schemaVersion {version} is newer than supported version {SCHEMA_VERSION}",
        )
    if version == 0:
        if isinstance(raw.get("steps"), list):
            raw["steps"] = [upgrade_legacy_step(step) for step in raw["steps"]]
        raw["schemaVersion"] = SCHEMA_VERSION
    # The id is always reassigned, so whatever the document carries is ignored.
    raw = {key: value for key, value in raw.items() if key != "id"}
    # An explicit null means "no steps", same as a missing key.
    if raw.get("steps") is None:
        raw["steps"] = []
    # Positions are derived from order, whatever the document says.
    elif isinstance(raw["steps"], list):
        raw["steps"] = [
            {**step, "position": i} if isinstance(step, dict) else step
            for i, step in enumerate(raw["steps"])
        ]
    return raw


def _normalize_steps(steps: Tuple[StepInstance, ...]) -> Tuple[StepInstance, ...]:
    """Make positions contiguous and instance ids unique within the flow."""
    seen = set()
    unique: List[StepInstance] = []
    for step in steps:
        if step.instance_id in seen:
            step = step.model_copy(update={"instance_id": new_id("step_")})
        seen.add(step.instance_id)
        unique.append(step)
    return renumber(unique)


def import_flow(document: Union[str, bytes]) -> Flow:
    """
    Parse an exported document into a new Flow.

    The document is untrusted: it must be a JSON object carrying at least a
    ``name`` and ``createdAt``. The result gets a fresh id and a
    ``modifiedAt`` of now; everything else is kept. The store is not touched.
    """
    raw = _upgrade(_decode(document))
    try:
        parsed = FlowDocument.model_validate(raw)
    except ValidationError as exc:
        details = [
            {"path": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        raise FlowImportError(ImportErrorKind.invalid_shape, "document does not describe a flow", details) from exc

    flow = Flow(
        id=new_id("flow_"),
        name=parsed.name,
        description=parsed.description,
        steps=_normalize_steps(parsed.steps),
        created_at=parsed.created_at,
        modified_at=utcnow(),
    )
    logger.info("imported flow %s (%s) with %d steps", flow.id, flow.name, len(flow.steps))
    return flow


async def read_document(upload, max_bytes: int) -> bytes:
    """
    Await the full contents of an uploaded file.

    Reads one byte past *max_bytes* to detect oversize input without
    buffering an unbounded body.
    """
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise FlowImportError(
            ImportErrorKind.parse_failure,
            f"document exceeds {max_bytes} bytes",
        )
    return data
