# processflow/services/store.py
"""
Flow Store
In-memory owner of every Flow. Flows are immutable values: callers build a
modified copy and hand it back here, so the stored flow and whatever the
presentation layer holds as "active" never drift apart.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import settings
from ..errors import NotFoundError
from ..models import Flow, StepInstance, as_utc, utcnow
from ..util.ids import new_id

logger = logging.getLogger(__name__)

Steps = Tuple[StepInstance, ...]


class FlowStore:
    """Insertion-ordered collection of flows, safe to share across threads."""

    def __init__(
        self,
        default_name: Optional[str] = None,
        clock: Callable = utcnow,
    ) -> None:
        # Reentrant: read-modify-write helpers call update_flow under the lock.
        self._lock = threading.RLock()
        self._flows: Dict[str, Flow] = {}
        self._default_name = default_name or settings.default_flow_name
        self._clock = clock

    def create_flow(self, name: Optional[str] = None) -> Flow:
        """
        Allocate an empty flow and append it to the store.

        Without *name* the flow is called "<default name> N", N being the
        number of flows once this one is added.
        """
        now = self._clock()
        with self._lock:
            flow = Flow(
                id=new_id("flow_"),
                name=name or f"{self._default_name} {len(self._flows) + 1}",
                created_at=now,
                modified_at=now,
            )
            self._flows[flow.id] = flow
        logger.info("created flow %s (%s)", flow.id, flow.name)
        return flow

    def add_flow(self, flow: Flow) -> Flow:
        """Register an externally built flow, e.g. one produced by import."""
        with self._lock:
            if flow.id in self._flows:
                raise ValueError(f"Flow '{flow.id}' already exists")
            self._flows[flow.id] = flow
        logger.info("added flow %s (%s) with %d steps", flow.id, flow.name, len(flow.steps))
        return flow

    def list_flows(self) -> List[Flow]:
        with self._lock:
            return list(self._flows.values())

    def get_flow(self, flow_id: str) -> Flow:
        with self._lock:
            flow = self._flows.get(flow_id)
        if flow is None:
            raise NotFoundError("flow", flow_id)
        return flow

    def update_flow(self, flow: Flow) -> Flow:
        """
        Replace the stored flow that has ``flow.id`` with *flow*.

        ``modified_at`` is stamped with the current time (never moved
        backwards). Returns the value now held by the store.
        """
        # model_copy skips validation, so a naive timestamp can still get here.
        modified_at = max(as_utc(self._clock()), as_utc(flow.modified_at))
        stamped = flow.model_copy(update={"modified_at": modified_at})
        with self._lock:
            if flow.id not in self._flows:
                raise NotFoundError("flow", flow.id)
            self._flows[flow.id] = stamped
        logger.info("updated flow %s (%d steps)", flow.id, len(flow.steps))
        return stamped

    def rename_flow(self, flow_id: str, name: Optional[str] = None, description: Optional[str] = None) -> Flow:
        """Change name and/or description; ``None`` keeps the current value."""
        changes = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        with self._lock:
            return self.update_flow(self.get_flow(flow_id).model_copy(update=changes))

    def edit_steps(self, flow_id: str, edit: Callable[[Steps], Sequence[StepInstance]]) -> Flow:
        """
        Replace a flow's steps with ``edit(current_steps)``.

        *edit* is normally a sequencer operation. It runs under the store lock,
        so concurrent edits of one flow cannot overwrite each other. If it
        raises, the stored flow is left as it was.
        """
        with self._lock:
            flow = self.get_flow(flow_id)
            steps = tuple(edit(flow.steps))
            return self.update_flow(flow.model_copy(update={"steps": steps}))

    def clear(self) -> None:
        """Remove all flows. Intended for testing."""
        with self._lock:
            self._flows.clear()


FLOWS = FlowStore()
