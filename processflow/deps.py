
from processflow.services.store import FLOWS, FlowStore


def get_store() -> FlowStore:
    # Single process-wide store; tests swap it through dependency_overrides.
    return FLOWS
