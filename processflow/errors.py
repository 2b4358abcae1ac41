"""
Error types raised by the process flow core.

All of them are recoverable: the caller reports the failure and keeps its
previous state, since no operation commits a partial change.
"""
from enum import Enum
from typing import Any, Dict, List, Optional


class ProcessFlowError(Exception):
    """Base class for every error raised by processflow."""


class NotFoundError(ProcessFlowError, LookupError):
    """A flow id (or catalog template id) could not be resolved."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} '{key}' not found")


class StepIndexError(ProcessFlowError, IndexError):
    """A sequencer operation received an index outside the step sequence."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"step index {index} out of range for sequence of length {length}")


class ImportErrorKind(str, Enum):
    parse_failure = "parse_failure"
    invalid_shape = "invalid_shape"
    unsupported_version = "unsupported_version"


class FlowImportError(ProcessFlowError):
    """An imported document could not be turned into a Flow."""

    def __init__(
        self,
        kind: ImportErrorKind,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.kind = kind
        self.message = message
        self.details = details or []
        super().__init__(f"{kind.value}: {message}")
