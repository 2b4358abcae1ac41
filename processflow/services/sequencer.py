"""
Step Sequencer
Produces new step sequences for a flow. Inputs are never modified; callers
write the returned tuple back through the Flow Store.
"""

from typing import Sequence, Tuple

from ..errors import StepIndexError
from ..models import StepInstance, StepTemplate
from ..util.ids import new_id

Steps = Tuple[StepInstance, ...]


def _check_index(sequence: Sequence[StepInstance], index: int) -> None:
    # Negative indices are rejected rather than counted from the end.
    if not 0 <= index < len(sequence):
        raise StepIndexError(index, len(sequence))


def renumber(sequence: Sequence[StepInstance]) -> Steps:
    """Re-derive every position from the element's index."""
    return tuple(
        step if step.position == i else step.model_copy(update={"position": i})
        for i, step in enumerate(sequence)
    )


def append_step(sequence: Sequence[StepInstance], template: StepTemplate) -> Steps:
    """Add a new instance of *template* at the end of *sequence*."""
    fields = template.model_dump(include=set(StepTemplate.model_fields))
    instance = StepInstance(
        **fields,
        instance_id=new_id("step_"),
        position=len(sequence),
    )
    return (*sequence, instance)


def duplicate_step(sequence: Sequence[StepInstance], index: int) -> Steps:
    """
    Append a copy of ``sequence[index]`` at the end, like adding the same
    catalog step again. The copy gets a fresh instance id.
    """
    _check_index(sequence, index)
    return append_step(sequence, sequence[index].template())


def remove_step(sequence: Sequence[StepInstance], index: int) -> Steps:
    """Drop ``sequence[index]`` and close the gap in positions."""
    _check_index(sequence, index)
    return renumber([*sequence[:index], *sequence[index + 1:]])
