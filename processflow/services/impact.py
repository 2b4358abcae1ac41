"""
Impact Aggregator
Summary metrics of a step sequence, computed fresh on every call.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from ..models import ImpactLevel, ImpactSummary, StepTemplate

HIGH_IMPACT = frozenset({ImpactLevel.high, ImpactLevel.very_high})
# More high-impact steps than this escalates to very_high.
VERY_HIGH_THRESHOLD = 2
# More steps than this is "many small steps", even if none is high-impact.
MANY_STEPS_THRESHOLD = 5


def _round1(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def energy_wh(step: StepTemplate) -> float:
    """Energy of one step, holding its power for the full duration."""
    return step.power_watts * step.duration_minutes / 60


def risk_level(sequence: Sequence[StepTemplate]) -> ImpactLevel:
    high_count = sum(1 for step in sequence if step.env_impact in HIGH_IMPACT)
    if high_count > VERY_HIGH_THRESHOLD:
        return ImpactLevel.very_high
    if high_count > 0:
        return ImpactLevel.high
    if len(sequence) > MANY_STEPS_THRESHOLD:
        return ImpactLevel.medium
    return ImpactLevel.low


def summarize(sequence: Sequence[StepTemplate]) -> ImpactSummary:
    """
    Aggregate energy (Wh, one decimal), time, chemicals and risk tier.

    Steps are modelled as strictly sequential, so time is a plain sum.
    Chemicals keep the order in which they first appear.
    """
    if not sequence:
        return ImpactSummary()

    # dict keys keep first-seen order
    chemicals = dict.fromkeys(c for step in sequence for c in step.chemicals)

    return ImpactSummary(
        total_energy_wh=_round1(sum(energy_wh(step) for step in sequence)),
        total_time_minutes=sum(step.duration_minutes for step in sequence),
        chemicals=tuple(chemicals),
        risk_level=risk_level(sequence),
    )
