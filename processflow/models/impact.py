from typing import Tuple

from .base import CamelModel, ImpactLevel, Number


class ImpactSummary(CamelModel):
    """
    Aggregate metrics of a step sequence. Derived on request, never stored.

    Energy is reported in watt-hours: each step contributes
    power_watts * duration_minutes / 60.
    """
    total_energy_wh: float = 0.0
    total_time_minutes: Number = 0
    chemicals: Tuple[str, ...] = ()
    risk_level: ImpactLevel = ImpactLevel.low
