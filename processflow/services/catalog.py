"""
Step Catalog
Static library of process step templates, grouped by category.

The table is built once at import time and exposed read-only; nothing in
the process mutates it.
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

from ..errors import NotFoundError
from ..models import ImpactLevel, StepTemplate


def _step(id, name, duration, power, chemicals, temperature, impact) -> StepTemplate:
    return StepTemplate(
        id=id,
        name=name,
        duration_minutes=duration,
        power_watts=power,
        chemicals=tuple(chemicals),
        temperature_c=temperature,
        env_impact=impact,
    )


CATALOG: Mapping[str, Tuple[StepTemplate, ...]] = MappingProxyType({
    "Deposition": (
        _step("cvd_oxide", "CVD Oxide", 120, 2500, ["TEOS", "O2"], 400, ImpactLevel.medium),
        _step("pvd_metal", "PVD Metal", 90, 3000, ["Ar", "Ti"], 25, ImpactLevel.low),
        _step("ald_hfO2", "ALD HfO2", 180, 1500, ["TDMAH", "H2O"], 300, ImpactLevel.high),
    ),
    "Etching": (
        _step("dry_etch_oxide", "Dry Etch Oxide", 60, 2000, ["CF4", "CHF3"], 25, ImpactLevel.medium),
        _step("wet_etch_metal", "Wet Etch Metal", 30, 0, ["H2SO4", "H2O2"], 80, ImpactLevel.high),
    ),
    "Lithography": (
        _step("photoresist_coat", "Photoresist Coating", 45, 500, ["Photoresist", "PGMEA"], 25, ImpactLevel.low),
        _step("euv_exposure", "EUV Exposure", 180, 5000, [], 25, ImpactLevel.very_high),
    ),
    "Cleaning": (
        _step("rca_clean", "RCA Clean", 20, 100, ["NH4OH", "H2O2", "HCl"], 70, ImpactLevel.medium),
        _step("megasonic_clean", "Megasonic Clean", 15, 800, ["DI Water"], 25, ImpactLevel.low),
    ),
})


def list_categories() -> List[str]:
    """Category names in display order."""
    return list(CATALOG)


def list_steps(category: str) -> List[StepTemplate]:
    """Templates of a category in display order; unknown categories are empty."""
    return list(CATALOG.get(category, ()))


def get_template(template_id: str) -> StepTemplate:
    """Find a template by id across all categories."""
    for steps in CATALOG.values():
        for template in steps:
            if template.id == template_id:
                return template
    raise NotFoundError("step template", template_id)
