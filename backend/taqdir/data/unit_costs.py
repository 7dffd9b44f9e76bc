"""Base construction unit costs for the Saudi market.

Costs are SAR per square meter of building area, 2025 market rates, for
each property category and quality tier.  Finishing-level multipliers
scale the finishing component only.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from taqdir.models.enums import FinishingLevel, PropertyCategory, QualityTier


class UnitCosts(BaseModel):
    """SAR/m² rates for the six area-driven cost components."""

    model_config = ConfigDict(frozen=True)

    structure: float
    finishing: float
    electrical: float
    plumbing: float
    hvac: float
    permits: float


UNIT_COSTS: Mapping[PropertyCategory, Mapping[QualityTier, UnitCosts]] = MappingProxyType({
    PropertyCategory.RESIDENTIAL: MappingProxyType({
        QualityTier.BASIC: UnitCosts(
            structure=950.0,
            finishing=700.0,
            electrical=180.0,
            plumbing=140.0,
            hvac=240.0,
            permits=60.0,
        ),
        QualityTier.STANDARD: UnitCosts(
            structure=1200.0,
            finishing=950.0,
            electrical=230.0,
            plumbing=180.0,
            hvac=300.0,
            permits=70.0,
        ),
        QualityTier.LUXURY: UnitCosts(
            structure=1600.0,
            finishing=1400.0,
            electrical=350.0,
            plumbing=250.0,
            hvac=400.0,
            permits=80.0,
        ),
    }),
    PropertyCategory.COMMERCIAL: MappingProxyType({
        QualityTier.BASIC: UnitCosts(
            structure=1400.0,
            finishing=950.0,
            electrical=300.0,
            plumbing=220.0,
            hvac=350.0,
            permits=120.0,
        ),
        QualityTier.STANDARD: UnitCosts(
            structure=1750.0,
            finishing=1200.0,
            electrical=400.0,
            plumbing=270.0,
            hvac=480.0,
            permits=140.0,
        ),
        QualityTier.LUXURY: UnitCosts(
            structure=2300.0,
            finishing=1700.0,
            electrical=600.0,
            plumbing=350.0,
            hvac=700.0,
            permits=180.0,
        ),
    }),
})

FINISHING_LEVEL_MULTIPLIERS: Mapping[FinishingLevel, float] = MappingProxyType({
    FinishingLevel.ECONOMY: 0.8,
    FinishingLevel.STANDARD: 1.0,
    FinishingLevel.LUXURY: 1.4,
})

# Arabic labels used by the design and study forms.
FINISHING_LEVEL_ALIASES: Mapping[str, FinishingLevel] = MappingProxyType({
    "عادي": FinishingLevel.ECONOMY,
    "متوسط": FinishingLevel.STANDARD,
    "فاخر": FinishingLevel.LUXURY,
})

DEFAULT_FINISHING_MULTIPLIER: float = 1.0
