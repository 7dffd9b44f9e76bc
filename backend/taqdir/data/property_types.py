"""Property type classification and building coverage ratios.

Coverage ratios give the constructed building area as a fraction of the
land area, following typical Saudi municipal setback and coverage rules.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

RESIDENTIAL_PROPERTY_TYPES: frozenset[str] = frozenset({
    "عمارة سكنية",
    "فلة",
    "شقة",
    "مجمع سكني مغلق",
    "تاون هاوس",
    "بنت هاوس",
    "أدوار",
    "مزرعة",
    "استراحة",
    "شالية",
})

# The most premium housing type; always priced at the luxury tier.
PREMIUM_PROPERTY_TYPE: str = "بنت هاوس"

COVERAGE_RATIOS: Mapping[str, float] = MappingProxyType({
    "فلة": 0.65,
    "عمارة سكنية": 0.75,
    "شقة": 0.85,
    "مجمع سكني مغلق": 0.60,
    "تاون هاوس": 0.70,
    "بنت هاوس": 0.80,
    "أدوار": 0.70,
    "مزرعة": 0.40,
    "استراحة": 0.50,
    "شالية": 0.55,
    "أبراج": 0.80,
    "مراكز تجارية": 0.85,
    "ستريب مول": 0.90,
    "مستشفيات": 0.75,
    "سكن عمال": 0.80,
    "مبنى مكتبي": 0.80,
    "مبنى درايف ثرو": 0.70,
})

DEFAULT_COVERAGE_RATIO: float = 0.65
