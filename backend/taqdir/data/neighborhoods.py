"""Neighborhood cost multipliers for location-based adjustment.

Multipliers are relative to a typical Riyadh neighborhood (1.00).
Premium districts carry higher land-preparation, logistics and
contractor premiums.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

NEIGHBORHOOD_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    # Premium
    "العليا": 1.25,
    "الملقا": 1.20,
    "النرجس": 1.15,
    "الياسمين": 1.15,
    "قرطبة": 1.10,
    "الصحافة": 1.10,
    "الربوة": 1.08,
    # Standard
    "الوادي": 1.00,
    "المرقب": 1.00,
    "الروضة": 0.95,
    "الفيحاء": 0.95,
    "الملز": 0.90,
    "المنفوحة": 0.85,
    "الدرعية": 0.90,
})

# Multiplier for neighborhoods not in the table
DEFAULT_NEIGHBORHOOD_MULTIPLIER: float = 1.00
