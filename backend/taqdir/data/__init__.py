"""Reference data layer for the Taqdir cost estimation engine."""

from taqdir.data.repository import ReferenceDataRepository
from taqdir.data.unit_costs import UnitCosts

__all__ = [
    "ReferenceDataRepository",
    "UnitCosts",
]
