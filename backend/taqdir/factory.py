"""Factory functions for creating pre-configured CostEngine instances."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taqdir.data.repository import ReferenceDataRepository
from taqdir.engine import CostEngine

if TYPE_CHECKING:
    from taqdir.models.rates import EstimationRates


def create_default_engine(rates: EstimationRates | None = None) -> CostEngine:
    """Create a CostEngine wired up with the built-in reference tables.

    This is the recommended way to create a CostEngine for typical usage.
    It wires up a ReferenceDataRepository over the 2025 Saudi pricing
    tables so callers don't need to understand the internal wiring.

    Args:
        rates: Optional labor, contingency and extras rates. When omitted
            the 2025 defaults apply.

    Returns:
        A CostEngine ready to produce estimates.

    Example::

        from taqdir import create_default_engine

        engine = create_default_engine()
        result = engine.estimate({"landArea": 400, "propertyType": "فلة", ...})
    """
    return CostEngine(ReferenceDataRepository(), rates=rates)
