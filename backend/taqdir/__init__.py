"""Taqdir construction cost estimation engine for the Saudi market.

Usage::

    from taqdir import create_default_engine

    engine = create_default_engine()
    result = engine.estimate({
        "landArea": 400,
        "propertyType": "فلة",
        "roomTypes": ["مطبخ رئيسي", "صالة المعيشة"],
        "neighborhood": "العليا",
    })
"""

__version__ = "0.1.0"

from taqdir.engine import CostEngine  # noqa: E402
from taqdir.exceptions import CostEstimationError, InvalidInputError, TaqdirError  # noqa: E402
from taqdir.factory import create_default_engine  # noqa: E402
from taqdir.models.enums import (  # noqa: E402
    Confidence,
    FinishingLevel,
    PropertyCategory,
    QualityTier,
)
from taqdir.models.estimate import (  # noqa: E402
    Assumption,
    CostBreakdown,
    CostEstimateResult,
    EstimateMetadata,
    ProjectDetails,
)
from taqdir.models.rates import EstimationRates  # noqa: E402
from taqdir.models.request import CostCalculationInput  # noqa: E402

__all__ = [
    "Assumption",
    "Confidence",
    "CostBreakdown",
    "CostCalculationInput",
    "CostEngine",
    "CostEstimateResult",
    "CostEstimationError",
    "EstimateMetadata",
    "EstimationRates",
    "FinishingLevel",
    "InvalidInputError",
    "ProjectDetails",
    "PropertyCategory",
    "QualityTier",
    "TaqdirError",
    "__version__",
    "create_default_engine",
]
