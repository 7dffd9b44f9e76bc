"""Domain models for the Taqdir cost estimation engine."""

from taqdir.models.enums import Confidence, FinishingLevel, PropertyCategory, QualityTier
from taqdir.models.estimate import (
    Assumption,
    CostBreakdown,
    CostEstimateResult,
    EstimateMetadata,
    ProjectDetails,
)
from taqdir.models.rates import EstimationRates
from taqdir.models.request import (
    CostCalculationInput,
    CostEstimateRequest,
    ProjectStudyRequest,
)

__all__ = [
    "Assumption",
    "Confidence",
    "CostBreakdown",
    "CostCalculationInput",
    "CostEstimateRequest",
    "CostEstimateResult",
    "EstimateMetadata",
    "EstimationRates",
    "FinishingLevel",
    "ProjectDetails",
    "ProjectStudyRequest",
    "PropertyCategory",
    "QualityTier",
]
