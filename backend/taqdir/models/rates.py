"""Tunable rates and thresholds used by the cost engine.

The defaults reproduce the 2025 pricing model.  They are plain
configuration rather than constants so a deployment can adjust labour or
contingency for a given project scale without touching the engine.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EstimationRates(BaseModel):
    """Rates, unit prices and thresholds applied on top of the unit costs."""

    model_config = ConfigDict(frozen=True)

    labor_rate: float = Field(default=0.30, ge=0)
    contingency_rate: float = Field(default=0.10, ge=0)

    basement_cost_per_sqm: float = Field(default=400.0, ge=0)
    parking_cost_per_space: float = Field(default=8000.0, ge=0)
    residential_landscaping_per_sqm: float = Field(default=80.0, ge=0)
    commercial_landscaped_fraction: float = Field(default=0.1, ge=0, le=1)
    commercial_landscaping_per_sqm: float = Field(default=150.0, ge=0)

    complexity_floor: float = Field(default=0.8, gt=0)
    complexity_ceiling: float = Field(default=2.0, gt=0)

    # Quality tier heuristics
    luxury_indicator_threshold: int = Field(default=3, ge=1)
    luxury_room_threshold: int = Field(default=12, ge=1)
    standard_indicator_threshold: int = Field(default=1, ge=1)
    standard_room_threshold: int = Field(default=8, ge=1)

    @model_validator(mode="after")
    def floor_le_ceiling(self) -> EstimationRates:
        if self.complexity_floor > self.complexity_ceiling:
            msg = (
                f"complexity_floor ({self.complexity_floor}) must not exceed "
                f"complexity_ceiling ({self.complexity_ceiling})"
            )
            raise ValueError(msg)
        return self
