"""Cost estimate output models for the Taqdir cost estimation engine."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taqdir.models.enums import Confidence


class _CamelModel(BaseModel):
    """Base for output models serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CostBreakdown(_CamelModel):
    """Fine-grained line items of an estimate, in SAR.

    ``foundation + structure + roofing`` equals the structure base amount
    and ``walls + flooring + finishes`` equals the finishing base amount.
    """

    foundation: float
    structure: float
    roofing: float
    walls: float
    flooring: float
    electrical: float
    plumbing: float
    hvac: float
    finishes: float
    landscaping: float
    basement: float = 0.0
    parking: float = 0.0
    permits: float
    labor: float
    contingency: float


class ProjectDetails(_CamelModel):
    """Derived characteristics of the project being estimated."""

    building_area: int
    room_count: int
    complexity: str
    quality_level: str


class Assumption(_CamelModel):
    """A documented assumption made during estimation."""

    parameter: str
    assumed_value: str
    reasoning: str
    confidence: Confidence


class EstimateMetadata(_CamelModel):
    """Metadata about the estimation run."""

    engine_version: str
    cost_data_version: str
    currency: str = "SAR"
    estimation_method: str = "unit_cost_per_square_meter"
    labor_rate: float
    contingency_rate: float


class CostEstimateResult(_CamelModel):
    """Complete, itemised construction cost estimate in Saudi Riyals."""

    structural_cost: float
    finishing_cost: float
    electrical_cost: float
    plumbing_cost: float
    hvac_cost: float
    landscaping_cost: float
    permits_cost: float
    contingency_cost: float
    total_cost: float
    cost_breakdown: CostBreakdown
    cost_per_square_meter: float
    project_details: ProjectDetails
    assumptions: list[Assumption] = Field(default_factory=list)
    metadata: EstimateMetadata

    def to_json_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys, as returned over HTTP."""
        return self.model_dump(mode="json", by_alias=True)

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat summary dict of formatted strings for display."""
        from taqdir.formatting import format_per_sqm, format_sar, format_sar_compact

        line_items = {
            "structural": self.structural_cost,
            "finishing": self.finishing_cost,
            "electrical": self.electrical_cost,
            "plumbing": self.plumbing_cost,
            "hvac": self.hvac_cost,
            "landscaping": self.landscaping_cost,
            "permits": self.permits_cost,
            "labor": self.cost_breakdown.labor,
        }
        top_drivers = sorted(line_items.items(), key=lambda kv: kv[1], reverse=True)[:3]

        return {
            "total_cost_formatted": format_sar(self.total_cost),
            "total_cost_compact": format_sar_compact(self.total_cost),
            "cost_per_sqm_formatted": format_per_sqm(self.cost_per_square_meter),
            "building_area_formatted": f"{self.project_details.building_area:,} م²",
            "room_count": self.project_details.room_count,
            "quality_level": self.project_details.quality_level,
            "top_cost_drivers": [
                {
                    "item": name,
                    "cost_formatted": format_sar(amount),
                    "percent_of_total": (
                        amount / self.total_cost * 100.0 if self.total_cost > 0 else 0.0
                    ),
                }
                for name, amount in top_drivers
            ],
            "num_assumptions": len(self.assumptions),
        }

    def to_export_dict(self) -> dict[str, Any]:
        """Produce a detailed dict for PDF/HTML export and storage.

        Monetary values are rounded to two decimals, matching the
        precision stored alongside each cost estimate record.
        """
        return {
            "totals": {
                "structural_cost": round(self.structural_cost, 2),
                "finishing_cost": round(self.finishing_cost, 2),
                "electrical_cost": round(self.electrical_cost, 2),
                "plumbing_cost": round(self.plumbing_cost, 2),
                "hvac_cost": round(self.hvac_cost, 2),
                "landscaping_cost": round(self.landscaping_cost, 2),
                "permits_cost": round(self.permits_cost, 2),
                "contingency_cost": round(self.contingency_cost, 2),
                "total_cost": round(self.total_cost, 2),
            },
            "cost_breakdown": {
                key: round(value, 2)
                for key, value in self.cost_breakdown.model_dump().items()
            },
            "cost_per_square_meter": round(self.cost_per_square_meter, 2),
            "project_details": self.project_details.model_dump(),
            "assumptions": [
                {
                    "parameter": a.parameter,
                    "assumed_value": a.assumed_value,
                    "reasoning": a.reasoning,
                    "confidence": a.confidence.value,
                }
                for a in self.assumptions
            ],
            "metadata": self.metadata.model_dump(),
        }
