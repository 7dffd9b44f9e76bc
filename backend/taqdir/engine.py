"""Core cost estimation engine for the Taqdir cost estimation library.

The CostEngine implements a unit-cost-per-square-meter methodology tuned to
the Saudi market:

1. **Classification**: Derive the property category (residential or
   commercial) and the quality tier (basic, standard, luxury) from the
   property type and requested spaces.
2. **Building area**: Apply the property type's coverage ratio to the land
   area and round down to whole square meters.
3. **Unit cost lookup**: Fetch SAR/m² rates for structure, finishing,
   electrical, plumbing, HVAC and permits for the category and tier.
4. **Adjustments**: Scale finishing by the finishing level and the average
   room complexity; scale every area-driven component except permits by
   the neighborhood multiplier.
5. **Extras**: Add basement, parking and landscaping amounts.
6. **Labor and contingency**: Labor is a share of material costs;
   contingency is a share of everything before it.
7. **Assumption documentation**: Record every lookup that fell back to a
   default so estimates stay traceable.

The engine is a pure function of its input and the reference tables: no
I/O, no shared mutable state.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from taqdir.exceptions import CostEstimationError, InvalidInputError
from taqdir.models.enums import Confidence, PropertyCategory, QualityTier
from taqdir.models.estimate import (
    Assumption,
    CostBreakdown,
    CostEstimateResult,
    EstimateMetadata,
    ProjectDetails,
)
from taqdir.models.rates import EstimationRates
from taqdir.models.request import CostCalculationInput

if TYPE_CHECKING:
    from taqdir.data.repository import ReferenceDataRepository

logger = logging.getLogger(__name__)

# Share of the structure base amount per line item
_STRUCTURE_SPLIT: dict[str, float] = {
    "foundation": 0.25,
    "structure": 0.60,
    "roofing": 0.15,
}

# Share of the finishing base amount per line item
_FINISHING_SPLIT: dict[str, float] = {
    "walls": 0.40,
    "flooring": 0.35,
    "finishes": 0.25,
}

ENGINE_VERSION = "0.1.0"
COST_DATA_VERSION = "2025.1"


class CostEngine:
    """Estimation engine that converts a CostCalculationInput into a CostEstimateResult.

    Args:
        repository: The reference data repository providing unit costs,
            neighborhood multipliers, room complexity factors and coverage
            ratios.
        rates: Labor, contingency and extras rates. Defaults reproduce the
            2025 pricing model.

    Example::

        from taqdir.data.repository import ReferenceDataRepository

        engine = CostEngine(ReferenceDataRepository())
        result = engine.estimate(request)
    """

    def __init__(
        self,
        repository: ReferenceDataRepository,
        rates: EstimationRates | None = None,
    ) -> None:
        self._repository = repository
        self._rates = rates or EstimationRates()

    @property
    def rates(self) -> EstimationRates:
        return self._rates

    def estimate(
        self, request: CostCalculationInput | Mapping[str, Any]
    ) -> CostEstimateResult:
        """Produce an itemised construction cost estimate.

        Args:
            request: The project description, either as a model or as a
                mapping using field names or camelCase aliases.

        Returns:
            A CostEstimateResult whose total reconciles exactly with its
            components.

        Raises:
            InvalidInputError: If the land area is missing or not positive,
                ``room_types`` is not a list, or required fields are missing.
            CostEstimationError: If the figures overflow to a non-finite total.
        """
        request = self._coerce_request(request)
        rates = self._rates
        repo = self._repository
        assumptions: list[Assumption] = []

        # 1-2. Classify category and quality tier
        category = repo.get_property_category(request.property_type)
        tier = self._classify_quality_tier(request.property_type, request.room_types)

        # 3. Building footprint
        if not repo.has_coverage_ratio(request.property_type):
            assumptions.append(
                Assumption(
                    parameter="property_type",
                    assumed_value=str(repo.get_coverage_ratio(request.property_type)),
                    reasoning=(
                        f"No coverage ratio for property type '{request.property_type}'; "
                        f"used the default ratio and priced it as {category}"
                    ),
                    confidence=Confidence.MEDIUM,
                )
            )
        building_area = self._building_area(request.land_area, request.property_type)

        # 4. Unit costs
        unit = repo.get_unit_costs(category, tier)

        # 5. Finishing level
        if repo.resolve_finishing_level(request.finishing_level) is None:
            assumptions.append(
                Assumption(
                    parameter="finishing_level",
                    assumed_value="standard",
                    reasoning=(
                        f"Finishing level '{request.finishing_level}' is not recognised; "
                        f"treated as standard"
                    ),
                    confidence=Confidence.LOW,
                )
            )
        finishing_multiplier = repo.get_finishing_multiplier(request.finishing_level)

        # 6. Neighborhood
        if not repo.has_neighborhood(request.neighborhood):
            assumptions.append(
                Assumption(
                    parameter="neighborhood",
                    assumed_value=str(repo.get_neighborhood_multiplier(request.neighborhood)),
                    reasoning=(
                        f"Neighborhood '{request.neighborhood}' has no cost multiplier; "
                        f"no location premium applied"
                    ),
                    confidence=Confidence.LOW,
                )
            )
        location = repo.get_neighborhood_multiplier(request.neighborhood)

        # 7. Room complexity
        complexity = self._complexity_multiplier(request.room_types, assumptions)

        # 8. Base amounts
        structure_base = unit.structure * building_area * location
        finishing_base = (
            unit.finishing * building_area * location * complexity * finishing_multiplier
        )
        electrical_base = unit.electrical * building_area * location
        plumbing_base = unit.plumbing * building_area * location
        hvac_base = unit.hvac * building_area * location
        permits_base = unit.permits * building_area

        basement_cost = (
            building_area * rates.basement_cost_per_sqm * location
            if request.has_basement
            else 0.0
        )
        parking_cost = request.parking_spaces * rates.parking_cost_per_space

        if category == PropertyCategory.RESIDENTIAL:
            landscaping_cost = (
                request.land_area * rates.residential_landscaping_per_sqm * location
            )
        else:
            landscaping_cost = (
                building_area
                * rates.commercial_landscaped_fraction
                * rates.commercial_landscaping_per_sqm
            )

        # 10-12. Labor, contingency, total
        material_costs = (
            structure_base
            + finishing_base
            + electrical_base
            + plumbing_base
            + hvac_base
            + basement_cost
        )
        labor = material_costs * rates.labor_rate
        subtotal = material_costs + landscaping_cost + permits_base + labor + parking_cost
        contingency = subtotal * rates.contingency_rate
        total_cost = subtotal + contingency
        if not math.isfinite(total_cost):
            msg = f"Estimate overflowed for land area {request.land_area!r}"
            raise CostEstimationError(msg)

        # 9. Line-item breakdown
        breakdown = CostBreakdown(
            foundation=structure_base * _STRUCTURE_SPLIT["foundation"],
            structure=structure_base * _STRUCTURE_SPLIT["structure"],
            roofing=structure_base * _STRUCTURE_SPLIT["roofing"],
            walls=finishing_base * _FINISHING_SPLIT["walls"],
            flooring=finishing_base * _FINISHING_SPLIT["flooring"],
            electrical=electrical_base,
            plumbing=plumbing_base,
            hvac=hvac_base,
            finishes=finishing_base * _FINISHING_SPLIT["finishes"],
            landscaping=landscaping_cost,
            basement=basement_cost,
            parking=parking_cost,
            permits=permits_base,
            labor=labor,
            contingency=contingency,
        )

        # 13. Derived metrics
        cost_per_sqm = total_cost / building_area if building_area > 0 else 0.0

        logger.debug(
            "Estimated %s (%s/%s): area=%d m2, location=%.2f, complexity=%.3f, "
            "total=%.2f SAR, assumptions=%d",
            request.property_type,
            category,
            tier,
            building_area,
            location,
            complexity,
            total_cost,
            len(assumptions),
        )

        return CostEstimateResult(
            structural_cost=structure_base + basement_cost,
            finishing_cost=finishing_base,
            electrical_cost=electrical_base,
            plumbing_cost=plumbing_base,
            hvac_cost=hvac_base,
            landscaping_cost=landscaping_cost,
            permits_cost=permits_base,
            contingency_cost=contingency,
            total_cost=total_cost,
            cost_breakdown=breakdown,
            cost_per_square_meter=cost_per_sqm,
            project_details=ProjectDetails(
                building_area=building_area,
                room_count=len(request.room_types),
                complexity=tier.value,
                quality_level=f"{tier.value} ({category.value})",
            ),
            assumptions=assumptions,
            metadata=EstimateMetadata(
                engine_version=ENGINE_VERSION,
                cost_data_version=COST_DATA_VERSION,
                labor_rate=rates.labor_rate,
                contingency_rate=rates.contingency_rate,
            ),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _coerce_request(
        request: CostCalculationInput | Mapping[str, Any],
    ) -> CostCalculationInput:
        """Validate the request, translating failures into InvalidInputError."""
        if isinstance(request, CostCalculationInput):
            # Instances built with model_construct skip validation.
            land_area = request.land_area
            if (
                isinstance(land_area, bool)
                or not isinstance(land_area, int | float)
                or not math.isfinite(land_area)
                or land_area <= 0
            ):
                msg = f"land_area must be a positive number, got {land_area!r}"
                raise InvalidInputError(msg)
            if not isinstance(request.room_types, list):
                msg = f"room_types must be a list, got {type(request.room_types).__name__}"
                raise InvalidInputError(msg)
            return request

        if not isinstance(request, Mapping):
            msg = f"Expected a mapping or CostCalculationInput, got {type(request).__name__}"
            raise InvalidInputError(msg)

        try:
            return CostCalculationInput.model_validate(request)
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "request"
                for err in exc.errors()
            )
            msg = f"Invalid cost calculation input ({fields})"
            raise InvalidInputError(msg) from exc

    def _classify_quality_tier(
        self, property_type: str, room_types: list[str]
    ) -> QualityTier:
        """Infer the quality tier from luxury-indicator spaces and room count."""
        rates = self._rates
        luxury_count = sum(
            1 for room in room_types if self._repository.is_luxury_indicator(room)
        )
        room_count = len(room_types)

        if (
            luxury_count >= rates.luxury_indicator_threshold
            or self._repository.is_premium_property_type(property_type)
            or room_count >= rates.luxury_room_threshold
        ):
            return QualityTier.LUXURY
        if (
            luxury_count >= rates.standard_indicator_threshold
            or room_count >= rates.standard_room_threshold
        ):
            return QualityTier.STANDARD
        return QualityTier.BASIC

    def _building_area(self, land_area: float, property_type: str) -> int:
        """Constructed area in whole square meters."""
        return math.floor(land_area * self._repository.get_coverage_ratio(property_type))

    def _complexity_multiplier(
        self, room_types: list[str], assumptions: list[Assumption]
    ) -> float:
        """Average room complexity, clamped to the configured range."""
        repo = self._repository
        rooms = list(room_types)
        if not rooms:
            rooms = list(repo.default_room_types)
            assumptions.append(
                Assumption(
                    parameter="room_types",
                    assumed_value=", ".join(rooms),
                    reasoning="No room types supplied; finishing complexity uses the default space set",
                    confidence=Confidence.MEDIUM,
                )
            )
        else:
            unknown = [room for room in rooms if not repo.has_room_type(room)]
            if unknown:
                assumptions.append(
                    Assumption(
                        parameter="room_types",
                        assumed_value="1.0",
                        reasoning=(
                            "No complexity factor for "
                            + ", ".join(f"'{room}'" for room in unknown)
                            + "; treated as neutral"
                        ),
                        confidence=Confidence.LOW,
                    )
                )

        factors = [repo.get_room_complexity(room) for room in rooms]
        average = sum(factors) / len(factors)
        return max(self._rates.complexity_floor, min(self._rates.complexity_ceiling, average))
