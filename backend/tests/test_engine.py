"""Tests for the CostEngine: the core estimation pipeline."""

from __future__ import annotations

from typing import Any

import pytest

from taqdir.data.repository import ReferenceDataRepository
from taqdir.engine import CostEngine
from taqdir.exceptions import CostEstimationError, InvalidInputError
from taqdir.models.enums import Confidence
from taqdir.models.estimate import CostEstimateResult
from taqdir.models.rates import EstimationRates
from taqdir.models.request import CostCalculationInput


@pytest.fixture()
def repo() -> ReferenceDataRepository:
    return ReferenceDataRepository()


@pytest.fixture()
def engine(repo: ReferenceDataRepository) -> CostEngine:
    """CostEngine wired to the built-in reference tables."""
    return CostEngine(repo)


# ---------------------------------------------------------------------------
# Helper builders
# ---------------------------------------------------------------------------


def _villa(**overrides: Any) -> dict[str, Any]:
    request: dict[str, Any] = {
        "landArea": 400,
        "propertyType": "فلة",
        "roomTypes": ["مطبخ رئيسي", "صالة المعيشة"],
        "neighborhood": "العليا",
        "finishingLevel": "متوسط",
        "hasBasement": False,
        "parkingSpaces": 0,
    }
    request.update(overrides)
    return request


def _office(**overrides: Any) -> dict[str, Any]:
    request: dict[str, Any] = {
        "landArea": 1000,
        "propertyType": "مبنى مكتبي",
        "roomTypes": ["مكاتب إدارية", "قاعات الاجتماعات", "مسجد/مصلى"],
        "neighborhood": "الملز",
        "finishingLevel": "luxury",
    }
    request.update(overrides)
    return request


def _reconciled_total(result: CostEstimateResult) -> float:
    b = result.cost_breakdown
    materials = (
        b.foundation + b.structure + b.roofing
        + b.walls + b.flooring + b.finishes
        + b.electrical + b.plumbing + b.hvac + b.basement
    )
    return materials + b.landscaping + b.permits + b.labor + b.parking + b.contingency


# ---------------------------------------------------------------------------
# Concrete scenario
# ---------------------------------------------------------------------------


class TestVillaInOlaya:
    """400 m² villa in Al-Olaya (multiplier 1.25), basic tier, complexity 1.5."""

    def test_building_area(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa())
        assert result.project_details.building_area == 260

    def test_component_amounts(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa())
        # residential/basic unit costs * 260 m² * 1.25
        assert result.structural_cost == pytest.approx(308_750.0)
        # 700 * 260 * 1.25 * complexity 1.5 * finishing 1.0
        assert result.finishing_cost == pytest.approx(341_250.0)
        assert result.electrical_cost == pytest.approx(58_500.0)
        assert result.plumbing_cost == pytest.approx(45_500.0)
        assert result.hvac_cost == pytest.approx(78_000.0)
        # permits carry no location premium
        assert result.permits_cost == pytest.approx(15_600.0)
        # 400 m² land * 80 * 1.25
        assert result.landscaping_cost == pytest.approx(40_000.0)

    def test_labor_contingency_and_total(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa())
        assert result.cost_breakdown.labor == pytest.approx(249_600.0)
        assert result.contingency_cost == pytest.approx(113_720.0)
        assert result.total_cost == pytest.approx(1_250_920.0)

    def test_cost_per_square_meter(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa())
        assert result.total_cost > 0
        assert result.cost_per_square_meter == pytest.approx(result.total_cost / 260)

    def test_project_details(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa())
        assert result.project_details.room_count == 2
        assert result.project_details.complexity == "basic"
        assert result.project_details.quality_level == "basic (residential)"

    def test_no_assumptions_for_known_labels(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa())
        assert result.assumptions == []

    def test_reproducible(self, engine: CostEngine) -> None:
        first = engine.estimate(_villa())
        second = engine.estimate(_villa())
        assert first.model_dump() == second.model_dump()
        assert first.to_json_dict() == second.to_json_dict()


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------


_SCENARIOS = [
    _villa(),
    _villa(hasBasement=True, parkingSpaces=4),
    _villa(roomTypes=[], neighborhood="حي غير معروف"),
    _villa(propertyType="بنت هاوس", finishingLevel="فاخر"),
    _office(),
    _office(hasBasement=True, parkingSpaces=20, finishingLevel="عادي"),
    _office(propertyType="ستريب مول", roomTypes=["مصاعد", "نظام مكافحة الحريق"]),
    _villa(landArea=1.0),
]


class TestReconciliation:
    @pytest.mark.parametrize("request_data", _SCENARIOS)
    def test_total_matches_components(
        self, engine: CostEngine, request_data: dict[str, Any]
    ) -> None:
        result = engine.estimate(request_data)
        b = result.cost_breakdown
        materials = (
            result.structural_cost
            + result.finishing_cost
            + result.electrical_cost
            + result.plumbing_cost
            + result.hvac_cost
        )
        subtotal = materials + result.landscaping_cost + result.permits_cost + b.labor + b.parking
        assert b.labor == pytest.approx(materials * 0.30)
        assert result.contingency_cost == pytest.approx(subtotal * 0.10)
        assert result.total_cost == pytest.approx(subtotal + result.contingency_cost)
        assert result.total_cost == pytest.approx(_reconciled_total(result))

    @pytest.mark.parametrize("request_data", _SCENARIOS)
    def test_breakdown_splits_sum_to_bases(
        self, engine: CostEngine, request_data: dict[str, Any]
    ) -> None:
        result = engine.estimate(request_data)
        b = result.cost_breakdown
        structure_base = result.structural_cost - b.basement
        assert b.foundation + b.structure + b.roofing == pytest.approx(structure_base)
        assert b.walls + b.flooring + b.finishes == pytest.approx(result.finishing_cost)
        assert b.foundation == pytest.approx(structure_base * 0.25)
        assert b.walls == pytest.approx(result.finishing_cost * 0.40)

    @pytest.mark.parametrize("request_data", _SCENARIOS)
    def test_all_amounts_non_negative(
        self, engine: CostEngine, request_data: dict[str, Any]
    ) -> None:
        result = engine.estimate(request_data)
        for value in result.cost_breakdown.model_dump().values():
            assert value >= 0
        assert result.total_cost >= 0


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_monotonic_in_land_area(self, engine: CostEngine) -> None:
        totals = [
            engine.estimate(_villa(landArea=area)).total_cost
            for area in (50, 100, 250, 400, 401, 800, 2500)
        ]
        assert totals == sorted(totals)

    def test_premium_neighborhood_raises_structural_cost(self, engine: CostEngine) -> None:
        premium = engine.estimate(_villa(neighborhood="العليا"))
        neutral = engine.estimate(_villa(neighborhood="الوادي"))
        assert premium.structural_cost > neutral.structural_cost

    def test_unknown_neighborhood_is_neutral(self, engine: CostEngine) -> None:
        unknown = engine.estimate(_villa(neighborhood="حي غير معروف"))
        neutral = engine.estimate(_villa(neighborhood="الوادي"))
        premium = engine.estimate(_villa(neighborhood="العليا"))
        # 950 SAR/m² * 260 m² * 1.0
        assert unknown.structural_cost == pytest.approx(247_000.0)
        assert unknown.structural_cost == pytest.approx(neutral.structural_cost)
        assert unknown.structural_cost <= premium.structural_cost

    def test_padded_neighborhood_is_not_matched(self, engine: CostEngine) -> None:
        padded = engine.estimate(_villa(neighborhood=" العليا "))
        assert padded.structural_cost == pytest.approx(247_000.0)
        assert [a.parameter for a in padded.assumptions] == ["neighborhood"]

    def test_basement_adds_exactly_its_cost(self, engine: CostEngine) -> None:
        without = engine.estimate(_villa(hasBasement=False))
        with_basement = engine.estimate(_villa(hasBasement=True))
        expected = 260 * 400 * 1.25
        assert with_basement.structural_cost - without.structural_cost == pytest.approx(expected)
        assert with_basement.cost_breakdown.basement == pytest.approx(expected)
        assert without.cost_breakdown.basement == 0.0

    def test_basement_attracts_labor(self, engine: CostEngine) -> None:
        without = engine.estimate(_villa())
        with_basement = engine.estimate(_villa(hasBasement=True))
        delta = with_basement.cost_breakdown.labor - without.cost_breakdown.labor
        assert delta == pytest.approx(260 * 400 * 1.25 * 0.30)

    def test_parking_spaces(self, engine: CostEngine) -> None:
        without = engine.estimate(_villa())
        with_parking = engine.estimate(_villa(parkingSpaces=3))
        assert with_parking.cost_breakdown.parking == pytest.approx(24_000.0)
        # parking is outside labor but inside contingency
        assert with_parking.total_cost - without.total_cost == pytest.approx(24_000.0 * 1.1)

    def test_empty_room_list_uses_default_spaces(self, engine: CostEngine) -> None:
        empty = engine.estimate(_villa(roomTypes=[]))
        defaults = engine.estimate(_villa(roomTypes=["غرفة نوم", "صالة"]))
        assert empty.finishing_cost == pytest.approx(defaults.finishing_cost)
        assert empty.project_details.room_count == 0
        assert defaults.project_details.room_count == 2

    def test_empty_room_list_records_assumption(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa(roomTypes=[]))
        params = [a.parameter for a in result.assumptions]
        assert "room_types" in params

    def test_missing_room_types_defaults_to_empty(self, engine: CostEngine) -> None:
        request = _villa()
        del request["roomTypes"]
        result = engine.estimate(request)
        assert result.project_details.room_count == 0


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class TestClassification:
    def test_commercial_office(self, engine: CostEngine) -> None:
        result = engine.estimate(_office())
        # one luxury indicator (prayer room) -> standard tier
        assert result.project_details.quality_level == "standard (commercial)"
        assert result.project_details.building_area == 800

    def test_commercial_landscaping(self, engine: CostEngine) -> None:
        result = engine.estimate(_office())
        # 10% of 800 m² at 150 SAR/m², no location premium
        assert result.landscaping_cost == pytest.approx(12_000.0)

    def test_commercial_office_amounts(self, engine: CostEngine) -> None:
        result = engine.estimate(_office())
        # commercial/standard structure 1750 * 800 * 0.90
        assert result.structural_cost == pytest.approx(1_260_000.0)
        # 1200 * 800 * 0.90 * complexity 1.3 * luxury 1.4
        assert result.finishing_cost == pytest.approx(1_572_480.0)

    def test_unknown_property_type_is_commercial_with_default_coverage(
        self, engine: CostEngine
    ) -> None:
        result = engine.estimate(_villa(propertyType="مستودع"))
        assert result.project_details.building_area == 260
        assert result.project_details.quality_level.endswith("(commercial)")
        assumption = next(a for a in result.assumptions if a.parameter == "property_type")
        assert assumption.assumed_value == "0.65"

    def test_penthouse_is_always_luxury(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa(propertyType="بنت هاوس", roomTypes=[]))
        assert result.project_details.complexity == "luxury"
        assert result.project_details.building_area == 320

    def test_three_luxury_indicators(self, engine: CostEngine) -> None:
        rooms = ["مجلس الرجال", "مجلس النساء", "غرفة الخادمة"]
        result = engine.estimate(_villa(roomTypes=rooms))
        assert result.project_details.complexity == "luxury"

    def test_one_luxury_indicator(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa(roomTypes=["مجلس الرجال", "مطبخ رئيسي"]))
        assert result.project_details.complexity == "standard"

    def test_room_count_thresholds(self, engine: CostEngine) -> None:
        seven = engine.estimate(_villa(roomTypes=["غرفة الضيوف"] * 7))
        eight = engine.estimate(_villa(roomTypes=["غرفة الضيوف"] * 8))
        eleven = engine.estimate(_villa(roomTypes=["غرفة الضيوف"] * 11))
        twelve = engine.estimate(_villa(roomTypes=["غرفة الضيوف"] * 12))
        assert seven.project_details.complexity == "basic"
        assert eight.project_details.complexity == "standard"
        assert eleven.project_details.complexity == "standard"
        assert twelve.project_details.complexity == "luxury"
        assert twelve.project_details.room_count == 12


# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------


class TestMultipliers:
    def test_complexity_clamped_high(self, engine: CostEngine) -> None:
        lifts = engine.estimate(_villa(roomTypes=["مصاعد"], neighborhood="الوادي"))
        # 700 * 260 * clamp(3.0) = 700 * 260 * 2.0
        assert lifts.finishing_cost == pytest.approx(364_000.0)

    def test_complexity_clamped_low(self, engine: CostEngine) -> None:
        parking = engine.estimate(_villa(roomTypes=["مواقف السيارات"], neighborhood="الوادي"))
        assert parking.finishing_cost == pytest.approx(700 * 260 * 0.8)

    def test_unknown_room_is_neutral(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa(roomTypes=["غرفة سينما"], neighborhood="الوادي"))
        assert result.finishing_cost == pytest.approx(700 * 260 * 1.0)
        assumption = next(a for a in result.assumptions if a.parameter == "room_types")
        assert "غرفة سينما" in assumption.reasoning
        assert assumption.confidence == Confidence.LOW

    @pytest.mark.parametrize(
        ("level", "multiplier"),
        [
            ("عادي", 0.8),
            ("economy", 0.8),
            ("متوسط", 1.0),
            ("standard", 1.0),
            ("فاخر", 1.4),
            ("Luxury", 1.4),
        ],
    )
    def test_finishing_levels(
        self, engine: CostEngine, level: str, multiplier: float
    ) -> None:
        result = engine.estimate(_villa(finishingLevel=level))
        assert result.finishing_cost == pytest.approx(341_250.0 * multiplier)

    def test_finishing_level_only_affects_finishing(self, engine: CostEngine) -> None:
        economy = engine.estimate(_villa(finishingLevel="عادي"))
        luxury = engine.estimate(_villa(finishingLevel="فاخر"))
        assert economy.structural_cost == pytest.approx(luxury.structural_cost)
        assert economy.hvac_cost == pytest.approx(luxury.hvac_cost)

    def test_unknown_finishing_level_is_standard(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa(finishingLevel="ممتاز جداً"))
        assert result.finishing_cost == pytest.approx(341_250.0)
        assert any(a.parameter == "finishing_level" for a in result.assumptions)

    def test_default_finishing_level(self, engine: CostEngine) -> None:
        request = _villa()
        del request["finishingLevel"]
        assert engine.estimate(request).finishing_cost == pytest.approx(341_250.0)


# ---------------------------------------------------------------------------
# Configurable rates
# ---------------------------------------------------------------------------


class TestRates:
    def test_custom_labor_and_contingency(self, repo: ReferenceDataRepository) -> None:
        engine = CostEngine(repo, rates=EstimationRates(labor_rate=0.25, contingency_rate=0.05))
        result = engine.estimate(_villa())
        assert result.cost_breakdown.labor == pytest.approx(832_000.0 * 0.25)
        subtotal = 832_000.0 + 40_000.0 + 15_600.0 + 832_000.0 * 0.25
        assert result.total_cost == pytest.approx(subtotal * 1.05)
        assert result.metadata.labor_rate == 0.25

    def test_custom_tier_thresholds(self, repo: ReferenceDataRepository) -> None:
        engine = CostEngine(repo, rates=EstimationRates(standard_room_threshold=2))
        result = engine.estimate(_villa())
        assert result.project_details.complexity == "standard"

    def test_rejects_inverted_complexity_clamp(self) -> None:
        with pytest.raises(ValueError, match="complexity_floor"):
            EstimationRates(complexity_floor=2.5, complexity_ceiling=2.0)


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------


class TestInvalidInput:
    @pytest.mark.parametrize("land_area", [0, -10, "abc", None, float("nan")])
    def test_bad_land_area(self, engine: CostEngine, land_area: Any) -> None:
        with pytest.raises(InvalidInputError):
            engine.estimate(_villa(landArea=land_area))

    def test_missing_land_area(self, engine: CostEngine) -> None:
        request = _villa()
        del request["landArea"]
        with pytest.raises(InvalidInputError, match="landArea"):
            engine.estimate(request)

    def test_room_types_not_a_list(self, engine: CostEngine) -> None:
        with pytest.raises(InvalidInputError):
            engine.estimate(_villa(roomTypes="مطبخ رئيسي"))

    def test_unvalidated_model_is_checked(self, engine: CostEngine) -> None:
        request = CostCalculationInput.model_construct(
            land_area=0,
            property_type="فلة",
            room_types=[],
            neighborhood="العليا",
            finishing_level="standard",
            has_basement=False,
            parking_spaces=0,
        )
        with pytest.raises(InvalidInputError, match="land_area"):
            engine.estimate(request)

    def test_not_a_mapping(self, engine: CostEngine) -> None:
        with pytest.raises(InvalidInputError):
            engine.estimate(["not", "a", "request"])  # type: ignore[arg-type]

    def test_string_land_area_is_coerced(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa(landArea="400"))
        assert result.total_cost == pytest.approx(1_250_920.0)

    def test_invalid_input_is_value_error(self, engine: CostEngine) -> None:
        with pytest.raises(ValueError):
            engine.estimate(_villa(landArea=-1))


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------


class TestEdgeCases:
    def test_tiny_parcel_has_zero_building_area(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa(landArea=1.0))
        assert result.project_details.building_area == 0
        assert result.cost_per_square_meter == 0.0
        # landscaping still applies to the land
        assert result.total_cost == pytest.approx(1.0 * 80 * 1.25 * 1.1)

    def test_accepts_model_input(self, engine: CostEngine) -> None:
        request = CostCalculationInput(
            land_area=400,
            property_type="فلة",
            room_types=["مطبخ رئيسي", "صالة المعيشة"],
            neighborhood="العليا",
        )
        assert engine.estimate(request).total_cost == pytest.approx(1_250_920.0)

    def test_metadata(self, engine: CostEngine) -> None:
        result = engine.estimate(_villa())
        assert result.metadata.engine_version == "0.1.0"
        assert result.metadata.cost_data_version == "2025.1"
        assert result.metadata.currency == "SAR"

    def test_overflowing_estimate_raises(self, engine: CostEngine) -> None:
        with pytest.raises(CostEstimationError, match="overflowed"):
            engine.estimate(_villa(landArea=1e308))
