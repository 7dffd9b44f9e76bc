"""Reference data repository for looking up unit costs and multipliers."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from taqdir.data.neighborhoods import (
    DEFAULT_NEIGHBORHOOD_MULTIPLIER,
    NEIGHBORHOOD_MULTIPLIERS,
)
from taqdir.data.property_types import (
    COVERAGE_RATIOS,
    DEFAULT_COVERAGE_RATIO,
    PREMIUM_PROPERTY_TYPE,
    RESIDENTIAL_PROPERTY_TYPES,
)
from taqdir.data.rooms import (
    DEFAULT_ROOM_COMPLEXITY,
    DEFAULT_ROOM_TYPES,
    LUXURY_INDICATORS,
    ROOM_COMPLEXITY,
)
from taqdir.data.unit_costs import (
    DEFAULT_FINISHING_MULTIPLIER,
    FINISHING_LEVEL_ALIASES,
    FINISHING_LEVEL_MULTIPLIERS,
    UNIT_COSTS,
)
from taqdir.models.enums import FinishingLevel, PropertyCategory

if TYPE_CHECKING:
    from taqdir.data.unit_costs import UnitCosts
    from taqdir.models.enums import QualityTier


class ReferenceDataRepository:
    """Read-only access to the static pricing tables.

    Every lookup is total: a label missing from its table resolves to the
    documented neutral default instead of raising.  The ``has_*`` probes
    let callers tell an exact match from a fallback.  Keys are matched
    exactly, so surrounding whitespace makes a label unknown.
    """

    def __init__(
        self,
        unit_costs: Mapping[PropertyCategory, Mapping[QualityTier, UnitCosts]] = UNIT_COSTS,
        neighborhood_multipliers: Mapping[str, float] = NEIGHBORHOOD_MULTIPLIERS,
        room_complexity: Mapping[str, float] = ROOM_COMPLEXITY,
        coverage_ratios: Mapping[str, float] = COVERAGE_RATIOS,
    ) -> None:
        self._unit_costs = unit_costs
        self._neighborhoods = neighborhood_multipliers
        self._rooms = room_complexity
        self._coverage = coverage_ratios

    # ------------------------------------------------------------------
    # Property types
    # ------------------------------------------------------------------

    def get_property_category(self, property_type: str) -> PropertyCategory:
        """Residential if the type is a known housing label, else commercial."""
        if property_type in RESIDENTIAL_PROPERTY_TYPES:
            return PropertyCategory.RESIDENTIAL
        return PropertyCategory.COMMERCIAL

    def is_premium_property_type(self, property_type: str) -> bool:
        return property_type == PREMIUM_PROPERTY_TYPE

    def has_coverage_ratio(self, property_type: str) -> bool:
        return property_type in self._coverage

    def get_coverage_ratio(self, property_type: str) -> float:
        """Building coverage ratio for a property type (default 0.65)."""
        return self._coverage.get(property_type, DEFAULT_COVERAGE_RATIO)

    # ------------------------------------------------------------------
    # Unit costs
    # ------------------------------------------------------------------

    def get_unit_costs(
        self, category: PropertyCategory, tier: QualityTier
    ) -> UnitCosts:
        """SAR/m² rates for a category and quality tier.

        Every category/tier pair is tabulated, so this never misses.
        """
        return self._unit_costs[category][tier]

    def resolve_finishing_level(self, level: str) -> FinishingLevel | None:
        """Map an English or Arabic finishing label to a FinishingLevel.

        Returns None for unrecognised labels.
        """
        alias = FINISHING_LEVEL_ALIASES.get(level)
        if alias is not None:
            return alias
        try:
            return FinishingLevel(level.lower())
        except ValueError:
            return None

    def get_finishing_multiplier(self, level: str) -> float:
        """Finishing multiplier for a label (default 1.0, i.e. standard)."""
        resolved = self.resolve_finishing_level(level)
        if resolved is None:
            return DEFAULT_FINISHING_MULTIPLIER
        return FINISHING_LEVEL_MULTIPLIERS[resolved]

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------

    def has_neighborhood(self, neighborhood: str) -> bool:
        return neighborhood in self._neighborhoods

    def get_neighborhood_multiplier(self, neighborhood: str) -> float:
        """Location premium for a neighborhood (default 1.00)."""
        return self._neighborhoods.get(neighborhood, DEFAULT_NEIGHBORHOOD_MULTIPLIER)

    def neighborhood_multipliers(self) -> Mapping[str, float]:
        return MappingProxyType(dict(self._neighborhoods))

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def has_room_type(self, room_type: str) -> bool:
        return room_type in self._rooms

    def get_room_complexity(self, room_type: str) -> float:
        """Finishing complexity factor for a room type (default 1.0)."""
        return self._rooms.get(room_type, DEFAULT_ROOM_COMPLEXITY)

    def is_luxury_indicator(self, room_type: str) -> bool:
        return room_type in LUXURY_INDICATORS

    @property
    def default_room_types(self) -> tuple[str, ...]:
        """Space set used for complexity when a request lists no rooms."""
        return DEFAULT_ROOM_TYPES
