"""Enums for the Taqdir domain models."""

from enum import StrEnum


class PropertyCategory(StrEnum):
    """Pricing category a property type falls into."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class QualityTier(StrEnum):
    """Quality tier inferred from the requested spaces."""

    BASIC = "basic"
    STANDARD = "standard"
    LUXURY = "luxury"


class FinishingLevel(StrEnum):
    """Finishing grade requested by the client."""

    ECONOMY = "economy"
    STANDARD = "standard"
    LUXURY = "luxury"


class Confidence(StrEnum):
    """Confidence level for assumed values."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
