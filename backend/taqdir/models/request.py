"""Request models for the Taqdir cost estimation engine."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CostCalculationInput(BaseModel):
    """Input model describing a land parcel to be cost-estimated.

    Field names are snake_case in Python and camelCase on the wire
    (``landArea``, ``propertyType``, ...); either spelling is accepted.
    Property type, neighborhood, room and finishing labels are free text
    coming from the Arabic UI, so unknown values are accepted here and
    resolved to neutral defaults by the engine.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    land_area: float = Field(gt=0, allow_inf_nan=False)
    property_type: str
    room_types: list[str] = Field(default_factory=list)
    neighborhood: str
    finishing_level: str = "standard"
    has_basement: bool = False
    parking_spaces: int = Field(default=0, ge=0)


class CostEstimateRequest(CostCalculationInput):
    """HTTP request body for ``POST /api/cost-estimate``.

    Stricter than the engine input: the form must supply a property type,
    a neighborhood and the room list.  Surrounding whitespace is trimmed
    from every text field, room names included.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    property_type: str = Field(min_length=1)
    room_types: list[str]
    neighborhood: str = Field(min_length=1)


class ProjectStudyRequest(BaseModel):
    """HTTP request body for the project-study cost breakdown."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    project_type: str = Field(min_length=1)
    total_area: float = Field(gt=0, allow_inf_nan=False)
    neighborhood: str = Field(min_length=1)
    investment_amount: float | None = Field(default=None, gt=0)
    finishing_level: str = "standard"
    has_basement: bool = False
    parking_spaces: int = Field(default=0, ge=0)
