"""Persistence for computed cost estimates.

Stores the raw CostEstimateResult alongside the request fields that
produced it.  Nothing in the engine depends on what is stored here.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taqdir.models.estimate import CostEstimateResult  # noqa: TCH001 (pydantic resolves at runtime)
from taqdir.models.request import CostCalculationInput  # noqa: TCH001


class StoredEstimate(BaseModel):
    """A persisted cost estimate record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    request: CostCalculationInput
    result: CostEstimateResult
    created_at: datetime = Field(default_factory=datetime.now)

    def to_record_dict(self) -> dict[str, Any]:
        """Flat record with request fields and rounded totals, camelCase keys."""
        totals = self.result.to_export_dict()["totals"]
        return {
            "id": self.id,
            **self.request.model_dump(mode="json", by_alias=True),
            **{to_camel(key): value for key, value in totals.items()},
            "costBreakdown": self.result.cost_breakdown.model_dump(by_alias=True),
            "createdAt": self.created_at.isoformat(),
        }


class EstimateStore(Protocol):
    def save(
        self, request: CostCalculationInput, result: CostEstimateResult
    ) -> StoredEstimate: ...

    def get(self, estimate_id: str) -> StoredEstimate | None: ...

    def all(self) -> list[StoredEstimate]: ...


class InMemoryEstimateStore:
    """Process-local store, safe to share between request threads."""

    def __init__(self) -> None:
        self._items: dict[str, StoredEstimate] = {}
        self._lock = threading.Lock()

    def save(
        self, request: CostCalculationInput, result: CostEstimateResult
    ) -> StoredEstimate:
        record = StoredEstimate(id=str(uuid.uuid4()), request=request, result=result)
        with self._lock:
            self._items[record.id] = record
        return record

    def get(self, estimate_id: str) -> StoredEstimate | None:
        with self._lock:
            return self._items.get(estimate_id)

    def all(self) -> list[StoredEstimate]:
        with self._lock:
            return list(self._items.values())
