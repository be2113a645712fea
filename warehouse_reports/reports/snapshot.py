from __future__ import annotations

from datetime import datetime
from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..data.models import InventoryRecord, ReportSummary
from .aggregator import aggregate


class ReportSnapshot(BaseModel):
    """Point-in-time set of records produced for one report generation.

    The summary is always recomputed from ``items``; it cannot be assigned.
    """
    model_config = ConfigDict(frozen=True)

    generated_at: datetime = Field(description="When the snapshot was produced")
    items: Tuple[InventoryRecord, ...] = Field(description="Records in source order")

    @computed_field
    @property
    def summary(self) -> ReportSummary:
        return aggregate(self.items)

    @classmethod
    def capture(cls, records: Iterable[InventoryRecord]) -> "ReportSnapshot":
        return cls(generated_at=datetime.now(), items=tuple(records))
