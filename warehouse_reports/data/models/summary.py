from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field


class ReportSummary(BaseModel):
    """Summary metrics derived from a report snapshot."""
    total_items: int = Field(description="Number of records in the snapshot")
    total_value: Union[int, float] = Field(description="Sum of record values")
    critical_items_count: int = Field(description="Records that are low on stock or out of stock")
