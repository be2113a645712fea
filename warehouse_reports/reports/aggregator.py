from __future__ import annotations

import math
from typing import Iterable, Sequence, Union

import pandas as pd

from ..data.models import CRITICAL_STATUSES, InventoryRecord, ReportSummary

FRAME_COLUMNS = [
    "id", "name", "sku", "category", "quantity", "value", "status",
    "last_updated", "turnover_rate", "expiration_date",
]


def total_value(records: Sequence[InventoryRecord]) -> Union[int, float]:
    """Sum of record values without rounding error.

    Integer values are summed as Python ints; any float switches to ``math.fsum``.
    """
    values = [r.value for r in records]
    if all(isinstance(v, int) for v in values):
        return sum(values)
    return math.fsum(values)


def aggregate(records: Iterable[InventoryRecord]) -> ReportSummary:
    """Compute the summary metrics of a snapshot.

    Pure and deterministic; an empty input yields an all-zero summary.
    """
    records = list(records)
    return ReportSummary(
        total_items=len(records),
        total_value=total_value(records),
        critical_items_count=sum(1 for r in records if r.status in CRITICAL_STATUSES),
    )


# ---------- table / chart shaping ----------

def records_to_frame(records: Sequence[InventoryRecord]) -> pd.DataFrame:
    """Detail table for the renderer, one row per record in snapshot order."""
    rows = [
        {**r.model_dump(), "status": r.status.value}
        for r in records
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def status_distribution(records: Sequence[InventoryRecord]) -> pd.DataFrame:
    """Record count per status, in order of first appearance."""
    df = records_to_frame(records)
    counts = df.groupby("status", sort=False).size()
    return counts.rename("count").reset_index()


def category_values(records: Sequence[InventoryRecord]) -> pd.DataFrame:
    """Total value per category, in order of first appearance."""
    df = records_to_frame(records)
    values = df.groupby("category", sort=False)["value"].sum()
    return values.reset_index()
