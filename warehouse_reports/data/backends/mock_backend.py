"""
mock_backend.py

Generates a random inventory snapshot for a report request. Stands in for a
real warehouse system while the dashboard is developed.

Every call draws a new snapshot; pass a seed for reproducible output.
"""

from __future__ import annotations

import random
import string
import time
from datetime import date, timedelta
from typing import List, Optional

from ...config import get_config
from ...logging import get_logger
from ..interface import InventorySource
from ..models import InventoryRecord, InventoryStatus, ReportRequest, ReportType

# -----------------------------
# Generation parameters
# -----------------------------

MAX_QUANTITY = 500          # exclusive
MAX_UNIT_VALUE = 1000       # exclusive
LOW_STOCK_BELOW = 20
OVERSTOCK_ABOVE = 400
EXPIRY_RISK_SHARE = 0.3
EXPIRY_WINDOW_DAYS = 90


# -----------------------------
# Utility functions
# -----------------------------

def status_for_quantity(quantity: int) -> InventoryStatus:
    """Status convention used by the generator (not enforced on records)."""
    if quantity == 0:
        return InventoryStatus.OUT_OF_STOCK
    if quantity < LOW_STOCK_BELOW:
        return InventoryStatus.LOW_STOCK
    if quantity > OVERSTOCK_ABOVE:
        return InventoryStatus.OVERSTOCK
    return InventoryStatus.IN_STOCK

def rand_sku(rng: random.Random) -> str:
    return "SKU-" + "".join(rng.choices(string.ascii_uppercase + string.digits, k=7))


# -----------------------------
# Source
# -----------------------------

class MockInventorySource(InventorySource):
    """Random inventory generator conforming to InventorySource."""

    def __init__(
        self,
        item_count: int = 25,
        latency_seconds: float = 0.0,
        seed: Optional[int] = None,
        categories: Optional[List[str]] = None,
    ) -> None:
        self.item_count = item_count
        self.latency_seconds = latency_seconds
        self.categories = list(categories or get_config().categories)
        self._rng = random.Random(seed)
        self.logger = get_logger(__name__)

    def fetch_snapshot(self, request: ReportRequest) -> List[InventoryRecord]:
        if self.latency_seconds > 0:
            time.sleep(self.latency_seconds)

        today = date.today()
        records = [self._gen_record(i, today, request) for i in range(self.item_count)]
        records = self._apply_report_tweaks(records, request.report_type, today)

        self.logger.debug(
            f"Generated {len(records)} mock records for {request.report_type.value} "
            f"(warehouse={request.warehouse}, category={request.category})"
        )
        return records

    def _gen_record(self, i: int, today: date, request: ReportRequest) -> InventoryRecord:
        rng = self._rng
        qty = rng.randrange(MAX_QUANTITY)
        name_category = rng.choice(self.categories)
        category = request.category or rng.choice(self.categories)
        return InventoryRecord(
            id=f"ITEM-{1000 + i}",
            name=f"Item {i + 1} ({request.category or name_category})",
            sku=rand_sku(rng),
            quantity=qty,
            category=category,
            last_updated=today,
            status=status_for_quantity(qty),
            value=rng.randrange(MAX_UNIT_VALUE) * qty,
        )

    def _apply_report_tweaks(
        self, records: List[InventoryRecord], report_type: ReportType, today: date
    ) -> List[InventoryRecord]:
        """Shape the random data so each report type has something to show."""
        rng = self._rng
        tweaked = []
        for record in records:
            update = {}
            if report_type == ReportType.EXPIRY_RISK:
                update["expiration_date"] = today + timedelta(days=rng.randint(-10, EXPIRY_WINDOW_DAYS))
                if rng.random() < EXPIRY_RISK_SHARE:
                    update["status"] = InventoryStatus.LOW_STOCK
            elif report_type in (ReportType.MOVEMENT_HISTORY, ReportType.DEMAND_FORECAST):
                update["turnover_rate"] = round(rng.uniform(0.1, 12.0), 2)
            tweaked.append(record.model_copy(update=update) if update else record)
        return tweaked
