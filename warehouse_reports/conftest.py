from datetime import date

import pytest

from warehouse_reports.config import set_config_for_test
from warehouse_reports.data.models import InventoryRecord, InventoryStatus


@pytest.fixture(autouse=True)
def offline_config():
    """Offline defaults: no AI key, no simulated latency."""
    set_config_for_test(
        ai_api_key=None,
        ai_model="test-model",
        mock_latency_seconds=0.0,
        mock_seed=None,
        mock_item_count=25,
    )
    yield


@pytest.fixture
def make_record():
    """Factory for InventoryRecord with sensible defaults."""
    counter = {"n": 0}

    def _make(value=100, status=InventoryStatus.IN_STOCK, quantity=50, category="Tools", name=None):
        counter["n"] += 1
        n = counter["n"]
        return InventoryRecord(
            id=f"ITEM-{1000 + n}",
            name=name or f"Item {n}",
            sku=f"SKU-{n:07d}",
            quantity=quantity,
            category=category,
            last_updated=date(2024, 5, 1),
            status=status,
            value=value,
        )

    return _make
