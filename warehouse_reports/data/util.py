from __future__ import annotations

from typing import Literal, Optional

from ..config import get_config
from .backends.mock_backend import MockInventorySource
from .interface import InventorySource


def get_inventory_source(kind: Optional[Literal["mock"]] = None) -> InventorySource:
    config = get_config()
    kind = kind or config.inventory_source
    if kind == "mock":
        return MockInventorySource(
            item_count=config.mock_item_count,
            latency_seconds=config.mock_latency_seconds,
            seed=config.mock_seed,
        )
    raise ValueError(f"Unknown inventory source kind: {kind}")
