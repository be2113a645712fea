from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt


class InventoryStatus(str, Enum):
    """Stock status of an inventory record."""
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"
    OVERSTOCK = "Overstock"


# Statuses counted as "needs attention" in report summaries
CRITICAL_STATUSES = frozenset({InventoryStatus.LOW_STOCK, InventoryStatus.OUT_OF_STOCK})


class InventoryRecord(BaseModel):
    """Response model for one inventory position in a report snapshot.

    Frozen: a snapshot must not change after capture.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique record identifier")
    name: str = Field(description="Display name of the item")
    sku: str = Field(description="Stock keeping unit code")
    quantity: int = Field(ge=0, description="Units on hand")
    category: str = Field(description="Category label")
    last_updated: date = Field(description="Date the position was last updated")
    status: InventoryStatus = Field(description="Stock status set by the producer of the record")
    value: Union[NonNegativeInt, NonNegativeFloat] = Field(description="Monetary value of the position")
    turnover_rate: Optional[float] = Field(default=None, description="Inventory turnover rate")
    expiration_date: Optional[date] = Field(default=None, description="Expiration date of the batch")

    @property
    def is_critical(self) -> bool:
        return self.status in CRITICAL_STATUSES
