from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ReportType(str, Enum):
    """Report types known to the dashboard."""
    INVENTORY_BALANCE = "INVENTORY_BALANCE"
    MOVEMENT_HISTORY = "MOVEMENT_HISTORY"
    EXPIRY_RISK = "EXPIRY_RISK"
    DEMAND_FORECAST = "DEMAND_FORECAST"
    # Reserved: no generator or catalog entry exists for it yet
    ABC_ANALYSIS = "ABC_ANALYSIS"


class ReportConfig(BaseModel):
    """Catalog entry describing a selectable report."""
    id: ReportType = Field(description="Report type")
    title: str = Field(description="Card title")
    description: str = Field(description="Short description shown on the card")
    icon_name: str = Field(description="Icon shown next to the title")
    color: str = Field(description="Accent color (hex)")


REPORT_CATALOG: List[ReportConfig] = [
    ReportConfig(
        id=ReportType.INVENTORY_BALANCE,
        title="Inventory balance",
        description="Current quantity and value of stock across all categories.",
        icon_name=":package:",
        color="#3b82f6",
    ),
    ReportConfig(
        id=ReportType.MOVEMENT_HISTORY,
        title="Movement history",
        description="Receipts and shipments over the selected period.",
        icon_name=":arrows_counterclockwise:",
        color="#6366f1",
    ),
    ReportConfig(
        id=ReportType.EXPIRY_RISK,
        title="Expiry risk",
        description="Items with approaching or passed expiration dates.",
        icon_name=":warning:",
        color="#f97316",
    ),
    ReportConfig(
        id=ReportType.DEMAND_FORECAST,
        title="Demand forecast",
        description="AI forecast of item demand for the next month.",
        icon_name=":chart_with_upwards_trend:",
        color="#10b981",
    ),
]


def get_report_config(report_type: ReportType) -> ReportConfig:
    """Return the catalog entry for ``report_type``.

    Raises:
        ValueError: If the report type is reserved or not in the catalog.
    """
    for config in REPORT_CATALOG:
        if config.id == report_type:
            return config
    raise ValueError(f"Report type is not available: {report_type}")


class ReportRequest(BaseModel):
    """Selected report plus optional filters."""
    report_type: ReportType = Field(description="Report to generate")
    warehouse: Optional[str] = Field(default=None, description="Warehouse filter")
    category: Optional[str] = Field(default=None, description="Category filter")
