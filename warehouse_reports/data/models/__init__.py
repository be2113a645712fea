from .inventory import (
    CRITICAL_STATUSES,
    InventoryRecord,
    InventoryStatus,
)
from .reports import (
    REPORT_CATALOG,
    ReportConfig,
    ReportRequest,
    ReportType,
    get_report_config,
)
from .summary import ReportSummary
from .analysis import AnalysisResult, RiskLevel

__all__ = [
    # Inventory
    "CRITICAL_STATUSES",
    "InventoryRecord",
    "InventoryStatus",
    # Reports
    "REPORT_CATALOG",
    "ReportConfig",
    "ReportRequest",
    "ReportType",
    "get_report_config",
    # Results
    "ReportSummary",
    "AnalysisResult",
    "RiskLevel",
]
