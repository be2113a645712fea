from __future__ import annotations

from typing import List, Protocol

from .models import InventoryRecord, ReportRequest


class InventorySourceError(RuntimeError):
    """Raised when an inventory source cannot produce a snapshot."""


# ---- Inventory source protocol ----

class InventorySource(Protocol):
    """
    Backend-agnostic contract for the report orchestrator.

    - Every call returns a fresh, ordered list of records for the request.
    - Filters on the request may be honoured or ignored by an implementation.
    - Failures are raised as InventorySourceError.
    """

    def fetch_snapshot(self, request: ReportRequest) -> List[InventoryRecord]:
        """Get the inventory records for a report request."""
        ...
