from __future__ import annotations

from enum import Enum
from typing import Optional

from ..data.interface import InventorySource
from ..data.util import get_inventory_source
from ..data.models import (
    AnalysisResult,
    ReportConfig,
    ReportRequest,
    ReportType,
    get_report_config,
)
from ..logging import get_logger
from .analysis import FALLBACK_RESULT, AnalysisClient
from .snapshot import ReportSnapshot


class GenerationState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    FAILED = "failed"


class ReportOrchestrator:
    """Owns the generate lifecycle of one report session.

    Selection, in-flight flag, snapshot and analysis live on the instance; the
    presentation layer keeps one orchestrator per user session. At most one
    generation runs at a time: ``generate()`` while GENERATING is ignored.
    """

    def __init__(self, source: InventorySource, analysis_client: AnalysisClient) -> None:
        self.source = source
        self.analysis_client = analysis_client
        self.logger = get_logger(__name__)

        self._state = GenerationState.IDLE
        self._request: Optional[ReportRequest] = None
        self._snapshot: Optional[ReportSnapshot] = None
        self._analysis: Optional[AnalysisResult] = None
        self._error: Optional[str] = None

    # ---------- read-only view for the renderer ----------

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def request(self) -> Optional[ReportRequest]:
        return self._request

    @property
    def report_type(self) -> Optional[ReportType]:
        return self._request.report_type if self._request else None

    @property
    def report_config(self) -> Optional[ReportConfig]:
        return get_report_config(self._request.report_type) if self._request else None

    @property
    def snapshot(self) -> Optional[ReportSnapshot]:
        return self._snapshot

    @property
    def analysis(self) -> Optional[AnalysisResult]:
        return self._analysis

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_generating(self) -> bool:
        return self._state == GenerationState.GENERATING

    # ---------- operations ----------

    def select_report(
        self,
        report_type: ReportType,
        warehouse: Optional[str] = None,
        category: Optional[str] = None,
    ) -> bool:
        """Make ``report_type`` the active report.

        Returns False when the selection was ignored (a generation is running,
        or the same report is already ready). Raises ValueError for report
        types that are not in the catalog.
        """
        get_report_config(report_type)

        if self.is_generating:
            self.logger.warning(f"Ignoring selection of {report_type.value}: generation in progress")
            return False
        if self._state == GenerationState.READY and self.report_type == report_type:
            return False

        self._clear_results()
        self._request = ReportRequest(report_type=report_type, warehouse=warehouse, category=category)
        self._state = GenerationState.IDLE
        self.logger.debug(f"Selected report {report_type.value}")
        return True

    def set_filters(self, warehouse: Optional[str] = None, category: Optional[str] = None) -> None:
        """Update the filters of the active request before generating."""
        if self._request is None or self.is_generating:
            return
        self._request = self._request.model_copy(update={"warehouse": warehouse, "category": category})

    def generate(self) -> bool:
        """Run fetch, aggregate and analyze for the active request.

        Returns True if a pipeline ran, False if the call was ignored.
        """
        if self._request is None:
            self.logger.warning("generate() called with no report selected")
            return False
        if self.is_generating:
            self.logger.debug("generate() ignored: generation already in progress")
            return False

        request = self._request
        self._clear_results()
        self._state = GenerationState.GENERATING
        self.logger.info(f"Generating report {request.report_type.value}")
        try:
            self._run_pipeline(request)
        finally:
            # an interrupt (KeyboardInterrupt, SystemExit) must not leave the flag set
            if self._state == GenerationState.GENERATING:
                self._state = GenerationState.IDLE
        return True

    def _run_pipeline(self, request: ReportRequest) -> None:
        try:
            snapshot = ReportSnapshot.capture(self.source.fetch_snapshot(request))
        except Exception as e:
            self._error = f"Could not load inventory data: {e}"
            self._state = GenerationState.FAILED
            self.logger.error(f"Inventory source failed for {request.report_type.value}: {e}")
            return

        try:
            analysis = self.analysis_client.analyze(request.report_type, snapshot)
        except Exception:
            self.logger.exception(f"AI analysis raised for {request.report_type.value}, using fallback")
            analysis = FALLBACK_RESULT

        self._snapshot = snapshot
        self._analysis = analysis
        self._state = GenerationState.READY
        summary = snapshot.summary
        self.logger.info(
            f"Report {request.report_type.value} ready: {summary.total_items} items, "
            f"value {summary.total_value:,.2f}, {summary.critical_items_count} critical"
        )

    def reset(self) -> None:
        """Return to IDLE, dropping the selection and any generated report."""
        self._clear_results()
        self._request = None
        self._state = GenerationState.IDLE

    def _clear_results(self) -> None:
        self._snapshot = None
        self._analysis = None
        self._error = None


def create_orchestrator() -> ReportOrchestrator:
    """Returns a new ReportOrchestrator wired to the configured source and AI client."""
    return ReportOrchestrator(source=get_inventory_source(), analysis_client=AnalysisClient())
