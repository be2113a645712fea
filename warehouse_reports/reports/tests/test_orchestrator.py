import httpx
import pytest
from unittest.mock import MagicMock

from openai import APITimeoutError

from warehouse_reports.data.backends.mock_backend import MockInventorySource
from warehouse_reports.data.interface import InventorySourceError
from warehouse_reports.data.models import AnalysisResult, InventoryStatus, ReportType
from warehouse_reports.reports.analysis import FALLBACK_RESULT, AnalysisClient
from warehouse_reports.reports.orchestrator import GenerationState, ReportOrchestrator, create_orchestrator

ANALYSIS = AnalysisResult(
    summary="All good.",
    recommendations=["Keep going", "Check Item 2", "Rotate stock"],
    risk_assessment="Low",
)


class StaticSource:
    """Inventory source returning fixed records; can run a hook mid-fetch."""
    def __init__(self, records, on_fetch=None):
        self.records = records
        self.on_fetch = on_fetch
        self.requests = []

    def fetch_snapshot(self, request):
        self.requests.append(request)
        if self.on_fetch:
            self.on_fetch()
        return list(self.records)


class FailingSource:
    def fetch_snapshot(self, request):
        raise InventorySourceError("warehouse system offline")


class StubAnalysisClient:
    def __init__(self, result=ANALYSIS, on_analyze=None):
        self.result = result
        self.on_analyze = on_analyze
        self.calls = []

    def analyze(self, report_type, snapshot):
        self.calls.append((report_type, snapshot))
        if self.on_analyze:
            self.on_analyze()
        return self.result


@pytest.fixture
def records(make_record):
    return [
        make_record(value=100, status=InventoryStatus.IN_STOCK),
        make_record(value=0, quantity=0, status=InventoryStatus.OUT_OF_STOCK),
        make_record(value=50, quantity=5, status=InventoryStatus.LOW_STOCK),
    ]


@pytest.fixture
def source(records):
    return StaticSource(records)


@pytest.fixture
def analysis_client():
    return StubAnalysisClient()


@pytest.fixture
def orch(source, analysis_client):
    return ReportOrchestrator(source=source, analysis_client=analysis_client)


def test_initial_state(orch):
    assert orch.state == GenerationState.IDLE
    assert orch.report_type is None
    assert orch.snapshot is None
    assert orch.analysis is None


def test_generate_without_selection_is_ignored(orch, source):
    assert orch.generate() is False
    assert orch.state == GenerationState.IDLE
    assert source.requests == []


def test_select_then_select_again(orch):
    """Selecting A then B before generating leaves B active and no snapshot."""
    assert orch.select_report(ReportType.INVENTORY_BALANCE)
    assert orch.select_report(ReportType.EXPIRY_RISK)
    assert orch.report_type == ReportType.EXPIRY_RISK
    assert orch.report_config.title == "Expiry risk"
    assert orch.snapshot is None
    assert orch.state == GenerationState.IDLE


def test_reserved_report_cannot_be_selected(orch):
    with pytest.raises(ValueError):
        orch.select_report(ReportType.ABC_ANALYSIS)
    assert orch.report_type is None


def test_generate_happy_path(orch, source, analysis_client, records):
    orch.select_report(ReportType.INVENTORY_BALANCE, warehouse="Main", category="Tools")
    assert orch.generate() is True

    assert orch.state == GenerationState.READY
    assert orch.error is None
    assert orch.snapshot.items == tuple(records)
    summary = orch.snapshot.summary
    assert (summary.total_items, summary.total_value, summary.critical_items_count) == (3, 150, 2)
    assert orch.analysis == ANALYSIS

    request = source.requests[0]
    assert request.report_type == ReportType.INVENTORY_BALANCE
    assert request.warehouse == "Main"
    assert request.category == "Tools"
    assert analysis_client.calls == [(ReportType.INVENTORY_BALANCE, orch.snapshot)]


def test_set_filters_before_generate(orch, source):
    orch.select_report(ReportType.MOVEMENT_HISTORY)
    orch.set_filters(warehouse="North", category=None)
    orch.generate()
    assert source.requests[0].warehouse == "North"
    assert source.requests[0].category is None


def test_generate_while_fetching_is_ignored(records, analysis_client):
    """A second generate() issued mid-pipeline is a no-op."""
    seen = {}

    def reenter():
        seen["state"] = orch.state
        seen["second"] = orch.generate()

    source = StaticSource(records, on_fetch=reenter)
    orch = ReportOrchestrator(source=source, analysis_client=analysis_client)
    orch.select_report(ReportType.INVENTORY_BALANCE)
    assert orch.generate() is True

    assert seen == {"state": GenerationState.GENERATING, "second": False}
    assert len(source.requests) == 1
    assert len(analysis_client.calls) == 1
    assert orch.state == GenerationState.READY


def test_generate_while_analyzing_is_ignored(source):
    seen = {}

    def reenter():
        seen["second"] = orch.generate()
        seen["selected"] = orch.select_report(ReportType.DEMAND_FORECAST)

    client = StubAnalysisClient(on_analyze=reenter)
    orch = ReportOrchestrator(source=source, analysis_client=client)
    orch.select_report(ReportType.INVENTORY_BALANCE)
    orch.generate()

    assert seen == {"second": False, "selected": False}
    assert orch.report_type == ReportType.INVENTORY_BALANCE
    assert len(source.requests) == 1
    assert orch.state == GenerationState.READY


def test_ai_timeout_lands_in_ready_with_fallback(source):
    client = MagicMock()
    client.chat.completions.create.side_effect = APITimeoutError(
        request=httpx.Request("POST", "https://ai.example.test/v1/chat/completions")
    )
    orch = ReportOrchestrator(source=source, analysis_client=AnalysisClient(client=client))
    orch.select_report(ReportType.EXPIRY_RISK)
    orch.generate()

    assert orch.state == GenerationState.READY
    assert orch.error is None
    assert orch.analysis == FALLBACK_RESULT
    assert orch.snapshot.summary.total_items == 3


def test_source_failure_is_observable(analysis_client, source):
    orch = ReportOrchestrator(source=FailingSource(), analysis_client=analysis_client)
    orch.select_report(ReportType.INVENTORY_BALANCE)
    assert orch.generate() is True

    assert orch.state == GenerationState.FAILED
    assert "warehouse system offline" in orch.error
    assert orch.snapshot is None
    assert orch.analysis is None
    assert analysis_client.calls == []

    # retry after the source recovers
    orch.source = source
    orch.generate()
    assert orch.state == GenerationState.READY
    assert orch.error is None


def test_unexpected_source_error_does_not_stick_in_generating(analysis_client):
    class BrokenSource:
        def fetch_snapshot(self, request):
            raise KeyError("qty")

    orch = ReportOrchestrator(source=BrokenSource(), analysis_client=analysis_client)
    orch.select_report(ReportType.INVENTORY_BALANCE)
    orch.generate()
    assert orch.state == GenerationState.FAILED
    assert not orch.is_generating


def test_raising_analysis_client_lands_in_ready_with_fallback(source):
    def explode():
        raise RuntimeError("client bug")

    client = StubAnalysisClient(on_analyze=explode)
    orch = ReportOrchestrator(source=source, analysis_client=client)
    orch.select_report(ReportType.INVENTORY_BALANCE)
    assert orch.generate() is True

    assert orch.state == GenerationState.READY
    assert orch.analysis == FALLBACK_RESULT
    assert orch.snapshot.summary.total_items == 3

    # later calls still run
    client.on_analyze = None
    assert orch.generate() is True
    assert orch.analysis == ANALYSIS
    assert len(client.calls) == 2


def test_interrupted_generate_does_not_stick_in_generating(source):
    def interrupt():
        raise KeyboardInterrupt

    client = StubAnalysisClient(on_analyze=interrupt)
    orch = ReportOrchestrator(source=source, analysis_client=client)
    orch.select_report(ReportType.INVENTORY_BALANCE)
    with pytest.raises(KeyboardInterrupt):
        orch.generate()

    assert orch.state == GenerationState.IDLE
    assert not orch.is_generating
    assert orch.select_report(ReportType.EXPIRY_RISK) is True


def test_select_same_report_when_ready_keeps_result(orch):
    orch.select_report(ReportType.INVENTORY_BALANCE)
    orch.generate()
    snapshot = orch.snapshot

    assert orch.select_report(ReportType.INVENTORY_BALANCE) is False
    assert orch.snapshot is snapshot
    assert orch.state == GenerationState.READY


def test_select_other_report_when_ready_discards_result(orch):
    orch.select_report(ReportType.INVENTORY_BALANCE)
    orch.generate()

    assert orch.select_report(ReportType.DEMAND_FORECAST) is True
    assert orch.state == GenerationState.IDLE
    assert orch.snapshot is None
    assert orch.analysis is None


def test_regenerate_replaces_snapshot(orch):
    orch.select_report(ReportType.INVENTORY_BALANCE)
    orch.generate()
    first = orch.snapshot
    orch.generate()
    assert orch.snapshot is not first
    assert orch.state == GenerationState.READY


def test_reset(orch):
    orch.select_report(ReportType.INVENTORY_BALANCE)
    orch.generate()
    orch.reset()

    assert orch.state == GenerationState.IDLE
    assert orch.report_type is None
    assert orch.snapshot is None
    assert orch.analysis is None
    assert orch.error is None


def test_create_orchestrator_uses_configured_source():
    orch = create_orchestrator()
    assert isinstance(orch.source, MockInventorySource)
    assert isinstance(orch.analysis_client, AnalysisClient)

    orch.select_report(ReportType.INVENTORY_BALANCE)
    orch.generate()
    assert orch.state == GenerationState.READY
    assert orch.snapshot.summary.total_items == 25
    # no AI key configured in tests
    assert orch.analysis == FALLBACK_RESULT
