"""
AI analysis of generated reports.

Sends a condensed view of a report snapshot to an OpenAI-compatible chat
completions endpoint (Gemini by default) and parses the JSON answer into an
AnalysisResult.

Any failure, whether transport, empty body or malformed answer, produces the
same fixed fallback result, so callers always receive an AnalysisResult.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from ..config import get_config
from ..data.models import AnalysisResult, ReportType
from ..logging import get_logger
from .snapshot import ReportSnapshot

# Only the head of the snapshot is sent to keep token usage and latency bounded
MAX_SAMPLE_ITEMS = 10

FALLBACK_RESULT = AnalysisResult(
    summary="AI analysis is unavailable. Check the connection or the API key.",
    recommendations=["Review the data manually", "Contact the system administrator"],
    risk_assessment="Medium",
)

SYSTEM_INSTRUCTION = """You are an expert analyst in warehouse logistics and inventory management.
Your task is to analyze the report data you are given and write a short, professional summary in {language}.
Focus on identifying risks, inefficiencies and opportunities for optimization.
Respond with JSON only."""

ANALYSIS_PROMPT = """Analyze the following warehouse report data of type "{report_type}".
Data: {payload}

Return JSON with the fields:
1. "summary": a short text summary of the situation (2-3 sentences).
2. "recommendations": an array of strings (3-5 concrete actions for the warehouse manager).
3. "riskAssessment": one of ["Low", "Medium", "High"] depending on critical problems (shortages, overstock, expiring stock)."""


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one analysis request: the parsed answer or the fallback plus the reason."""

    result: AnalysisResult
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, result: AnalysisResult) -> "AnalysisOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, reason: str) -> "AnalysisOutcome":
        return cls(result=FALLBACK_RESULT, error=reason)


# =============================================================================
# REQUEST SHAPING
# =============================================================================

def build_payload(report_type: ReportType, snapshot: ReportSnapshot) -> Dict[str, Any]:
    """Condensed, JSON-ready view of a snapshot for the language model."""
    summary = snapshot.summary
    return {
        "reportType": report_type.value,
        "summaryMetrics": {
            "totalItems": summary.total_items,
            "totalValue": summary.total_value,
            "criticalItemsCount": summary.critical_items_count,
        },
        "topItems": [
            {
                "name": item.name,
                "qty": item.quantity,
                "status": item.status.value,
                "value": item.value,
            }
            for item in snapshot.items[:MAX_SAMPLE_ITEMS]
        ],
        "totalItemsCount": len(snapshot.items),
    }


def build_prompt(report_type: ReportType, payload: Dict[str, Any]) -> str:
    return ANALYSIS_PROMPT.format(
        report_type=report_type.value,
        payload=json.dumps(payload, ensure_ascii=False),
    )


# =============================================================================
# RESPONSE PARSING
# =============================================================================

def parse_analysis(content: Optional[str]) -> AnalysisOutcome:
    """Parse the model's answer; never raises."""
    if not content or not content.strip():
        return AnalysisOutcome.failure("Empty response from AI service")

    # Models sometimes wrap JSON in a markdown fence despite the JSON response format
    json_content = content.strip()
    match = re.search(r"```(?:json)?\s*(.*?)\s*```", json_content, re.DOTALL)
    if match:
        json_content = match.group(1)

    try:
        data = json.loads(json_content)
    except json.JSONDecodeError as e:
        return AnalysisOutcome.failure(f"Invalid JSON response: {e}")

    try:
        return AnalysisOutcome.success(AnalysisResult.model_validate(data))
    except ValidationError as e:
        return AnalysisOutcome.failure(f"Unexpected response shape: {e.error_count()} validation error(s)")


# =============================================================================
# CLIENT
# =============================================================================

def get_ai_client() -> Optional[OpenAI]:
    """Get the AI client (OpenAI-compatible), or None when no API key is configured."""
    config = get_config()
    if config.ai_api_key:
        return OpenAI(
            api_key=config.ai_api_key,
            base_url=config.ai_base_url,
            timeout=config.ai_timeout_seconds,
            max_retries=0,
        )
    return None


class AnalysisClient:
    """Requests a narrative analysis of a report snapshot."""

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        model: Optional[str] = None,
        language: Optional[str] = None,
    ) -> None:
        config = get_config()
        self._client = client
        self.model = model or config.ai_model
        self.language = language or config.analysis_language
        self.logger = get_logger(__name__)

    @property
    def client(self) -> Optional[OpenAI]:
        """Get AI client (lazy load if not provided)."""
        if self._client is None:
            self._client = get_ai_client()
        return self._client

    def analyze(self, report_type: ReportType, snapshot: ReportSnapshot) -> AnalysisResult:
        """Return the analysis for a snapshot, or FALLBACK_RESULT on any failure."""
        return self.request_analysis(report_type, snapshot).result

    def request_analysis(self, report_type: ReportType, snapshot: ReportSnapshot) -> AnalysisOutcome:
        # Accept the plain string value as well as the enum member
        try:
            report_type = ReportType(report_type)
        except (TypeError, ValueError):
            self.logger.warning(f"AI analysis skipped: unknown report type {report_type!r}")
            return AnalysisOutcome.failure(f"Unknown report type: {report_type!r}")

        outcome = self._request(report_type, snapshot)
        if outcome.ok:
            self.logger.info(
                f"AI analysis for {report_type.value}: risk={outcome.result.risk_assessment}, "
                f"{len(outcome.result.recommendations)} recommendation(s)"
            )
        else:
            self.logger.warning(f"AI analysis for {report_type.value} fell back: {outcome.error}")
        return outcome

    def _request(self, report_type: ReportType, snapshot: ReportSnapshot) -> AnalysisOutcome:
        client = self.client
        if client is None:
            return AnalysisOutcome.failure("AI client not configured (missing AI_API_KEY)")

        try:
            payload = build_payload(report_type, snapshot)
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION.format(language=self.language)},
                    {"role": "user", "content": build_prompt(report_type, payload)},
                ],
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content if response.choices else None
        except OpenAIError as e:
            return AnalysisOutcome.failure(f"AI service request failed: {type(e).__name__}: {e}")
        except Exception as e:
            self.logger.exception("Unexpected error while requesting AI analysis")
            return AnalysisOutcome.failure(f"AI analysis request failed: {type(e).__name__}: {e}")

        return parse_analysis(content)
