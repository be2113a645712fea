from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


RiskLevel = Literal["Low", "Medium", "High"]


class AnalysisResult(BaseModel):
    """Narrative analysis returned by the language model.

    Uses the wire names (``riskAssessment``) as aliases so the model can be
    validated straight from the service's JSON.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    summary: str = Field(min_length=1, description="Short narrative summary")
    recommendations: List[str] = Field(min_length=1, description="Ordered actionable recommendations")
    risk_assessment: RiskLevel = Field(alias="riskAssessment", description="Overall risk level")
