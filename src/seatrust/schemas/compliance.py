"""
Compliance pack schema.

Snapshot of one compliance run, stored under the "compliance_pack" key
of a candidate's trust profile detail document.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SectionBreakdown(BaseModel):
    """Persisted form of one section score."""

    raw_score: Optional[float] = None
    effective_weight: float = 0.0
    weighted_score: float = 0.0
    available: bool = False


class FlagRecord(BaseModel):
    code: str
    severity: str  # critical | warning
    detail: str


class RecommendationRecord(BaseModel):
    priority: int = Field(ge=1, le=3)
    section: str
    recommendation: str
    action: str


class CompliancePack(BaseModel):
    """Score, status, breakdown, flags and recommendations for a candidate."""

    model_config = ConfigDict(extra="ignore")

    score: int = Field(ge=0, le=100)
    status: str
    section_scores: dict[str, SectionBreakdown] = Field(default_factory=dict)
    available_sections: int = 0
    flags: list[FlagRecord] = Field(default_factory=list)
    recommendations: list[RecommendationRecord] = Field(default_factory=list)
    computed_at: Optional[datetime] = None

    @property
    def critical_flag_count(self) -> int:
        return sum(1 for flag in self.flags if flag.severity == "critical")
