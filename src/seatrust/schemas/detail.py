"""
Read-only views of detail sub-records written by other subsystems.

The rank/STCW technical evaluation lives under the "rank_stcw" key.
This engine reads it for technical readiness, certificate compliance
and missing-certificate counts but never writes it.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class StcwCompliance(BaseModel):
    """Certificate compliance against the candidate's rank requirements."""

    model_config = ConfigDict(extra="ignore")

    compliance_ratio: Optional[float] = None
    total_required: int = 0
    total_held: int = 0
    missing_certs: list[dict[str, Any]] = Field(default_factory=list)
    expired_certs: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def missing_or_expired_count(self) -> int:
        return len(self.missing_certs) + len(self.expired_certs)


class RankStcwDetail(BaseModel):
    """Technical readiness sub-record."""

    model_config = ConfigDict(extra="ignore")

    technical_score: Optional[float] = None  # Rank-readiness ratio, 0-1
    stcw_compliance: Optional[StcwCompliance] = None

    @property
    def compliance_ratio(self) -> Optional[float]:
        if self.stcw_compliance is None:
            return None
        return self.stcw_compliance.compliance_ratio

    @property
    def missing_or_expired_count(self) -> int:
        if self.stcw_compliance is None:
            return 0
        return self.stcw_compliance.missing_or_expired_count
