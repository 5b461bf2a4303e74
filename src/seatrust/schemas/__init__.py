"""
Pydantic schemas for the typed sub-records of the trust profile.
"""

from seatrust.schemas.compliance import (
    CompliancePack,
    FlagRecord,
    RecommendationRecord,
    SectionBreakdown,
)
from seatrust.schemas.detail import RankStcwDetail, StcwCompliance
from seatrust.schemas.sea_time import SeaTimeSummary

__all__ = [
    "CompliancePack",
    "FlagRecord",
    "RecommendationRecord",
    "SectionBreakdown",
    "RankStcwDetail",
    "StcwCompliance",
    "SeaTimeSummary",
]
