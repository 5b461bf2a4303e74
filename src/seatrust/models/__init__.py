"""
SQLAlchemy ORM models for the trust engine.
"""

from seatrust.models.base import TrustBase
from seatrust.models.candidate import (
    Candidate,
    CandidateContract,
    TrackingVerification,
    VerificationStatus,
)
from seatrust.models.sea_time import SeaTimeLog
from seatrust.models.trust import (
    COMPLIANCE_PACK_KEY,
    RANK_STCW_KEY,
    SEA_TIME_KEY,
    CandidateTrustProfile,
    TrustEvent,
    TrustEventType,
)

__all__ = [
    "TrustBase",
    "Candidate",
    "CandidateContract",
    "TrackingVerification",
    "VerificationStatus",
    "SeaTimeLog",
    "CandidateTrustProfile",
    "TrustEvent",
    "TrustEventType",
    "SEA_TIME_KEY",
    "COMPLIANCE_PACK_KEY",
    "RANK_STCW_KEY",
]
