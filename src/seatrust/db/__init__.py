"""
Database access for the trust engine.
"""

from seatrust.db.repositories import (
    CandidateRepository,
    ContractRepository,
    SeaTimeLogRepository,
    TrackingVerificationRepository,
    TrustEventRepository,
    TrustProfileRepository,
)
from seatrust.db.session import (
    create_engine_from_settings,
    create_session_factory,
    init_schema,
)

__all__ = [
    "CandidateRepository",
    "ContractRepository",
    "SeaTimeLogRepository",
    "TrackingVerificationRepository",
    "TrustEventRepository",
    "TrustProfileRepository",
    "create_engine_from_settings",
    "create_session_factory",
    "init_schema",
]
