"""
Pytest configuration and shared fixtures for SeaTrust tests.
"""

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from seatrust.compliance import (
    ComplianceRecommendationEngine,
    ComplianceScoreCalculator,
    ComplianceStatusResolver,
)
from seatrust.config import FeatureFlags
from seatrust.db.session import create_session_factory, init_schema
from seatrust.models import (
    Candidate,
    CandidateContract,
    CandidateTrustProfile,
    TrackingVerification,
    VerificationStatus,
)
from seatrust.seatime import OverlapCorrector


@pytest.fixture
def today() -> date:
    """Fixed reference date for open-ended contracts."""
    return date(2024, 6, 30)


@pytest.fixture
def corrector(today) -> OverlapCorrector:
    """Create an overlap corrector for testing."""
    return OverlapCorrector(today=today)


@pytest.fixture
def score_calculator() -> ComplianceScoreCalculator:
    """Create a compliance score calculator for testing."""
    return ComplianceScoreCalculator()


@pytest.fixture
def status_resolver() -> ComplianceStatusResolver:
    """Create a compliance status resolver for testing."""
    return ComplianceStatusResolver()


@pytest.fixture
def recommendation_engine() -> ComplianceRecommendationEngine:
    """Create a recommendation engine for testing."""
    return ComplianceRecommendationEngine()


@pytest.fixture
def flags() -> FeatureFlags:
    """Every toggle switched on."""
    return FeatureFlags.all_enabled()


@pytest.fixture
def disabled_flags() -> FeatureFlags:
    """Every toggle switched off."""
    return FeatureFlags()


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'seatrust.db'}"


@pytest_asyncio.fixture
async def db_engine(database_url):
    """Async engine on a fresh SQLite file with the schema created."""
    engine = create_async_engine(database_url)
    await init_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest_asyncio.fixture
async def session(session_factory):
    """Session used by the code under test."""
    async with session_factory() as session:
        yield session


class Seeder:
    """Insert upstream records, each call in its own committed session."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def _add(self, obj: Any) -> Any:
        async with self.session_factory() as session:
            session.add(obj)
            await session.commit()
        return obj

    async def candidate(self, first_name: str = "Ivan", last_name: str = "Petrov") -> UUID:
        candidate = await self._add(Candidate(first_name=first_name, last_name=last_name))
        return candidate.id

    async def contract(
        self,
        candidate_id: UUID,
        start_date: Optional[date],
        end_date: Optional[date],
        rank_code: Optional[str] = "AB",
        vessel_type: Optional[str] = "bulk_carrier",
        created_at: Optional[datetime] = None,
    ) -> UUID:
        contract = await self._add(CandidateContract(
            candidate_id=candidate_id,
            start_date=start_date,
            end_date=end_date,
            rank_code=rank_code,
            vessel_type=vessel_type,
            vessel_name="MV Test",
            created_at=created_at or datetime.utcnow(),
        ))
        return contract.id

    async def profile(self, candidate_id: UUID, **fields: Any) -> UUID:
        fields.setdefault("detail_json", {})
        profile = await self._add(CandidateTrustProfile(candidate_id=candidate_id, **fields))
        return profile.id

    async def verification(
        self,
        contract_id: UUID,
        status: VerificationStatus,
        confidence_score: Optional[float],
        created_at: Optional[datetime] = None,
    ) -> UUID:
        verification = await self._add(TrackingVerification(
            contract_id=contract_id,
            status=status,
            confidence_score=confidence_score,
            provider="test",
            anomalies=[],
            created_at=created_at or datetime.utcnow(),
        ))
        return verification.id


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)


@pytest.fixture
def rank_stcw_detail() -> dict:
    """Technical evaluation sub-record as written by the rank/STCW analyzer."""
    return {
        "technical_score": 0.8,
        "stcw_compliance": {
            "compliance_ratio": 0.9,
            "total_required": 10,
            "total_held": 9,
            "missing_certs": [{"code": "GMDSS"}],
            "expired_certs": [],
        },
    }
