"""
Presentation helpers for sea-time and compliance results.

Produce plain dictionaries for API responses and report rendering.
"""

from typing import Any, Iterable, Optional

from seatrust.models import CandidateTrustProfile, SeaTimeLog


def present_sea_time(profile: Optional[CandidateTrustProfile]) -> Optional[dict[str, Any]]:
    """Sea-time summary view, None if never computed."""
    if profile is None:
        return None
    summary = profile.sea_time
    if summary is None:
        return None

    return {
        "total_contracts": summary.total_contracts,
        "total_sea_days": summary.total_sea_days,
        "total_raw_days": summary.total_raw_days,
        "merged_total_days": summary.merged_total_days,
        "overlap_days": summary.overlap_days,
        "sea_days": summary.sea_days,
        "river_days": summary.river_days,
        "rank_days": summary.rank_days,
        "rank_experience_pct": summary.rank_experience_pct,
        "vessel_type_days": summary.vessel_type_days,
        "vessel_experience_pct": summary.vessel_experience_pct,
        "computed_at": summary.computed_at.isoformat() if summary.computed_at else None,
    }


def present_contract_logs(logs: Iterable[SeaTimeLog]) -> list[dict[str, Any]]:
    """Per-contract ledger view."""
    return [
        {
            "contract_id": str(log.contract_id) if log.contract_id else None,
            "rank_code": log.rank_code,
            "vessel_type": log.vessel_type,
            "operation_type": log.operation_type,
            "original_start": log.original_start_date.isoformat(),
            "original_end": log.original_end_date.isoformat() if log.original_end_date else None,
            "effective_start": log.effective_start_date.isoformat(),
            "effective_end": log.effective_end_date.isoformat(),
            "raw_days": log.raw_days,
            "calculated_days": log.calculated_days,
            "overlap_deducted": log.overlap_deducted_days,
        }
        for log in logs
    ]


def present_compliance(profile: Optional[CandidateTrustProfile]) -> Optional[dict[str, Any]]:
    """Compliance pack view, None if never computed."""
    if profile is None:
        return None
    pack = profile.compliance_pack
    if pack is None:
        return None

    return {
        "compliance_score": pack.score,
        "compliance_status": pack.status,
        "available_sections": pack.available_sections,
        "critical_flag_count": pack.critical_flag_count,
        "section_scores": {
            name: breakdown.model_dump() for name, breakdown in pack.section_scores.items()
        },
        "flags": [flag.model_dump() for flag in pack.flags],
        "recommendations": [rec.model_dump() for rec in pack.recommendations],
        "computed_at": pack.computed_at.isoformat() if pack.computed_at else None,
    }
