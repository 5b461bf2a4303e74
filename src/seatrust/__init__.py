"""
SeaTrust - Sea-Time & Compliance Trust Engine

Derives verified career data for maritime crew candidates:
- Rebuilds a sea-time ledger from overlapping contract records
- Rolls the ledger up into per-rank and per-vessel-type experience
- Combines independent section scores into a compliance score
- Resolves compliance status, flags and remediation recommendations
"""

__version__ = "0.1.0"
