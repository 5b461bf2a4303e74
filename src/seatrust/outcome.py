"""
Tagged computation outcomes.

Every per-candidate entry point returns one of:
- Ok(data): the computation ran and produced a result
- Unavailable(reason): intentionally skipped, the record is incomplete
  or the feature is switched off
- Failed(error): an unexpected error was caught and logged
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class UnavailableReason(str, Enum):
    """Why a computation produced no result without failing."""

    FEATURE_DISABLED = "feature_disabled"
    CANDIDATE_NOT_FOUND = "candidate_not_found"
    PROFILE_NOT_FOUND = "profile_not_found"
    MISSING_BASELINE = "missing_baseline"
    INSUFFICIENT_SECTIONS = "insufficient_sections"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful computation."""

    data: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Unavailable:
    """Computation skipped due to missing data or a disabled feature."""

    reason: UnavailableReason

    @property
    def is_ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Failed:
    """Computation abandoned after an unexpected error."""

    error: BaseException

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


Outcome = Union[Ok[T], Unavailable, Failed]
