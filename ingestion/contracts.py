"""
Profile Ingestion Contracts

Immutable data structures for the profile ingestion pipeline.

BOUNDARY: Ingestion Layer
All scraped person records enter through these contracts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

from backend.contracts.base import ErrorCode
from backend.contracts.graph import Person, UNKNOWN


# Loosely structured record as produced by the scraping collaborator.
RawRecord = Dict[str, Any]


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class NormalizerConfig:
    """Thresholds applied while deriving canonical people."""
    id_length: int = 8
    min_id_length: int = 2
    min_name_length: int = 2
    unknown_value: str = UNKNOWN

    def __post_init__(self):
        if self.id_length < self.min_id_length:
            raise ValueError("id_length must be >= min_id_length")
        if self.min_name_length < 1:
            raise ValueError("min_name_length must be positive")


# =============================================================================
# EXCLUSION RECORDS
# =============================================================================

@dataclass(frozen=True)
class DroppedRecord:
    """Record of an input that failed the validity filter."""
    index: int
    code: ErrorCode
    reason: str

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'code': self.code.name,
            'reason': self.reason,
        }


@dataclass(frozen=True)
class DuplicateRecord:
    """Record of an input whose derived id was already taken."""
    index: int
    person_id: str
    name: str
    code: ErrorCode = ErrorCode.DUPLICATE_ID

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'code': self.code.name,
            'person_id': self.person_id,
            'name': self.name,
        }


@dataclass
class NormalizationReport:
    """
    Complete report of one normalization pass.

    TRACEABLE:
    Every input record results in exactly one of:
    - A person in `people`
    - An entry in `dropped_records`
    - An entry in `duplicate_records`
    """
    processed_count: int = 0
    people: List[Person] = field(default_factory=list)
    dropped_records: List[DroppedRecord] = field(default_factory=list)
    duplicate_records: List[DuplicateRecord] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.people)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_records)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicate_records)

    @property
    def excluded_count(self) -> int:
        return self.dropped_count + self.duplicate_count

    def to_dict(self) -> dict:
        return {
            'processed_count': self.processed_count,
            'success_count': self.success_count,
            'dropped_count': self.dropped_count,
            'duplicate_count': self.duplicate_count,
            'people': [p.to_dict() for p in self.people],
            'dropped_records': [d.to_dict() for d in self.dropped_records],
            'duplicate_records': [d.to_dict() for d in self.duplicate_records],
        }
