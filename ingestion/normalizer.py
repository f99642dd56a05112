"""
Profile Normalizer
==================

Converts raw scraped person records to canonical Person entities.

GUARANTEES:
- Every record is either normalized, dropped, or marked duplicate
- Invalid records are excluded silently (reported, never raised)
- Pure over its input: the same batch always yields the same people
- The self node is never produced here
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Set
import logging

from backend.contracts.base import SELF_ID, ErrorCode
from backend.contracts.graph import Person

from .contracts import (
    RawRecord, NormalizerConfig, NormalizationReport, DroppedRecord, DuplicateRecord
)
from .rules import build_extractors, derive_base_id


logger = logging.getLogger(__name__)


class ProfileNormalizer:
    """
    Normalizes raw records to canonical people.

    Field derivation lives in `ingestion.rules`; this class applies the
    validity filter, identity assignment and deduplication.
    """

    def __init__(self, config: Optional[NormalizerConfig] = None):
        self._config = config or NormalizerConfig()
        self._extractors = build_extractors(self._config.unknown_value)

    @property
    def config(self) -> NormalizerConfig:
        return self._config

    def normalize(self, records: Sequence[RawRecord]) -> List[Person]:
        """Canonical people for `records`, in input order."""
        return self.normalize_batch(records).people

    def normalize_batch(self, records: Sequence[RawRecord]) -> NormalizationReport:
        """
        Normalize a batch of raw records.

        Returns:
            NormalizationReport with all people and every exclusion
        """
        report = NormalizationReport(processed_count=len(records))
        url_ids: Set[str] = set()
        used_ids: Set[str] = {SELF_ID}

        for index, record in enumerate(records):
            if not isinstance(record, dict) or not record:
                self._drop(report, index, ErrorCode.EMPTY_RECORD, "empty or non-object record")
                continue

            values = self._extract(record)
            name = values['name']

            name_problem = self._name_problem(name)
            if name_problem:
                self._drop(report, index, ErrorCode.INVALID_NAME, name_problem)
                continue

            base_id, from_url = derive_base_id(record, index, self._config.id_length)
            if len(base_id) < self._config.min_id_length:
                self._drop(report, index, ErrorCode.INVALID_ID, f"id too short ({base_id!r})")
                continue

            if from_url:
                if base_id in url_ids:
                    logger.debug("Dropping duplicate profile %d with id %s", index, base_id)
                    report.duplicate_records.append(
                        DuplicateRecord(index=index, person_id=base_id, name=name)
                    )
                    continue
                url_ids.add(base_id)

            person_id = self._unique_id(base_id, used_ids)
            used_ids.add(person_id)

            report.people.append(Person(id=person_id, **values))

        logger.info(
            "Normalized %d records: %d kept, %d dropped, %d duplicates",
            report.processed_count, report.success_count,
            report.dropped_count, report.duplicate_count
        )
        return report

    def _extract(self, record: RawRecord) -> Dict[str, Optional[str]]:
        return {e.attribute: e.extract(record) for e in self._extractors}

    def _name_problem(self, name: Optional[str]) -> Optional[str]:
        """Reason the name fails the validity filter, or None."""
        if not name or name == self._config.unknown_value:
            return "missing name"
        if len(name) < self._config.min_name_length:
            return f"name too short ({name!r})"
        if name == name[0] * len(name):
            return f"repetitive name ({name!r})"
        return None

    @staticmethod
    def _unique_id(base_id: str, used_ids: Set[str]) -> str:
        candidate = base_id
        counter = 1
        while candidate in used_ids:
            candidate = f"{base_id}{counter}"
            counter += 1
        return candidate

    @staticmethod
    def _drop(report: NormalizationReport, index: int, code: ErrorCode, reason: str) -> None:
        logger.debug("Filtering out profile %d: %s", index, reason)
        report.dropped_records.append(DroppedRecord(index=index, code=code, reason=reason))


def normalize(
    records: Sequence[RawRecord],
    config: Optional[NormalizerConfig] = None
) -> List[Person]:
    """Module-level shortcut for ProfileNormalizer(config).normalize(records)."""
    return ProfileNormalizer(config).normalize(records)
