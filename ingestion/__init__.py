"""
Profile Ingestion

RESPONSIBILITY: Turn loosely-structured scraped records into Person entities
ALLOWED INPUTS: Raw record dictionaries from the scraping collaborator
OUTPUTS: NormalizationReport (people + every excluded record with its reason)

WHAT THIS LAYER MUST NOT DO:
============================
- Build edges or graphs
- Raise on malformed records (they are excluded and reported)
"""

from .contracts import (
    RawRecord, NormalizerConfig, NormalizationReport, DroppedRecord, DuplicateRecord,
)
from .normalizer import ProfileNormalizer, normalize

__all__ = [
    'RawRecord', 'NormalizerConfig', 'NormalizationReport', 'DroppedRecord',
    'DuplicateRecord', 'ProfileNormalizer', 'normalize',
]
