"""
Contracts Module

This module defines the explicit data types that form the contracts
between layers. All inter-layer communication MUST use these contracts.

DESIGN PRINCIPLES:
==================
1. Entity and result types are immutable (frozen dataclasses)
2. Empty results are first-class values, not exceptions
3. Errors that cross a boundary are data (Error / Result)
"""

from .base import SELF_ID, ErrorCode, Error, Result
from .graph import (
    UNKNOWN, Person, Edge, Graph, PathResult, CompanyPath, MultiPathResult,
    edge_key, self_person,
)

__all__ = [
    'SELF_ID', 'ErrorCode', 'Error', 'Result',
    'UNKNOWN', 'Person', 'Edge', 'Graph', 'PathResult', 'CompanyPath',
    'MultiPathResult', 'edge_key', 'self_person',
]
