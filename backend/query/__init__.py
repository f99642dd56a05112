"""
Query & Resolution Interfaces

RESPONSIBILITY: Map fuzzy hints onto graph entities
ALLOWED INPUTS: Graph + explicit hint objects
OUTPUTS: Person / company name, or None when nothing matches confidently

WHAT THIS LAYER MUST NOT DO:
============================
- Mutate the graph
- Guess when a name hint has no confident match
- Call external collaborators
"""

from .resolver import (
    QueryResolver, TargetHints, CompanyHints, MIN_NAME_SCORE,
    score_candidate, resolve_target, resolve_best_company, tokenize,
)

__all__ = [
    'QueryResolver', 'TargetHints', 'CompanyHints', 'MIN_NAME_SCORE',
    'score_candidate', 'resolve_target', 'resolve_best_company', 'tokenize',
]
