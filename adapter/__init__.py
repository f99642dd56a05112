"""
Routing Adapter Package

ARCHITECTURAL BOUNDARY:
=======================
This package is the ONLY interface between the backend and the external
decision collaborator (a language model classifying free-text requests).

DIRECTION OF DEPENDENCY:
========================
backend.engine -> adapter -> backend.contracts

DESIGN PRINCIPLES:
==================
1. Typed, strictly validated decision schemas
2. Collaborator output is ADVISORY; the graph is never changed by it
3. Every failure degrades to a deterministic local classifier
"""

from .contracts import RoutingAction, RoutingDecision, RoutingRequest, SearchPlan
from .fallback import (
    fallback_decision, fallback_search_plan, is_intro_request, query_keywords,
)
from .router import RouterConfig, RoutingExecutor

__all__ = [
    # Contracts
    'RoutingAction', 'RoutingDecision', 'RoutingRequest', 'SearchPlan',
    # Fallback
    'fallback_decision', 'fallback_search_plan', 'is_intro_request', 'query_keywords',
    # Execution
    'RouterConfig', 'RoutingExecutor',
]
