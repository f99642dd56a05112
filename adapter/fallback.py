"""
Deterministic Fallback Classifier
=================================

Local heuristic used when the decision collaborator is unavailable,
times out, or returns something unusable.

GUARANTEES:
- Total: every input string yields a RoutingDecision / SearchPlan
- Pure: no I/O, no randomness, same text -> same result
"""

from __future__ import annotations
from typing import List, Tuple
import re

from .contracts import RoutingAction, RoutingDecision, SearchPlan


FALLBACK_REASON = "local keyword heuristic"

# Introduction / reach intent.
INTRO_PATTERN = re.compile(
    r"\b(intro\w*|reach\w*|connect\w*|path|route|meet|warm|get\s+to|know\s+someone)\b",
    re.IGNORECASE,
)

STOPWORDS = frozenset({
    "a", "an", "and", "are", "at", "be", "can", "could", "do", "find", "for",
    "from", "get", "how", "i", "in", "is", "me", "my", "of", "on", "or",
    "please", "show", "some", "someone", "the", "to", "who", "with", "would",
    "want", "you", "any", "people", "person", "works", "working",
})

SENIORITIES = frozenset({
    "intern", "junior", "senior", "staff", "principal", "lead", "head",
    "director", "vp", "chief", "founder", "partner",
})

TITLES = frozenset({
    "engineer", "developer", "designer", "manager", "recruiter", "analyst",
    "scientist", "researcher", "consultant", "product", "marketing", "sales",
    "founder", "investor", "architect",
})

_WORD = re.compile(r"[A-Za-z0-9][A-Za-z0-9.+#&-]*")


def query_keywords(text: str, limit: int = 8) -> Tuple[str, ...]:
    """Distinct non-stopword tokens of `text`, in order of appearance."""
    seen: List[str] = []
    for token in _WORD.findall(text or ""):
        low = token.lower().strip(".-")
        if not low or low in STOPWORDS or low in seen:
            continue
        seen.append(low)
        if len(seen) >= limit:
            break
    return tuple(seen)


def is_intro_request(text: str) -> bool:
    return bool(INTRO_PATTERN.search(text or ""))


def fallback_decision(text: str, max_keywords: int = 8) -> RoutingDecision:
    """Classify `text` as PATH when it asks for an introduction, else SEARCH."""
    action = RoutingAction.PATH if is_intro_request(text) else RoutingAction.SEARCH
    return RoutingDecision(
        action=action,
        reason=FALLBACK_REASON,
        target_name=None,
        target_company=None,
        keywords=query_keywords(text, max_keywords),
        query=text or "",
    )


def fallback_search_plan(decision: RoutingDecision, max_keywords: int = 8) -> SearchPlan:
    """Search plan built only from the decision's own keywords and query."""
    keywords = decision.keywords or query_keywords(decision.query, max_keywords)
    keywords = tuple(keywords)[:max_keywords]

    companies: Tuple[str, ...] = (decision.target_company,) if decision.target_company else ()
    titles = tuple(k for k in keywords if k.lower() in TITLES)
    seniorities = tuple(k for k in keywords if k.lower() in SENIORITIES)

    terms = list(keywords)
    if decision.target_name:
        terms.insert(0, decision.target_name)
    return SearchPlan(
        keywords=keywords,
        companies=companies,
        titles=titles,
        locations=(),
        seniorities=seniorities,
        linkedin_query=" ".join(terms),
        reason=decision.reason or FALLBACK_REASON,
    )
