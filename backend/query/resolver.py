"""
Query Resolver
==============

Maps fuzzy name / company / keyword hints onto graph entities.

SCORING (per non-self candidate):
    +10  exact name match (case-insensitive, trimmed)
     +6  otherwise, hint name is a substring of the candidate name
  +0..2  share of hint-name tokens present in the candidate name
     +5  exact company match
     +3  otherwise, hint company is a substring of the candidate company
  +0..3  one point per keyword found in "name company", capped

A name hint with no candidate scoring at least MIN_NAME_SCORE resolves
to None: callers fall back to external search instead of a weak guess.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set, Tuple
import re

from ..contracts.graph import Graph, Person
from ..core.topology import TopologyEngine


MIN_NAME_SCORE = 3.0

EXACT_NAME_POINTS = 10.0
PARTIAL_NAME_POINTS = 6.0
TOKEN_OVERLAP_POINTS = 2.0
EXACT_COMPANY_POINTS = 5.0
PARTIAL_COMPANY_POINTS = 3.0
MAX_KEYWORD_POINTS = 3.0

_TOKEN_SPLIT = re.compile(r"[\W_]+", re.UNICODE)
MIN_FREE_TEXT_TOKEN = 3


def _norm(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def tokenize(text: Optional[str]) -> Tuple[str, ...]:
    return tuple(t for t in _TOKEN_SPLIT.split(_norm(text)) if t)


@dataclass(frozen=True)
class TargetHints:
    """Fuzzy description of one person."""
    target_name: Optional[str] = None
    target_company: Optional[str] = None
    keywords: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_name(self) -> bool:
        return bool(_norm(self.target_name))


@dataclass(frozen=True)
class CompanyHints:
    """Fuzzy description of a company."""
    companies: Tuple[str, ...] = field(default_factory=tuple)
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    free_text: str = ""

    def candidates(self) -> Set[str]:
        """Terms matched by containment in either direction."""
        found = {_norm(c) for c in self.companies} | {_norm(k) for k in self.keywords}
        found.update(t for t in tokenize(self.free_text) if len(t) >= MIN_FREE_TEXT_TOKEN)
        found.discard("")
        return found

    def exact_terms(self) -> Set[str]:
        """Short free-text tokens; these only match a company value exactly."""
        return {t for t in tokenize(self.free_text) if len(t) < MIN_FREE_TEXT_TOKEN}


def score_candidate(person: Person, hints: TargetHints) -> float:
    """Match score of `person` against `hints`."""
    score = 0.0
    name = _norm(person.name)
    company = _norm(person.company)

    hint_name = _norm(hints.target_name)
    if hint_name:
        if name == hint_name:
            score += EXACT_NAME_POINTS
        elif hint_name in name:
            score += PARTIAL_NAME_POINTS

        hint_tokens = set(tokenize(hint_name))
        if hint_tokens:
            overlap = len(hint_tokens & set(tokenize(name))) / len(hint_tokens)
            score += TOKEN_OVERLAP_POINTS * overlap

    hint_company = _norm(hints.target_company)
    if hint_company and person.has_company:
        if company == hint_company:
            score += EXACT_COMPANY_POINTS
        elif hint_company in company:
            score += PARTIAL_COMPANY_POINTS

    haystack = f"{name} {company}"
    hits = sum(1 for k in hints.keywords if _norm(k) and _norm(k) in haystack)
    score += min(MAX_KEYWORD_POINTS, float(hits))

    return score


class QueryResolver:
    """Resolver bound to one graph. Read-only."""

    def __init__(self, graph: Graph):
        self._graph = graph

    def resolve_target(self, hints: TargetHints) -> Optional[Person]:
        """
        Best-matching person, or None.

        Ties go to the first candidate in graph order. A candidate with a
        zero score is never returned.
        """
        best: Optional[Person] = None
        best_score = 0.0
        for person in self._graph.people():
            score = score_candidate(person, hints)
            if score > best_score:
                best, best_score = person, score

        if best is None:
            return None
        if hints.has_name and best_score < MIN_NAME_SCORE:
            return None
        return best

    def resolve_best_company(self, hints: CompanyHints) -> Optional[str]:
        """
        Company value best supported by the hints.

        A company matches when it contains, or is contained in, any
        candidate term; the matching company with most members wins.
        Free-text tokens shorter than MIN_FREE_TEXT_TOKEN ("at", "ey")
        match only a company spelled exactly that way.
        """
        candidates = hints.candidates()
        exact = hints.exact_terms()
        if not candidates and not exact:
            return None

        counts: Dict[str, int] = TopologyEngine(self._graph).company_counts()
        best: Optional[str] = None
        best_count = 0
        for company, count in counts.items():
            low = company.lower()
            if low not in exact and not any(low in c or c in low for c in candidates):
                continue
            if count > best_count:
                best, best_count = company, count
        return best

    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self._graph.people())

    def companies(self) -> Tuple[str, ...]:
        return tuple(TopologyEngine(self._graph).company_counts())


def resolve_target(
    graph: Graph,
    target_name: Optional[str] = None,
    target_company: Optional[str] = None,
    keywords: Iterable[str] = ()
) -> Optional[Person]:
    hints = TargetHints(target_name=target_name, target_company=target_company, keywords=tuple(keywords))
    return QueryResolver(graph).resolve_target(hints)


def resolve_best_company(
    graph: Graph,
    companies: Iterable[str] = (),
    keywords: Iterable[str] = (),
    free_text: str = ""
) -> Optional[str]:
    hints = CompanyHints(companies=tuple(companies), keywords=tuple(keywords), free_text=free_text or "")
    return QueryResolver(graph).resolve_best_company(hints)
