"""
Engine Orchestration Module

This module provides the unified interface for coordinating all
layers of one exploration session while maintaining strict boundary
separation.

LAYER FLOW:
===========
raw records -> ProfileNormalizer -> GraphSynthesizer -> Graph
Graph + hints -> QueryResolver -> PathFinder -> ViewState
free text -> RoutingExecutor (provider or fallback) -> RoutingDecision

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contracts
2. Engine orchestrates flow without creating coupling
3. The Graph is replaced wholesale on load, never edited
4. Randomness is owned by the engine and injected into synthesis
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple
import logging
import random

from adapter.contracts import RoutingAction, RoutingDecision, RoutingRequest, SearchPlan
from adapter.providers.base import DecisionProvider
from adapter.router import RouterConfig, RoutingExecutor
from frontend.state import ViewState
from ingestion.contracts import NormalizationReport, NormalizerConfig, RawRecord
from ingestion.normalizer import ProfileNormalizer

from .contracts.graph import Graph, MultiPathResult, PathResult, Person
from .core.pathfinding import PathFinder
from .core.sample import sample_graph
from .core.synthesis import GraphSynthesizer, SynthesisConfig
from .core.topology import GraphMetrics, IndustryCluster, TopologyEngine
from .query.resolver import QueryResolver, TargetHints, CompanyHints


logger = logging.getLogger(__name__)


@dataclass
class BackendConfig:
    """Unified configuration for the entire backend."""
    normalizer: NormalizerConfig = None
    synthesis: SynthesisConfig = None
    router: RouterConfig = None

    def __post_init__(self):
        self.normalizer = self.normalizer or NormalizerConfig()
        self.synthesis = self.synthesis or SynthesisConfig()
        self.router = self.router or RouterConfig()


# =============================================================================
# QUERY OUTCOMES
# =============================================================================

class OutcomeKind(Enum):
    SINGLE_PATH = "single_path"
    MULTI_PATH = "multi_path"
    SEARCH = "search"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class QueryOutcome:
    """What a query did to the session, for display."""
    kind: OutcomeKind
    decision: Optional[RoutingDecision] = None
    target: Optional[Person] = None
    path: Optional[PathResult] = None
    multi_path: Optional[MultiPathResult] = None
    search_plan: Optional[SearchPlan] = None
    available_names: Tuple[str, ...] = field(default_factory=tuple)
    available_companies: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            'kind': self.kind.value,
            'decision': self.decision.to_wire() if self.decision else None,
            'target': self.target.to_dict() if self.target else None,
            'path': self.path.to_dict() if self.path else None,
            'multi_path': self.multi_path.to_dict() if self.multi_path else None,
            'search_plan': self.search_plan.to_wire() if self.search_plan else None,
            'available_names': list(self.available_names),
            'available_companies': list(self.available_companies),
        }


# =============================================================================
# EXPLORER
# =============================================================================

class NetworkExplorer:
    """
    One exploration session over one relationship graph.

    Starts on the bundled sample graph; load_records / load_graph replace
    the graph and reset the view.
    """

    def __init__(
        self,
        config: Optional[BackendConfig] = None,
        provider: Optional[DecisionProvider] = None,
        rng: Optional[random.Random] = None
    ):
        self._config = config or BackendConfig()
        self._provider = provider
        self._rng = rng if rng is not None else random.Random(self._config.synthesis.seed)
        self._normalizer = ProfileNormalizer(self._config.normalizer)
        self._synthesizer = GraphSynthesizer(self._config.synthesis, self._rng)
        self._last_report: Optional[NormalizationReport] = None
        self._adopt(sample_graph(self._config.synthesis))

    def _adopt(self, graph: Graph) -> None:
        self._graph = graph
        self._finder = PathFinder(graph)
        self._resolver = QueryResolver(graph)
        self._view = ViewState(graph)

    # =========================================================================
    # LOADING
    # =========================================================================

    def load_records(self, records: Sequence[RawRecord]) -> NormalizationReport:
        """Normalize, synthesize, and reset the view onto the new graph."""
        report = self._normalizer.normalize_batch(records)
        self._last_report = report
        if not records:
            logger.info("No records supplied, using sample graph")
            self._adopt(sample_graph(self._config.synthesis))
            return report

        self._adopt(self._synthesizer.synthesize(report.people))
        logger.info(
            "Loaded %d people (%d excluded) into graph of %d edges",
            report.success_count, report.excluded_count, len(self._graph.edges)
        )
        return report

    def load_graph(self, graph: Graph) -> None:
        """Adopt an already synthesized graph handed back by persistence."""
        self._adopt(graph)

    # =========================================================================
    # PATHS & RESOLUTION
    # =========================================================================

    def find_path(self, target_id: str) -> PathResult:
        return self._finder.find_path(target_id)

    def find_company_paths(self, company: str) -> MultiPathResult:
        return self._finder.find_multi_path(company)

    def resolve_target(
        self,
        target_name: Optional[str] = None,
        target_company: Optional[str] = None,
        keywords: Iterable[str] = ()
    ) -> Optional[Person]:
        return self._resolver.resolve_target(TargetHints(
            target_name=target_name, target_company=target_company, keywords=tuple(keywords)
        ))

    def resolve_best_company(
        self,
        companies: Iterable[str] = (),
        keywords: Iterable[str] = (),
        free_text: str = ""
    ) -> Optional[str]:
        return self._resolver.resolve_best_company(CompanyHints(
            companies=tuple(c for c in companies if c), keywords=tuple(keywords), free_text=free_text or ""
        ))

    # =========================================================================
    # QUERIES
    # =========================================================================

    def handle_decision(self, decision: RoutingDecision) -> QueryOutcome:
        """
        Apply a routing decision to the view.

        PATH: person -> single path; else company -> multi path; else search.
        SEARCH: search plan only, view untouched.
        """
        if decision.action == RoutingAction.PATH:
            person = self.resolve_target(decision.target_name, decision.target_company, decision.keywords)
            if person is not None:
                path = self._view.set_single_path_target(person.id)
                if not path.is_empty:
                    return QueryOutcome(kind=OutcomeKind.SINGLE_PATH, decision=decision, target=person, path=path)

            company = self.resolve_best_company(
                companies=(decision.target_company,) if decision.target_company else (),
                keywords=decision.keywords,
                free_text=decision.query,
            )
            if company is not None:
                multi = self._view.set_multi_path_company(company)
                if not multi.is_empty:
                    return QueryOutcome(kind=OutcomeKind.MULTI_PATH, decision=decision, multi_path=multi)

            logger.info("No graph match for %r, falling through to search", decision.query)

        plan = RoutingExecutor(config=self._config.router).search_plan(decision)
        return QueryOutcome(kind=OutcomeKind.SEARCH, decision=decision, search_plan=plan)

    async def ask(self, text: str, provider: Optional[DecisionProvider] = None) -> QueryOutcome:
        """Route free text through the provider (or fallback) and apply it."""
        executor = RoutingExecutor(provider or self._provider, self._config.router)
        request = RoutingRequest.create(text, self._resolver.names(), self._resolver.companies())
        decision = await executor.route_or_fallback(request)
        return self.handle_decision(decision)

    def quick_search(self, term: str) -> QueryOutcome:
        """Name substring -> single path; company substring -> multi path."""
        needle = (term or "").strip().lower()
        if needle:
            person = next((p for p in self._graph.people() if needle in p.name.lower()), None)
            if person is not None:
                path = self._view.set_single_path_target(person.id)
                return QueryOutcome(kind=OutcomeKind.SINGLE_PATH, target=person, path=path)

            if any(p.has_company and needle in p.company.lower() for p in self._graph.people()):
                multi = self._view.set_multi_path_company(term.strip())
                return QueryOutcome(kind=OutcomeKind.MULTI_PATH, multi_path=multi)

        return QueryOutcome(
            kind=OutcomeKind.NO_MATCH,
            available_names=self._resolver.names(),
            available_companies=self._resolver.companies(),
        )

    # =========================================================================
    # ANALYSIS
    # =========================================================================

    def largest_industry_cluster(self) -> IndustryCluster:
        return TopologyEngine(self._graph).largest_industry_cluster()

    def metrics(self) -> GraphMetrics:
        return TopologyEngine(self._graph).compute_metrics()

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def config(self) -> BackendConfig:
        return self._config

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def last_report(self) -> Optional[NormalizationReport]:
        return self._last_report
