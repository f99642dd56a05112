"""
Topology Engine
===============

Structural analysis of the relationship graph using graph topology.

This engine computes TOPOLOGY (reachability, integrity, geometry) over
a directed networkx view of the Graph. It never mutates the Graph.

ALLOWED:
- Reachability from the self node (connectivity invariant)
- Edge integrity checks (duplicates, self-loops, weight bounds)
- Structural metrics (density, depth)
- Grouping people by company / industry
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple
import networkx as nx

from ..contracts.base import SELF_ID
from ..contracts.graph import Graph


# Fixed company lists used for industry grouping.
INDUSTRY_COMPANIES: Dict[str, Tuple[str, ...]] = {
    "Software Engineering": (
        "Google", "Meta", "Apple", "Microsoft", "Stripe", "Amazon", "Netflix",
        "Uber", "Airbnb", "Tesla", "SpaceX", "OpenAI", "Anthropic",
    ),
    "Finance": (
        "Goldman Sachs", "JPMorgan", "Morgan Stanley", "BlackRock", "Vanguard",
        "Fidelity", "Wells Fargo", "Bank of America", "Citigroup",
    ),
    "Consulting": (
        "McKinsey", "Bain", "BCG", "Deloitte", "PwC", "EY", "KPMG", "Accenture",
    ),
}
OTHER_INDUSTRY = "Other"


def industry_for_company(company: str) -> str:
    for industry, companies in INDUSTRY_COMPANIES.items():
        if company in companies:
            return industry
    return OTHER_INDUSTRY


@dataclass(frozen=True)
class GraphMetrics:
    """Immutable structural metrics for a relationship graph."""
    node_count: int
    edge_count: int
    density: float
    fully_reachable: bool
    unreachable_count: int
    max_depth: Optional[int] = None  # Hops from the self node to the farthest node


@dataclass(frozen=True)
class IndustryCluster:
    """Largest group of people sharing an industry."""
    industry: str
    count: int
    member_ids: Tuple[str, ...] = field(default_factory=tuple)


class TopologyEngine:
    """
    Engine for structural analysis of relationship graphs.

    Wraps NetworkX; the directed view is rebuilt from the Graph on demand.
    """

    def __init__(self, graph: Optional[Graph] = None):
        self._source: Optional[Graph] = None
        self._graph = nx.DiGraph()
        if graph is not None:
            self.build_graph(graph)

    def build_graph(self, graph: Graph) -> None:
        """
        Build the directed view from a Graph.

        Replaces internal graph state.
        """
        self._source = graph
        self._graph = graph.to_networkx()

    def reachable_from(self, node_id: str = SELF_ID) -> Set[str]:
        """Every node reachable from `node_id` following stored edge direction."""
        if node_id not in self._graph:
            return set()
        return nx.descendants(self._graph, node_id) | {node_id}

    def unreachable_from(self, node_id: str = SELF_ID) -> List[str]:
        """Nodes not reachable from `node_id`, in insertion order."""
        reached = self.reachable_from(node_id)
        return [n for n in self._graph.nodes if n not in reached]

    def edge_integrity_violations(self) -> List[str]:
        """
        Human-readable integrity problems; empty when the edge set is sound.

        Checks duplicate (source, target) pairs, self-loops, weight bounds and
        edges whose endpoints are not nodes.
        """
        if self._source is None:
            return []
        problems = []
        pairs = Counter((e.source, e.target) for e in self._source.edges)
        for (s, t), count in pairs.items():
            if count > 1:
                problems.append(f"duplicate edge {s}-{t} ({count}x)")
        for e in self._source.edges:
            if e.source == e.target:
                problems.append(f"self-loop on {e.source}")
            if not 0.0 <= e.weight <= 1.0:
                problems.append(f"weight {e.weight} out of range on {e.key}")
            if e.source not in self._source.nodes or e.target not in self._source.nodes:
                problems.append(f"dangling edge {e.key}")
        return problems

    def compute_metrics(self) -> GraphMetrics:
        """Compute purely structural metrics."""
        if not self._graph:
            return GraphMetrics(0, 0, 0.0, False, 0, None)

        unreachable = self.unreachable_from(SELF_ID)
        max_depth = None
        if SELF_ID in self._graph:
            depths = nx.single_source_shortest_path_length(self._graph, SELF_ID)
            max_depth = max(depths.values())

        return GraphMetrics(
            node_count=self._graph.number_of_nodes(),
            edge_count=self._graph.number_of_edges(),
            density=nx.density(self._graph),
            fully_reachable=SELF_ID in self._graph and not unreachable,
            unreachable_count=len(unreachable),
            max_depth=max_depth
        )

    def company_counts(self) -> Dict[str, int]:
        """Members per distinct company value (self node and unknowns excluded)."""
        if self._source is None:
            return {}
        counts: Dict[str, int] = {}
        for person in self._source.people():
            if person.has_company:
                counts[person.company] = counts.get(person.company, 0) + 1
        return counts

    def largest_industry_cluster(self) -> IndustryCluster:
        """Industry with the most members; first seen wins ties."""
        if self._source is None:
            return IndustryCluster(industry="Unknown", count=0)
        groups: Dict[str, List[str]] = {}
        for person in self._source.people():
            if person.has_company:
                industry = industry_for_company(person.company)
                groups.setdefault(industry, []).append(person.id)

        best = IndustryCluster(industry="Unknown", count=0)
        for industry, members in groups.items():
            if len(members) > best.count:
                best = IndustryCluster(industry=industry, count=len(members), member_ids=tuple(members))
        return best

    def clear(self):
        self._graph.clear()
        self._source = None


def unreachable_nodes(graph: Graph) -> List[str]:
    """Ids not reachable from the self node."""
    return TopologyEngine(graph).unreachable_from(SELF_ID)
