"""
Graph Contracts

Canonical people, weighted directed edges, the relationship graph, and
the path results computed over it.

INVARIANTS:
===========
- Person ids are unique; SELF_ID appears exactly once in a Graph
- No two edges share a (source, target) pair; no self-loops
- Edge weights lie in [0, 1]; every edge carries at least one reason
- An empty PathResult means "no path", never an error
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

import networkx as nx

from .base import SELF_ID


UNKNOWN = "Unknown"


def edge_key(source: str, target: str) -> str:
    """Display key of a directed edge, shared with the rendering layer."""
    return f"{source}-{target}"


# =============================================================================
# PEOPLE
# =============================================================================

@dataclass(frozen=True)
class Person:
    """Canonical person entity produced by normalization."""
    id: str
    name: str
    company: str = UNKNOWN
    school: str = UNKNOWN
    role: str = UNKNOWN
    description: str = ""
    profile_picture_url: Optional[str] = None
    profile_url: Optional[str] = None
    location: Optional[str] = None

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("Person id must be a non-empty string")

    @property
    def is_self(self) -> bool:
        return self.id == SELF_ID

    @property
    def has_company(self) -> bool:
        return bool(self.company) and self.company != UNKNOWN

    @property
    def has_school(self) -> bool:
        return bool(self.school) and self.school != UNKNOWN

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'company': self.company,
            'school': self.school,
            'role': self.role,
            'description': self.description,
            'profile_picture_url': self.profile_picture_url,
            'profile_url': self.profile_url,
            'location': self.location,
        }


def self_person() -> Person:
    """The self node. Always injected by synthesis, never normalized."""
    return Person(
        id=SELF_ID,
        name="You",
        company="Your Company",
        school="Your School",
        role="Your Role",
    )


# =============================================================================
# EDGES
# =============================================================================

@dataclass(frozen=True)
class Edge:
    """Weighted directed edge with human-readable justification."""
    source: str
    target: str
    weight: float
    reasons: Tuple[str, ...]

    def __post_init__(self):
        if self.source == self.target:
            raise ValueError(f"Self-loop on {self.source!r} is not allowed")
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError(f"Edge weight must be in [0, 1], got {self.weight}")
        if not self.reasons:
            raise ValueError("Edge must carry at least one reason")

    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)

    def to_dict(self) -> dict:
        return {
            'source': self.source,
            'target': self.target,
            'weight': self.weight,
            'reasons': list(self.reasons),
        }


# =============================================================================
# GRAPH
# =============================================================================

class Graph:
    """
    Mapping of id -> Person plus a list of directed edges.

    Append-only: synthesis adds nodes and edges, every other layer reads.
    Edge insertion rejects duplicates and self-loops instead of raising.
    """

    def __init__(self):
        self.nodes: Dict[str, Person] = {}
        self.edges: List[Edge] = []
        self._edge_keys: set = set()
        self._outgoing: Dict[str, List[Edge]] = {}

    def add_node(self, person: Person) -> bool:
        """Insert a person. Returns False if the id is already taken."""
        if person.id in self.nodes:
            return False
        self.nodes[person.id] = person
        return True

    def add_edge(self, edge: Edge) -> bool:
        """Insert an edge. Returns False for a duplicate pair."""
        pair = (edge.source, edge.target)
        if pair in self._edge_keys:
            return False
        self._edge_keys.add(pair)
        self.edges.append(edge)
        self._outgoing.setdefault(edge.source, []).append(edge)
        return True

    def connect(
        self,
        source: str,
        target: str,
        weight: float,
        reason: str
    ) -> bool:
        """Convenience insert used by synthesis; rejects self-loops silently."""
        if source == target:
            return False
        return self.add_edge(Edge(source=source, target=target, weight=weight, reasons=(reason,)))

    def has_edge(self, source: str, target: str) -> bool:
        return (source, target) in self._edge_keys

    def out_edges(self, node_id: str) -> List[Edge]:
        return list(self._outgoing.get(node_id, ()))

    def edge_keys(self) -> FrozenSet[str]:
        return frozenset(e.key for e in self.edges)

    def get(self, node_id: str) -> Optional[Person]:
        return self.nodes.get(node_id)

    def people(self) -> Iterator[Person]:
        """Every node except the self node, in insertion order."""
        for person in self.nodes.values():
            if not person.is_self:
                yield person

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def to_networkx(self) -> nx.DiGraph:
        """Directed networkx view for structural analysis."""
        g = nx.DiGraph()
        for node_id in self.nodes:
            g.add_node(node_id)
        for e in self.edges:
            g.add_edge(e.source, e.target, weight=e.weight)
        return g

    def to_dict(self) -> dict:
        return {
            'nodes': [p.to_dict() for p in self.nodes.values()],
            'edges': [e.to_dict() for e in self.edges],
        }


# =============================================================================
# PATH RESULTS
# =============================================================================

@dataclass(frozen=True)
class PathResult:
    """
    Ordered id sequence from SELF_ID to a target.

    Empty path means "no path". The edge set covers consecutive pairs.
    """
    path: Tuple[str, ...] = field(default_factory=tuple)
    edges: FrozenSet[str] = field(default_factory=frozenset)
    weight: float = 0.0

    @staticmethod
    def empty() -> PathResult:
        return PathResult()

    @staticmethod
    def from_path(path: Tuple[str, ...], weight: float) -> PathResult:
        keys = frozenset(edge_key(a, b) for a, b in zip(path, path[1:]))
        return PathResult(path=tuple(path), edges=keys, weight=weight)

    @property
    def is_empty(self) -> bool:
        return len(self.path) == 0

    @property
    def target_id(self) -> Optional[str]:
        return self.path[-1] if self.path else None

    def to_dict(self) -> dict:
        return {
            'path': list(self.path),
            'edges': sorted(self.edges),
            'weight': self.weight,
        }


@dataclass(frozen=True)
class CompanyPath:
    """One person at a company together with the path reaching them."""
    target_id: str
    target_name: str
    result: PathResult

    @property
    def weight(self) -> float:
        return self.result.weight

    @property
    def path(self) -> Tuple[str, ...]:
        return self.result.path

    def to_dict(self) -> dict:
        d = self.result.to_dict()
        d.update({'target_id': self.target_id, 'target_name': self.target_name})
        return d


@dataclass(frozen=True)
class MultiPathResult:
    """Paths to every person at a company, best first."""
    company_name: str
    paths: Tuple[CompanyPath, ...] = field(default_factory=tuple)
    all_edges: FrozenSet[str] = field(default_factory=frozenset)

    @staticmethod
    def empty(company_name: str = "") -> MultiPathResult:
        return MultiPathResult(company_name=company_name)

    @property
    def is_empty(self) -> bool:
        return len(self.paths) == 0

    def node_ids(self) -> FrozenSet[str]:
        ids = set()
        for p in self.paths:
            ids.update(p.path)
        return frozenset(ids)

    def to_dict(self) -> dict:
        return {
            'company_name': self.company_name,
            'paths': [p.to_dict() for p in self.paths],
            'all_edges': sorted(self.all_edges),
        }
