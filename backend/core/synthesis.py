"""
Graph Synthesizer
=================

Turns a list of canonical people into a connected relationship graph.

When no explicit relationship data accompanies the input (the expected
case) a two-tier hub model is synthesized:

    me -> hub            (first degree)
    me -> person         (direct, DIRECT_RATIO of non-hubs)
    hub -> person        (second degree, hub chosen by affinity)
    person -> person     (rare lateral edges, CROSS_PEER_PROB)

GUARANTEES:
===========
1. The self node is injected exactly once
2. Every node is reachable from the self node (reachability repair)
3. No duplicate (source, target) pairs, no self-loops, weights in [0, 1]
4. Deterministic for a given random source
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging
import random

from ..contracts.base import SELF_ID
from ..contracts.graph import Edge, Graph, Person, self_person
from .topology import unreachable_nodes


logger = logging.getLogger(__name__)

WeightRange = Tuple[float, float]

REASON_HUB = "hub connection"
REASON_DIRECT = "direct connection"
REASON_SAME_COMPANY = "same company"
REASON_SAME_SCHOOL = "same school"
REASON_VIA_HUB = "second-degree via hub"
REASON_PEER = "peer connection"
REASON_REPAIR = "reachability repair"


@dataclass(frozen=True)
class SynthesisConfig:
    """
    Parameters of the hub model.

    WHY FROZEN:
    Config should not change during synthesis.
    Changes require new config instance.
    """
    hub_ratio: float = 0.35
    direct_ratio: float = 0.20
    cross_peer_prob: float = 0.03
    hub_weight_range: WeightRange = (0.6, 0.95)
    direct_weight_range: WeightRange = (0.4, 0.8)
    second_degree_weight_range: WeightRange = (0.2, 0.6)
    lateral_weight_range: WeightRange = (0.1, 0.4)
    repair_weight_range: WeightRange = (0.2, 0.5)
    affinity_bonus: float = 0.15
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ('hub_ratio', 'direct_ratio', 'cross_peer_prob', 'affinity_bonus'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")
        for name in (
            'hub_weight_range', 'direct_weight_range', 'second_degree_weight_range',
            'lateral_weight_range', 'repair_weight_range'
        ):
            low, high = getattr(self, name)
            if not 0.0 <= low <= high <= 1.0:
                raise ValueError(f"{name} must satisfy 0 <= low <= high <= 1, got {(low, high)}")


class GraphSynthesizer:
    """
    Builds a Graph satisfying the connectivity invariant.

    Randomness comes only from the injected `rng` (hub selection, weight
    jitter, direct/lateral draws); pass a seeded random.Random for
    reproducible graphs.
    """

    def __init__(
        self,
        config: Optional[SynthesisConfig] = None,
        rng: Optional[random.Random] = None
    ):
        self._config = config or SynthesisConfig()
        self._rng = rng if rng is not None else random.Random(self._config.seed)

    @property
    def config(self) -> SynthesisConfig:
        return self._config

    def synthesize(
        self,
        people: Sequence[Person],
        explicit_edges: Optional[Sequence[Edge]] = None
    ) -> Graph:
        """
        Build the relationship graph for `people`.

        Args:
            people: canonical people, self node excluded
            explicit_edges: known relationships; when given, the hub model
                is skipped and only reachability repair is applied

        Returns:
            Graph in which every node is reachable from SELF_ID
        """
        graph = Graph()
        graph.add_node(self_person())

        members: List[Person] = []
        for person in people:
            if person.is_self:
                continue
            if graph.add_node(person):
                members.append(person)

        if explicit_edges is not None:
            self._apply_explicit_edges(graph, explicit_edges)
            hubs = [graph.nodes[e.target] for e in graph.out_edges(SELF_ID)]
        else:
            hubs = self._select_hubs(members)
            self._build_hub_model(graph, members, hubs)

        repairs = self._repair_reachability(graph, hubs)

        logger.info(
            "Synthesized graph: %d nodes, %d edges, %d hubs, %d repairs",
            len(graph), len(graph.edges), len(hubs), repairs
        )
        return graph

    # =========================================================================
    # HUB MODEL
    # =========================================================================

    def _select_hubs(self, members: List[Person]) -> List[Person]:
        """Hub subset, metadata-bearing candidates first."""
        if not members:
            return []
        count = min(len(members), max(1, round(len(members) * self._config.hub_ratio)))

        with_meta = [p for p in members if p.has_company or p.has_school]
        without_meta = [p for p in members if not (p.has_company or p.has_school)]
        self._rng.shuffle(with_meta)
        self._rng.shuffle(without_meta)

        hubs = with_meta[:count]
        if len(hubs) < count:
            hubs.extend(without_meta[:count - len(hubs)])
        return hubs

    def _build_hub_model(self, graph: Graph, members: List[Person], hubs: List[Person]) -> None:
        cfg = self._config
        hub_ids = {h.id for h in hubs}

        for hub in hubs:
            graph.connect(SELF_ID, hub.id, self._draw(cfg.hub_weight_range), REASON_HUB)

        others = [p for p in members if p.id not in hub_ids]
        for person in others:
            if self._rng.random() < cfg.direct_ratio:
                graph.connect(SELF_ID, person.id, self._draw(cfg.direct_weight_range), REASON_DIRECT)
                continue
            hub, reason, bonus = self._pick_hub(person, hubs)
            weight = min(1.0, self._draw(cfg.second_degree_weight_range) + bonus)
            graph.connect(hub.id, person.id, weight, reason)

        # Lateral edges start at nodes that already have an inbound edge,
        # so they never change reachability.
        if len(others) > 1:
            for person in others:
                if self._rng.random() < cfg.cross_peer_prob:
                    peer = self._rng.choice([p for p in others if p.id != person.id])
                    graph.connect(person.id, peer.id, self._draw(cfg.lateral_weight_range), REASON_PEER)

    def _pick_hub(self, person: Person, hubs: List[Person]) -> Tuple[Person, str, float]:
        """Hub sharing company, else school, else a uniformly random hub."""
        if person.has_company:
            company = person.company.lower()
            same = [h for h in hubs if h.has_company and h.company.lower() == company]
            if same:
                return self._rng.choice(same), REASON_SAME_COMPANY, self._config.affinity_bonus
        if person.has_school:
            school = person.school.lower()
            same = [h for h in hubs if h.has_school and h.school.lower() == school]
            if same:
                return self._rng.choice(same), REASON_SAME_SCHOOL, self._config.affinity_bonus
        return self._rng.choice(hubs), REASON_VIA_HUB, 0.0

    # =========================================================================
    # EXPLICIT EDGES
    # =========================================================================

    @staticmethod
    def _apply_explicit_edges(graph: Graph, edges: Sequence[Edge]) -> None:
        for edge in edges:
            if edge.source not in graph or edge.target not in graph:
                logger.debug("Ignoring edge %s with unknown endpoint", edge.key)
                continue
            if not graph.add_edge(edge):
                logger.debug("Ignoring duplicate edge %s", edge.key)

    # =========================================================================
    # REACHABILITY REPAIR
    # =========================================================================

    def _repair_reachability(self, graph: Graph, hubs: List[Person]) -> int:
        """Attach every unreached node to a hub (or the self node)."""
        repairs = 0
        for node_id in unreachable_nodes(graph):
            source = self._rng.choice(hubs).id if hubs else SELF_ID
            if source == node_id:
                source = SELF_ID
            graph.connect(source, node_id, self._draw(self._config.repair_weight_range), REASON_REPAIR)
            logger.debug("Repair edge %s -> %s", source, node_id)
            repairs += 1
        return repairs

    def _draw(self, weight_range: WeightRange) -> float:
        low, high = weight_range
        return self._rng.uniform(low, high)


def synthesize(
    people: Sequence[Person],
    config: Optional[SynthesisConfig] = None,
    rng: Optional[random.Random] = None,
    explicit_edges: Optional[Sequence[Edge]] = None
) -> Graph:
    """Module-level shortcut for GraphSynthesizer(config, rng).synthesize(people)."""
    return GraphSynthesizer(config, rng).synthesize(people, explicit_edges)
