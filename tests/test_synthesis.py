"""
Graph Synthesizer Tests
=======================

Connectivity, edge integrity and id uniqueness must hold for every
synthesized graph, whatever the input and random source.
"""

import random
import string
from collections import deque

import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

from backend.contracts.base import SELF_ID
from backend.contracts.graph import Person, UNKNOWN
from backend.core.synthesis import (
    GraphSynthesizer, SynthesisConfig, synthesize,
    REASON_HUB, REASON_REPAIR, REASON_SAME_COMPANY, REASON_SAME_SCHOOL,
)
from backend.core.topology import TopologyEngine
from ingestion import normalize
from tests.fixtures import edge, person


def bfs_from_self(graph):
    seen = {SELF_ID}
    queue = deque([SELF_ID])
    while queue:
        node = queue.popleft()
        for e in graph.out_edges(node):
            if e.target not in seen:
                seen.add(e.target)
                queue.append(e.target)
    return seen


# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

@composite
def people_lists(draw, max_size=30):
    """Distinct people with a mix of company / school metadata."""
    ids = draw(st.lists(
        st.text(alphabet=string.ascii_lowercase + string.digits, min_size=2, max_size=6),
        unique=True,
        max_size=max_size,
    ))
    people = []
    for pid in ids:
        if pid == SELF_ID:
            continue
        people.append(Person(
            id=pid,
            name=f"Person {pid}",
            company=draw(st.sampled_from(["Acme", "Globex", "Initech", UNKNOWN])),
            school=draw(st.sampled_from(["MIT", "Waterloo", UNKNOWN])),
        ))
    return people


@composite
def synthesis_configs(draw):
    return SynthesisConfig(
        hub_ratio=draw(st.floats(min_value=0.0, max_value=1.0)),
        direct_ratio=draw(st.floats(min_value=0.0, max_value=1.0)),
        cross_peer_prob=draw(st.floats(min_value=0.0, max_value=1.0)),
    )


# =============================================================================
# PROPERTY TESTS
# =============================================================================

@settings(max_examples=75)
@given(people_lists(), synthesis_configs(), st.integers(min_value=0, max_value=2**32))
def test_every_node_reachable_from_self(people, config, seed):
    graph = GraphSynthesizer(config, random.Random(seed)).synthesize(people)
    assert bfs_from_self(graph) == set(graph.nodes)


@settings(max_examples=75)
@given(people_lists(), synthesis_configs(), st.integers(min_value=0, max_value=2**32))
def test_edge_integrity(people, config, seed):
    graph = GraphSynthesizer(config, random.Random(seed)).synthesize(people)
    pairs = [(e.source, e.target) for e in graph.edges]
    assert len(pairs) == len(set(pairs))
    assert all(e.source != e.target for e in graph.edges)
    assert all(0.0 <= e.weight <= 1.0 for e in graph.edges)
    assert TopologyEngine(graph).edge_integrity_violations() == []


@given(people_lists(), st.integers(min_value=0, max_value=2**32))
def test_ids_unique_and_self_once(people, seed):
    graph = synthesize(people, rng=random.Random(seed))
    assert len(graph) == len(people) + 1
    assert list(graph.nodes).count(SELF_ID) == 1


@given(people_lists(max_size=15), st.integers(min_value=0, max_value=2**32))
def test_explicit_edges_still_repaired(people, seed):
    rng = random.Random(seed)
    ids = [p.id for p in people]
    explicit = []
    for _ in range(len(ids)):
        a, b = rng.choice(ids + [SELF_ID]), rng.choice(ids + [SELF_ID])
        if a != b:
            explicit.append(edge(a, b, rng.random()))
    graph = GraphSynthesizer(rng=random.Random(seed)).synthesize(people, explicit_edges=explicit)
    assert bfs_from_self(graph) == set(graph.nodes)


# =============================================================================
# EXAMPLES
# =============================================================================

class TestGraphSynthesizer:

    def test_no_people(self):
        graph = synthesize([])
        assert list(graph.nodes) == [SELF_ID]
        assert graph.edges == []

    def test_one_person(self):
        graph = synthesize([person('solo', 'Solo Person')], rng=random.Random(1))
        assert set(graph.nodes) == {SELF_ID, 'solo'}
        assert graph.has_edge(SELF_ID, 'solo')

    def test_three_profiles_without_companies(self):
        records = [
            {'name': 'Alice Adams', 'profile_url': 'https://www.linkedin.com/in/alice123'},
            {'name': 'Bob Brown', 'profile_url': 'https://www.linkedin.com/in/bob456'},
            {'name': 'Carol Chen', 'profile_url': 'https://www.linkedin.com/in/carol789'},
        ]
        for seed in range(20):
            graph = synthesize(normalize(records), rng=random.Random(seed))
            assert set(graph.nodes) == {SELF_ID, 'alice123', 'bob456', 'carol789'}
            assert bfs_from_self(graph) == set(graph.nodes)

    def test_self_in_input_is_ignored(self):
        graph = synthesize([Person(id=SELF_ID, name='Imposter'), person('p1', 'Pat One')])
        assert graph.nodes[SELF_ID].name == "You"
        assert len(graph) == 2

    def test_same_seed_same_graph(self):
        people = [person(f'p{i}', company=['Acme', 'Globex'][i % 2]) for i in range(20)]
        first = synthesize(people, SynthesisConfig(seed=42))
        second = synthesize(people, SynthesisConfig(seed=42))
        assert first.to_dict() == second.to_dict()

    def test_hubs_prefer_metadata(self):
        people = [person(f'm{i}', company='Acme') for i in range(4)]
        people += [person(f'x{i}') for i in range(6)]
        config = SynthesisConfig(direct_ratio=0.0, cross_peer_prob=0.0)
        graph = GraphSynthesizer(config, random.Random(3)).synthesize(people)

        hubs = [e.target for e in graph.out_edges(SELF_ID) if e.reasons == (REASON_HUB,)]
        assert len(hubs) == 4
        assert all(graph.nodes[h].has_company for h in hubs)

    def test_hubs_fall_back_to_metadata_free(self):
        people = [person(f'x{i}') for i in range(10)]
        config = SynthesisConfig(hub_ratio=0.3, direct_ratio=0.0)
        graph = GraphSynthesizer(config, random.Random(5)).synthesize(people)
        hubs = [e for e in graph.out_edges(SELF_ID) if e.reasons == (REASON_HUB,)]
        assert len(hubs) == 3

    def test_same_company_affinity(self):
        people = [person('p1', company='Acme'), person('p2', company='Acme')]
        config = SynthesisConfig(hub_ratio=0.5, direct_ratio=0.0, affinity_bonus=0.2)
        graph = GraphSynthesizer(config, random.Random(9)).synthesize(people)

        [hub_edge] = graph.out_edges(SELF_ID)
        other = 'p2' if hub_edge.target == 'p1' else 'p1'
        [affinity] = graph.out_edges(hub_edge.target)
        assert affinity.target == other
        assert affinity.reasons == (REASON_SAME_COMPANY,)
        assert affinity.weight >= 0.2

    def test_same_school_affinity(self):
        people = [person('p1', school='MIT'), person('p2', school='MIT')]
        config = SynthesisConfig(hub_ratio=0.5, direct_ratio=0.0)
        graph = GraphSynthesizer(config, random.Random(2)).synthesize(people)
        reasons = {e.reasons for e in graph.edges}
        assert (REASON_SAME_SCHOOL,) in reasons

    def test_all_direct(self):
        people = [person(f'p{i}') for i in range(8)]
        config = SynthesisConfig(direct_ratio=1.0, cross_peer_prob=0.0)
        graph = GraphSynthesizer(config, random.Random(0)).synthesize(people)
        assert all(e.source == SELF_ID for e in graph.edges)

    def test_explicit_edges_filtered(self):
        people = [person('a'), person('b')]
        explicit = [
            edge(SELF_ID, 'a', 0.8),
            edge(SELF_ID, 'a', 0.1),
            edge('a', 'ghost', 0.5),
        ]
        graph = GraphSynthesizer(rng=random.Random(0)).synthesize(people, explicit_edges=explicit)
        assert graph.out_edges(SELF_ID)[0].weight == 0.8
        assert 'ghost' not in graph
        [repair] = [e for e in graph.edges if e.target == 'b']
        assert repair.reasons == (REASON_REPAIR,)
        assert repair.source == 'a'


class TestSynthesisConfig:

    @pytest.mark.parametrize("kwargs", [
        {'hub_ratio': 1.5},
        {'direct_ratio': -0.1},
        {'cross_peer_prob': 2.0},
        {'hub_weight_range': (0.9, 0.1)},
        {'repair_weight_range': (0.2, 1.2)},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            SynthesisConfig(**kwargs)
