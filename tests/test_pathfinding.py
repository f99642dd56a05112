"""
Path Finder Tests
=================

Weight-maximizing best-first search and its multi-target variant.
"""

import random

from hypothesis import given, settings, strategies as st

from backend.contracts.base import SELF_ID
from backend.contracts.graph import Graph, self_person
from backend.core.pathfinding import PathFinder, find_multi_path, find_path
from backend.core.sample import sample_graph
from backend.core.synthesis import synthesize
from tests.fixtures import acme_graph, build_graph, edge, person


class TestFindPath:

    def test_self_is_trivial_path(self):
        result = find_path(acme_graph(), SELF_ID)
        assert result.path == (SELF_ID,)
        assert result.weight == 0.0
        assert result.edges == frozenset()

    def test_unknown_target_is_empty(self):
        result = find_path(acme_graph(), 'nobody')
        assert result.is_empty
        assert result.weight == 0.0
        assert result.edges == frozenset()

    def test_unreachable_target_is_empty(self):
        graph = build_graph([person('a'), person('island')], [edge(SELF_ID, 'a', 0.5)])
        assert find_path(graph, 'island').is_empty

    def test_graph_without_self_is_empty(self):
        graph = Graph()
        graph.add_node(person('a'))
        assert find_path(graph, 'a').is_empty

    def test_sample_graph_path(self):
        result = find_path(sample_graph(), 'f')
        assert result.path == (SELF_ID, 'a', 'd', 'e', 'f')
        assert abs(result.weight - 2.6) < 1e-9
        assert result.edges == {'me-a', 'a-d', 'd-e', 'e-f'}

    def test_greedy_keeps_first_dequeued_path(self):
        # me-y-z-t carries 1.9 but me-x-t (1.0) is dequeued first.
        graph = build_graph(
            [person('x'), person('y'), person('z'), person('t')],
            [
                edge(SELF_ID, 'x', 0.9),
                edge(SELF_ID, 'y', 0.1),
                edge('x', 't', 0.1),
                edge('y', 'z', 0.9),
                edge('z', 't', 0.9),
            ],
        )
        result = find_path(graph, 't')
        assert result.path == (SELF_ID, 'x', 't')
        assert abs(result.weight - 1.0) < 1e-9

    def test_equal_weights_break_by_insertion_order(self):
        graph = build_graph(
            [person('a'), person('b'), person('t')],
            [
                edge(SELF_ID, 'a', 0.5),
                edge(SELF_ID, 'b', 0.5),
                edge('b', 't', 0.5),
                edge('a', 't', 0.5),
            ],
        )
        assert find_path(graph, 't').path == (SELF_ID, 'a', 't')

    @settings(max_examples=50)
    @given(st.integers(min_value=1, max_value=25), st.integers(min_value=0, max_value=2**32))
    def test_returned_edges_exist(self, size, seed):
        people = [person(f'p{i}', company=['Acme', 'Globex'][i % 2]) for i in range(size)]
        graph = synthesize(people, rng=random.Random(seed))
        keys = graph.edge_keys()
        for p in people:
            result = find_path(graph, p.id)
            assert not result.is_empty
            assert result.path[0] == SELF_ID and result.path[-1] == p.id
            assert result.edges <= keys
            assert len(result.edges) == len(result.path) - 1


class TestFindMultiPath:

    def test_two_people_at_one_company(self):
        result = find_multi_path(acme_graph(), 'acme')
        assert [p.target_id for p in result.paths] == ['a1', 'a2']
        assert [p.weight for p in result.paths] == sorted((p.weight for p in result.paths), reverse=True)
        assert result.all_edges == {'me-h1', 'h1-a1', 'me-h2', 'h2-a2'}
        assert result.paths[0].target_name == 'Alice Smith'

    def test_no_match_is_empty(self):
        result = find_multi_path(acme_graph(), 'umbrella')
        assert result.is_empty
        assert result.paths == ()
        assert result.all_edges == frozenset()

    def test_blank_filter_is_empty(self):
        assert find_multi_path(acme_graph(), '   ').is_empty

    def test_unreachable_matches_dropped(self):
        graph = build_graph(
            [person('a', company='Acme'), person('b', company='Acme')],
            [edge(SELF_ID, 'a', 0.4)],
        )
        result = find_multi_path(graph, 'Acme')
        assert [p.target_id for p in result.paths] == ['a']

    def test_self_never_matched(self):
        graph = build_graph([], [])
        assert graph.nodes[SELF_ID] == self_person()
        assert find_multi_path(graph, 'your company').is_empty

    def test_node_ids(self):
        result = PathFinder(acme_graph()).find_multi_path('ACME')
        assert result.node_ids() == {SELF_ID, 'h1', 'h2', 'a1', 'a2'}
