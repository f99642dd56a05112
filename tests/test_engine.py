"""
Network Explorer Tests
======================

End-to-end session flow over the bundled sample graph: loading,
decision handling, free-text routing and quick search.
"""

import asyncio
import random

import pytest

from adapter.contracts import RoutingDecision
from adapter.providers import MockProvider, ProviderErrorCode
from backend.contracts.base import SELF_ID
from backend.core.synthesis import SynthesisConfig
from backend.engine import BackendConfig, NetworkExplorer, OutcomeKind
from frontend.state import HighlightTag
from tests.fixtures import RAW_RECORDS, RaisingProvider, acme_graph


@pytest.fixture
def explorer():
    return NetworkExplorer(rng=random.Random(0))


class TestLoading:

    def test_starts_on_sample_graph(self, explorer):
        assert set(explorer.graph.nodes) == {SELF_ID, 'a', 'b', 'd', 'e', 'f'}
        assert len(explorer.graph.edges) == 6
        assert explorer.metrics().fully_reachable

    def test_load_records(self, explorer):
        explorer.view.set_single_path_target('f')
        report = explorer.load_records(RAW_RECORDS + [{}])
        assert report.success_count == 3
        assert report.excluded_count == 1
        assert set(explorer.graph.nodes) == {SELF_ID, 'janedoe1', 'jsmith', 'n2'}
        assert explorer.view.is_idle
        assert explorer.last_report is report

    def test_empty_records_fall_back_to_sample(self, explorer):
        explorer.load_graph(acme_graph())
        explorer.load_records([])
        assert 'f' in explorer.graph

    def test_load_graph(self, explorer):
        explorer.load_graph(acme_graph())
        assert explorer.find_path('a1').path == (SELF_ID, 'h1', 'a1')
        assert explorer.view.graph is explorer.graph

    def test_config_defaults(self):
        config = BackendConfig(synthesis=SynthesisConfig(seed=3))
        assert config.normalizer is not None
        assert config.router.timeout_seconds == 10.0
        assert config.synthesis.seed == 3

    def test_seeded_sessions_match(self):
        first = NetworkExplorer(BackendConfig(synthesis=SynthesisConfig(seed=11)))
        second = NetworkExplorer(BackendConfig(synthesis=SynthesisConfig(seed=11)))
        first.load_records(RAW_RECORDS)
        second.load_records(RAW_RECORDS)
        assert first.graph.to_dict() == second.graph.to_dict()


class TestHandleDecision:

    def test_path_to_named_person(self, explorer):
        outcome = explorer.handle_decision(RoutingDecision(action='path', target_name='Sarah'))
        assert outcome.kind == OutcomeKind.SINGLE_PATH
        assert outcome.target.id == 'e'
        assert outcome.path.path == (SELF_ID, 'a', 'd', 'e')
        assert explorer.view.active_target == 'e'
        assert explorer.view.highlighted['e'] == HighlightTag.TARGET

    def test_company_when_no_person(self, explorer):
        decision = RoutingDecision(action='path', target_name='Zed Quinn', query='intro to someone at Meta')
        outcome = explorer.handle_decision(decision)
        assert outcome.kind == OutcomeKind.MULTI_PATH
        assert outcome.multi_path.company_name == 'Meta'
        assert explorer.view.active_company_key == 'Meta'

    def test_path_falls_through_to_search(self, explorer):
        decision = RoutingDecision(action='path', target_name='Zed Quinn', query='intro to Zed')
        outcome = explorer.handle_decision(decision)
        assert outcome.kind == OutcomeKind.SEARCH
        assert outcome.search_plan is not None
        assert explorer.view.is_idle

    def test_search_leaves_view_alone(self, explorer):
        explorer.view.set_single_path_target('f')
        decision = RoutingDecision(action='search', keywords=('rust', 'senior'), query='senior rust people')
        outcome = explorer.handle_decision(decision)
        assert outcome.kind == OutcomeKind.SEARCH
        assert outcome.search_plan.seniorities == ('senior',)
        assert explorer.view.active_target == 'f'
        assert outcome.to_dict()['search_plan']['linkedinQuery'] == 'rust senior'


class TestAsk:

    def test_without_provider_uses_fallback(self, explorer):
        outcome = asyncio.run(explorer.ask("Can you introduce me to Sarah?"))
        assert outcome.kind == OutcomeKind.SINGLE_PATH
        assert outcome.target.name == 'Sarah Kim'
        assert outcome.decision.reason == 'local keyword heuristic'

    def test_with_provider(self, explorer):
        outcome = asyncio.run(explorer.ask("warm intro to mike johnson please", provider=MockProvider()))
        assert outcome.kind == OutcomeKind.SINGLE_PATH
        assert outcome.target.id == 'f'
        assert outcome.decision.reason == 'mock decision'

    def test_raising_provider_degrades(self, explorer):
        outcome = asyncio.run(explorer.ask("introduce me to Priya", provider=RaisingProvider()))
        assert outcome.kind == OutcomeKind.SINGLE_PATH
        assert outcome.target.id == 'd'
        assert outcome.decision.reason == 'local keyword heuristic'

    def test_failing_provider_degrades(self):
        explorer = NetworkExplorer(provider=MockProvider(failure_mode=ProviderErrorCode.NETWORK_ERROR))
        outcome = asyncio.run(explorer.ask("find staff designers in Lisbon"))
        assert outcome.kind == OutcomeKind.SEARCH
        assert outcome.search_plan.seniorities == ('staff',)


class TestQuickSearch:

    def test_name(self, explorer):
        outcome = explorer.quick_search('priya')
        assert outcome.kind == OutcomeKind.SINGLE_PATH
        assert outcome.path.path == (SELF_ID, 'a', 'd')

    def test_company(self, explorer):
        outcome = explorer.quick_search('micro')
        assert outcome.kind == OutcomeKind.MULTI_PATH
        assert [p.target_id for p in outcome.multi_path.paths] == ['f']

    def test_no_match(self, explorer):
        outcome = explorer.quick_search('umbrella')
        assert outcome.kind == OutcomeKind.NO_MATCH
        assert 'Alex Chen' in outcome.available_names
        assert 'Stripe' in outcome.available_companies

    def test_blank(self, explorer):
        assert explorer.quick_search('  ').kind == OutcomeKind.NO_MATCH


class TestAnalysis:

    def test_largest_industry_cluster(self, explorer):
        cluster = explorer.largest_industry_cluster()
        assert cluster.industry == 'Software Engineering'
        assert cluster.count == 5
        assert cluster.member_ids == ('a', 'b', 'd', 'e', 'f')

    def test_resolvers(self, explorer):
        assert explorer.resolve_target(target_name='Mike Johnson').id == 'f'
        assert explorer.resolve_best_company(free_text='anyone at google?') == 'Google'
        assert explorer.find_company_paths('apple').paths[0].target_id == 'e'
