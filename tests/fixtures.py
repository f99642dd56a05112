"""
Test Fixtures

Hand-built graphs and raw records for deterministic testing.
All fixtures are explicit - no random generation.
"""

from typing import Sequence, Tuple

from adapter.providers import DecisionProvider
from backend.contracts.base import SELF_ID
from backend.contracts.graph import Edge, Graph, Person, UNKNOWN, self_person


def person(pid: str, name: str = None, company: str = UNKNOWN, school: str = UNKNOWN) -> Person:
    return Person(id=pid, name=name or pid.upper(), company=company, school=school)


def edge(source: str, target: str, weight: float, reason: str = "test") -> Edge:
    return Edge(source=source, target=target, weight=weight, reasons=(reason,))


def build_graph(people: Sequence[Person], edges: Sequence[Edge]) -> Graph:
    """Graph with exactly these nodes and edges; no repair, no hubs."""
    graph = Graph()
    graph.add_node(self_person())
    for p in people:
        graph.add_node(p)
    for e in edges:
        graph.add_edge(e)
    return graph


# =============================================================================
# TWO PEOPLE AT ONE COMPANY, REACHED THROUGH DIFFERENT HUBS
# =============================================================================

ACME_PEOPLE: Tuple[Person, ...] = (
    person('h1', 'Hank Hill', company='Initech'),
    person('h2', 'Gina Lin', company='Globex'),
    person('a1', 'Alice Smith', company='Acme'),
    person('a2', 'Arun Rao', company='Acme Corp'),
)

ACME_EDGES: Tuple[Edge, ...] = (
    edge(SELF_ID, 'h1', 0.9),
    edge(SELF_ID, 'h2', 0.5),
    edge('h1', 'a1', 0.6),
    edge('h2', 'a2', 0.7),
)


def acme_graph() -> Graph:
    return build_graph(ACME_PEOPLE, ACME_EDGES)


# =============================================================================
# RAW RECORDS
# =============================================================================

RAW_RECORDS = [
    {
        'full_name': 'Jane Doe • 2nd',
        'description': 'Software Engineer at Google',
        'profile_url': 'https://www.linkedin.com/in/jane-doe-12345/',
        'education': [{'school': 'University of Toronto'}],
        'location': 'Toronto, Ontario, Canada',
    },
    {
        'first_name': 'John',
        'last_name': 'Smith',
        'current_company': 'Stripe',
        'current_title': 'Product Manager',
        'profile_url': 'https://www.linkedin.com/in/jsmith/',
        'description': 'Connected on March 3, 2024',
    },
    {
        'name': 'Maria Garcia',
        'description': 'Meta • Data Scientist',
        'profile_pic': 'https://img.example.com/maria.png',
    },
]


class RaisingProvider(DecisionProvider):
    """Provider whose client raises instead of returning a response."""

    async def decide(self, request):
        raise ConnectionError("network down")

    @property
    def provider_id(self) -> str:
        return "raising"
