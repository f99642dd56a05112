"""
Bundled sample network, used when no scraped records are available.
"""

from __future__ import annotations
from typing import Optional, Tuple

from ..contracts.graph import Edge, Graph, Person
from .synthesis import GraphSynthesizer, SynthesisConfig


SAMPLE_PEOPLE: Tuple[Person, ...] = (
    Person(id='a', name='Alex Chen', company='Stripe', school='UofT'),
    Person(id='b', name='Bianca Patel', company='Meta', school='Waterloo'),
    Person(id='d', name='Priya N.', company='Google', school='MIT', role='Manager'),
    Person(id='e', name='Sarah Kim', company='Apple', school='Stanford'),
    Person(id='f', name='Mike Johnson', company='Microsoft', school='MIT'),
)

SAMPLE_EDGES: Tuple[Edge, ...] = (
    Edge('me', 'a', 0.8, ('Direct connection',)),
    Edge('a', 'd', 0.6, ('Same school',)),
    Edge('me', 'b', 0.4, ('Same region',)),
    Edge('d', 'e', 0.7, ('Tech industry',)),
    Edge('e', 'f', 0.5, ('Tech industry',)),
    Edge('b', 'f', 0.3, ('Tech industry',)),
)


def sample_graph(config: Optional[SynthesisConfig] = None) -> Graph:
    return GraphSynthesizer(config).synthesize(SAMPLE_PEOPLE, explicit_edges=SAMPLE_EDGES)
