"""
Core Graph Engine

RESPONSIBILITY: Graph synthesis, path search, structural analysis
ALLOWED INPUTS: Canonical Person lists from the ingestion layer
OUTPUTS: Graph, PathResult, MultiPathResult, GraphMetrics

WHAT THIS LAYER MUST NOT DO:
============================
- Parse raw records (ingestion layer's job)
- Hold session highlight / visibility state (frontend state's job)
- Call external decision collaborators (adapter's job)
- Mutate a Graph after synthesis

BOUNDARY ENFORCEMENT:
=====================
- Consumes ONLY contract types
- Randomness is injected, never module-global
"""

from .synthesis import GraphSynthesizer, SynthesisConfig, synthesize
from .pathfinding import PathFinder, find_path, find_multi_path
from .topology import TopologyEngine, GraphMetrics, IndustryCluster, unreachable_nodes
from .sample import sample_graph

__all__ = [
    'GraphSynthesizer', 'SynthesisConfig', 'synthesize',
    'PathFinder', 'find_path', 'find_multi_path',
    'TopologyEngine', 'GraphMetrics', 'IndustryCluster', 'unreachable_nodes',
    'sample_graph',
]
