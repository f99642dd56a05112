"""
Path Finder
===========

Weight-maximizing best-first search from the self node.

SEARCH SEMANTICS:
=================
- The frontier holds partial paths with their accumulated weight
- The partial path with the greatest accumulated weight is expanded next
- A node is marked visited when dequeued; the first path to dequeue a
  node is kept even if an unexplored partial path could later reach it
  with more weight (greedy, not a global optimum)
- Equal weights dequeue in insertion order
- "No path" is an empty PathResult, never an exception
"""

from __future__ import annotations
from typing import List, Set, Tuple
import heapq
import itertools

from ..contracts.base import SELF_ID
from ..contracts.graph import CompanyPath, Graph, MultiPathResult, PathResult


def find_path(graph: Graph, target_id: str) -> PathResult:
    """Strongest chain of introductions from SELF_ID to `target_id`."""
    if target_id == SELF_ID:
        return PathResult(path=(SELF_ID,), edges=frozenset(), weight=0.0)
    if target_id not in graph or SELF_ID not in graph:
        return PathResult.empty()

    counter = itertools.count()
    # (-accumulated weight, insertion order, path)
    frontier: List[Tuple[float, int, Tuple[str, ...], float]] = [
        (-0.0, next(counter), (SELF_ID,), 0.0)
    ]
    visited: Set[str] = set()

    while frontier:
        _, _, path, weight = heapq.heappop(frontier)
        node = path[-1]
        if node in visited:
            continue
        visited.add(node)

        if node == target_id:
            return PathResult.from_path(path, weight)

        for edge in graph.out_edges(node):
            if edge.target in visited:
                continue
            total = weight + edge.weight
            heapq.heappush(frontier, (-total, next(counter), path + (edge.target,), total))

    return PathResult.empty()


def find_multi_path(graph: Graph, company_filter: str) -> MultiPathResult:
    """
    Paths to every person whose company contains `company_filter`.

    Case-insensitive substring match; results sorted by descending weight.
    A blank or whitespace-only filter matches nobody and returns an empty
    result, although "" is a substring of every company name.
    """
    needle = (company_filter or "").strip().lower()
    if not needle:
        return MultiPathResult.empty(company_filter or "")

    matches = [p for p in graph.people() if p.has_company and needle in p.company.lower()]
    if not matches:
        return MultiPathResult.empty(company_filter)

    paths = []
    for person in matches:
        result = find_path(graph, person.id)
        if not result.is_empty:
            paths.append(CompanyPath(target_id=person.id, target_name=person.name, result=result))

    paths.sort(key=lambda p: p.weight, reverse=True)
    all_edges = frozenset().union(*(p.result.edges for p in paths)) if paths else frozenset()
    return MultiPathResult(company_name=company_filter, paths=tuple(paths), all_edges=all_edges)


class PathFinder:
    """Path search bound to one graph."""

    def __init__(self, graph: Graph):
        self._graph = graph

    def find_path(self, target_id: str) -> PathResult:
        return find_path(self._graph, target_id)

    def find_multi_path(self, company_filter: str) -> MultiPathResult:
        return find_multi_path(self._graph, company_filter)
