"""
Path Summaries

Responsibility:
Textual rendering of the active path(s) for the info panel.
No business logic: ids are only looked up, never resolved.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from backend.contracts.graph import Graph, MultiPathResult, PathResult
from frontend.state import ViewState

ARROW = " → "


@dataclass(frozen=True)
class PathSummaryViewModel:
    """One displayable path line."""
    target_id: str
    target_name: str
    text: str
    hops: int
    weight: float

    def to_dict(self) -> dict:
        return {
            'target_id': self.target_id,
            'target_name': self.target_name,
            'text': self.text,
            'hops': self.hops,
            'weight': round(self.weight, 3),
        }


def display_name(graph: Graph, node_id: str) -> str:
    person = graph.get(node_id)
    return person.name if person is not None else node_id


def path_text(graph: Graph, result: PathResult) -> str:
    return ARROW.join(display_name(graph, n) for n in result.path)


def summarize_path(graph: Graph, result: PathResult) -> Optional[PathSummaryViewModel]:
    if result.is_empty:
        return None
    target = result.target_id
    return PathSummaryViewModel(
        target_id=target,
        target_name=display_name(graph, target),
        text=path_text(graph, result),
        hops=len(result.path) - 1,
        weight=result.weight,
    )


def summarize_multi_path(graph: Graph, multi: MultiPathResult) -> Tuple[PathSummaryViewModel, ...]:
    return tuple(
        PathSummaryViewModel(
            target_id=p.target_id,
            target_name=p.target_name,
            text=path_text(graph, p.result),
            hops=len(p.path) - 1,
            weight=p.weight,
        )
        for p in multi.paths
    )


def summarize_view(view: ViewState) -> Tuple[PathSummaryViewModel, ...]:
    """Lines for whichever mode is active; empty when idle."""
    if view.current_multi_path is not None:
        return summarize_multi_path(view.graph, view.current_multi_path)
    single = summarize_path(view.graph, view.current_path)
    return (single,) if single is not None else ()
