"""
View State

Session state for highlighting and visibility over one Graph.

STATE MACHINE:
==============
    Idle --set_single_path_target--> SinglePath(target)
    Idle --set_multi_path_company--> MultiPath(company)
    SinglePath <--------------------> MultiPath (entering one clears the other)
    any  --clear--------------------> Idle

Orthogonal flags: path_only_mode (visibility filter) and is_3d_mode
(presentation only).

GUARANTEES:
===========
1. active_target and active_company_key are never both set
2. The Graph is never mutated
3. Operations are total: unknown ids yield empty paths, never exceptions
4. An edge is hidden iff either endpoint is hidden
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, Optional, Set

from backend.contracts.base import SELF_ID
from backend.contracts.graph import Graph, MultiPathResult, PathResult
from backend.core.pathfinding import PathFinder


class HighlightTag(Enum):
    TARGET = "target"
    INTERMEDIATE = "intermediate"


class ViewState:
    """
    Mutable per-session view state. Never persisted.

    Mutated only through the operations below; every accessor returns an
    immutable snapshot.
    """

    def __init__(self, graph: Graph):
        self._graph = graph
        self._finder = PathFinder(graph)
        self._is_3d_mode = True
        self._path_only_mode = False
        self._reset_selection()

    def _reset_selection(self) -> None:
        self._active_target: Optional[str] = None
        self._active_company_key: Optional[str] = None
        self._current_path = PathResult.empty()
        self._current_multi_path: Optional[MultiPathResult] = None
        self._highlighted: Dict[str, HighlightTag] = {}
        self._hidden_nodes: FrozenSet[str] = frozenset()

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def set_single_path_target(self, target_id: str) -> PathResult:
        self._reset_selection()
        self._active_target = target_id
        self._current_path = self._finder.find_path(target_id)

        path = self._current_path.path
        for node_id in path:
            if node_id == SELF_ID:
                continue
            self._highlighted[node_id] = HighlightTag.INTERMEDIATE
        if path and path[-1] != SELF_ID:
            self._highlighted[path[-1]] = HighlightTag.TARGET

        self._recompute_visibility()
        return self._current_path

    def set_multi_path_company(self, company_name: str) -> MultiPathResult:
        self._reset_selection()
        self._active_company_key = company_name
        multi = self._finder.find_multi_path(company_name)
        self._current_multi_path = multi

        targets: Set[str] = set()
        for company_path in multi.paths:
            targets.add(company_path.target_id)
            for node_id in company_path.path:
                if node_id != SELF_ID:
                    self._highlighted.setdefault(node_id, HighlightTag.INTERMEDIATE)
        # An endpoint of one path stays a target even when it is
        # an intermediate of another.
        for node_id in targets:
            self._highlighted[node_id] = HighlightTag.TARGET

        self._recompute_visibility()
        return multi

    def clear(self) -> None:
        """Back to Idle: nothing highlighted, everything shown."""
        self._reset_selection()

    def toggle_path_only_mode(self) -> bool:
        self.set_path_only_mode(not self._path_only_mode)
        return self._path_only_mode

    def set_path_only_mode(self, enabled: bool) -> None:
        self._path_only_mode = bool(enabled)
        if self._path_only_mode:
            self._recompute_visibility()
        else:
            self._hidden_nodes = frozenset()

    def set_is_3d_mode(self, enabled: bool) -> None:
        self._is_3d_mode = bool(enabled)

    def _recompute_visibility(self) -> None:
        if not self._path_only_mode:
            self._hidden_nodes = frozenset()
            return
        visible = self.active_node_ids()
        if not visible:
            self._hidden_nodes = frozenset()
            return
        visible = visible | {SELF_ID}
        self._hidden_nodes = frozenset(n for n in self._graph.nodes if n not in visible)

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def active_target(self) -> Optional[str]:
        return self._active_target

    @property
    def active_company_key(self) -> Optional[str]:
        return self._active_company_key

    @property
    def current_path(self) -> PathResult:
        return self._current_path

    @property
    def current_multi_path(self) -> Optional[MultiPathResult]:
        return self._current_multi_path

    @property
    def highlighted(self) -> Dict[str, HighlightTag]:
        return dict(self._highlighted)

    @property
    def path_only_mode(self) -> bool:
        return self._path_only_mode

    @property
    def is_3d_mode(self) -> bool:
        return self._is_3d_mode

    @property
    def hidden_nodes(self) -> FrozenSet[str]:
        return self._hidden_nodes

    @property
    def hidden_edges(self) -> FrozenSet[str]:
        hidden = self._hidden_nodes
        if not hidden:
            return frozenset()
        return frozenset(e.key for e in self._graph.edges if e.source in hidden or e.target in hidden)

    @property
    def is_idle(self) -> bool:
        return self._active_target is None and self._active_company_key is None

    def is_edge_visible(self, key: str) -> bool:
        return key not in self.hidden_edges

    def is_node_visible(self, node_id: str) -> bool:
        return node_id not in self._hidden_nodes

    def active_node_ids(self) -> FrozenSet[str]:
        """Nodes on the active path(s), SELF_ID included when present."""
        if self._current_multi_path is not None:
            return self._current_multi_path.node_ids()
        return frozenset(self._current_path.path)

    def to_dict(self) -> dict:
        return {
            'active_target': self._active_target,
            'active_company_key': self._active_company_key,
            'current_path': self._current_path.to_dict(),
            'current_multi_path': (
                self._current_multi_path.to_dict() if self._current_multi_path is not None else None
            ),
            'highlighted': {k: v.value for k, v in self._highlighted.items()},
            'path_only_mode': self._path_only_mode,
            'hidden_nodes': sorted(self._hidden_nodes),
            'hidden_edges': sorted(self.hidden_edges),
            'is_3d_mode': self._is_3d_mode,
        }
