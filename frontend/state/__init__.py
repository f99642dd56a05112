"""
State Layer

Responsibility:
Per-session highlight and visibility state over the backend Graph.

PRINCIPLES:
1. Graph is read-only from here
2. No Rendering Logic
3. Never persisted
"""

from .view_state import ViewState, HighlightTag

__all__ = ['ViewState', 'HighlightTag']
