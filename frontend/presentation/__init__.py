"""
Presentation Layer

Responsibility:
Display-ready text for pure UI components.
"""

from .summaries import (
    PathSummaryViewModel, display_name, path_text,
    summarize_path, summarize_multi_path, summarize_view,
)

__all__ = [
    'PathSummaryViewModel', 'display_name', 'path_text',
    'summarize_path', 'summarize_multi_path', 'summarize_view',
]
