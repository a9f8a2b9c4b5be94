"""
Interactions component - Forms, search and content views.
"""

from .component import (
    CONTENT_VIEW_KINDS,
    CodeSnippetTracker,
    FormTracker,
    SearchTracker,
    snippet_label,
    track_content_view,
)

__all__ = [
    "CONTENT_VIEW_KINDS",
    "CodeSnippetTracker",
    "FormTracker",
    "SearchTracker",
    "snippet_label",
    "track_content_view",
]
