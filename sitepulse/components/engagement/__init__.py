"""
Engagement component - Page-level interaction observers.
"""

from .component import (
    CodeInteractionObserver,
    EngagementObservers,
    ExternalLinkObserver,
    ScrollDepthObserver,
    classify_link,
    download_pattern,
    is_code_target,
    is_download,
    next_depth_threshold,
    resolve_hostname,
)
from .models import UNKNOWN_HOST, LinkClassification

__all__ = [
    # Observers
    "CodeInteractionObserver",
    "EngagementObservers",
    "ExternalLinkObserver",
    "ScrollDepthObserver",
    # Pure functions
    "classify_link",
    "download_pattern",
    "is_code_target",
    "is_download",
    "next_depth_threshold",
    "resolve_hostname",
    # Models
    "LinkClassification",
    "UNKNOWN_HOST",
]
