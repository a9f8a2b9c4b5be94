"""
site-pulse: behavioral analytics for a marketing/blog site.

Observes scroll, click, navigation and timing signals within one browsing
session and forwards semantic events to an external analytics sink.
"""

__version__ = "0.1.0"
