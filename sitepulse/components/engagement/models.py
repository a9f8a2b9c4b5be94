from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_HOST = "unknown"


@dataclass(frozen=True)
class LinkClassification:
    """How an anchor click relates to the current document."""

    href: str
    destination_domain: str
    is_external: bool
    is_download: bool
