"""
Environment configuration.

The tracking identifier is the only switch: without it every component is
a no-op. Rules are optional tunables; a missing path means defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sitepulse.rules.loader import load_rules
from sitepulse.rules.models import DEFAULT_RULES, TrackingRules

TRACKING_ID_ENV = "SITEPULSE_TRACKING_ID"
RULES_PATH_ENV = "SITEPULSE_RULES_PATH"


@dataclass(frozen=True)
class Settings:
    tracking_id: str = ""
    rules_path: Path | None = None

    @property
    def tracking_enabled(self) -> bool:
        return bool(self.tracking_id)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    rules_path = env.get(RULES_PATH_ENV, "").strip()
    return Settings(
        tracking_id=env.get(TRACKING_ID_ENV, "").strip(),
        rules_path=Path(rules_path) if rules_path else None,
    )


def load_tracking_rules(settings: Settings) -> TrackingRules:
    """
    Rules for this deployment.
    Raises FileNotFoundError / ValueError for a configured but broken file.
    """
    if settings.rules_path is None:
        return DEFAULT_RULES
    return load_rules(settings.rules_path)
