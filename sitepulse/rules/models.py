"""
Tracking rules.

Every tunable the engine uses, with defaults equal to the production site's
constants. A rules file only needs the keys it overrides.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

VariantName = Literal["europe", "asia", "americas", "default"]


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ReadingRules(_Section):
    milestone_step: int = Field(default=10, gt=0, le=100)
    completion_threshold: int = Field(default=90, gt=0, le=100)
    words_per_minute: int = Field(default=200, gt=0)


class EngagementRules(_Section):
    scroll_depth_step: int = Field(default=25, gt=0, le=100)
    code_preview_length: int = Field(default=50, gt=0)
    link_text_length: int = Field(default=50, gt=0)
    download_extensions: list[str] = Field(
        default_factory=lambda: ["pdf", "doc", "docx", "zip", "mp4", "mp3"]
    )


class BackgroundRules(_Section):
    # Counts strictly above each threshold reach the category
    intermediate_above: int = 5
    advanced_above: int = 10
    expert_above: int = 20

    @model_validator(mode="after")
    def _ordered(self) -> "BackgroundRules":
        if not (0 <= self.intermediate_above < self.advanced_above < self.expert_above):
            raise ValueError("background thresholds must be strictly increasing")
        return self


class MarketRule(_Section):
    patterns: list[str]
    market: str
    region: str


class GeoRules(_Section):
    markets: list[MarketRule] = Field(
        default_factory=lambda: [
            MarketRule(
                patterns=["America/New_York", "America/Chicago"],
                market="north_america_east",
                region="US",
            ),
            MarketRule(
                patterns=["America/Los_Angeles", "America/Denver"],
                market="north_america_west",
                region="US",
            ),
            MarketRule(patterns=["Europe/London"], market="europe_uk", region="UK"),
            MarketRule(patterns=["Europe/"], market="europe_continental", region="EU"),
            MarketRule(patterns=["Asia/"], market="asia_pacific", region="APAC"),
        ]
    )
    variants: dict[str, VariantName] = Field(
        default_factory=lambda: {
            "Europe/": "europe",
            "Asia/": "asia",
            "America/": "americas",
        }
    )


class PerformanceRules(_Section):
    settle_delay_seconds: float = Field(default=1.0, ge=0)
    vital_entry_types: list[str] = Field(
        default_factory=lambda: [
            "paint",
            "largest-contentful-paint",
            "first-input",
            "layout-shift",
        ]
    )


class BootstrapRules(_Section):
    send_page_view: bool = True
    site_speed_sample_rate: int = 10
    anonymize_ip: bool = True
    respect_dnt: bool = True
    enhanced_ecommerce: bool = True
    dimensions: dict[str, str] = Field(
        default_factory=lambda: {
            "dimension1": "technical_background",
            "dimension2": "content_category",
            "dimension3": "geographic_market",
            "dimension4": "traffic_source",
            "dimension5": "user_journey_stage",
        }
    )
    vital_metrics: dict[str, str] = Field(
        default_factory=lambda: {
            "metric_1": "cumulative_layout_shift",
            "metric_2": "first_contentful_paint",
            "metric_3": "first_input_delay",
            "metric_4": "largest_contentful_paint",
        }
    )


class TrackingRules(_Section):
    reading: ReadingRules = Field(default_factory=ReadingRules)
    engagement: EngagementRules = Field(default_factory=EngagementRules)
    background: BackgroundRules = Field(default_factory=BackgroundRules)
    geo: GeoRules = Field(default_factory=GeoRules)
    performance: PerformanceRules = Field(default_factory=PerformanceRules)
    bootstrap: BootstrapRules = Field(default_factory=BootstrapRules)


DEFAULT_RULES = TrackingRules()
