"""Adaptive Rule Set — transient configuration snapshot derived from system load."""

from typing import Dict

from pydantic import BaseModel, Field

NEW_NAVIGATION_FLAG = "new-navigation"
AB_TESTING_FLAG = "ab-testing"
DEFAULT_ROUTE = "default"


class AdaptiveRuleSet(BaseModel):
    """Recomputed for every decision request; never persisted."""

    feature_flags: Dict[str, bool]
    path_priorities: Dict[str, float]
    observability_enabled: bool
    security_check_enabled: bool
    dynamic_path_enabled: bool
    ai_based_routing: Dict[str, str]

    @property
    def new_navigation_enabled(self) -> bool:
        return self.feature_flags.get(NEW_NAVIGATION_FLAG, False)


class LoadSample(BaseModel):
    """A single system-load reading, kept for telemetry display."""

    timestamp: str
    load: float = Field(ge=0.0, le=1.0)
