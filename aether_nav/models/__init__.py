"""AetherNav data models."""

from aether_nav.models.events import EventDetails, EventRecord
from aether_nav.models.identity import UserIdentityContext
from aether_nav.models.navigation import (
    NavigationDecision,
    ReasoningRequest,
    ReasoningResult,
)
from aether_nav.models.rules import AdaptiveRuleSet, LoadSample
from aether_nav.models.services import ServiceCategory, ServiceRecord

__all__ = [
    "AdaptiveRuleSet",
    "EventDetails",
    "EventRecord",
    "LoadSample",
    "NavigationDecision",
    "ReasoningRequest",
    "ReasoningResult",
    "ServiceCategory",
    "ServiceRecord",
    "UserIdentityContext",
]
