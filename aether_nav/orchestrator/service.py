"""
Navigation Service — the single composition root.

Wires the Event Recorder, Service Registry, Policy Enforcer, Adaptive Rules
Provider and Decision Engine (leaves first) and exposes one decision entry
point to the console.
"""

from functools import lru_cache
from typing import List, Optional

from aether_nav.config import Settings, load_settings
from aether_nav.decision.engine import DecisionEngine
from aether_nav.decision.reasoner import GeminiReasoner, Reasoner
from aether_nav.errors import ConfigurationError
from aether_nav.events.recorder import EventRecorder, EventSink, SimulatedEventSink
from aether_nav.logging_utils import get_logger
from aether_nav.models.identity import UserIdentityContext
from aether_nav.models.navigation import NavigationDecision
from aether_nav.models.rules import LoadSample
from aether_nav.policy.enforcer import (
    PolicyEnforcer,
    PolicyEvaluator,
    ProbabilisticPolicyEvaluator,
)
from aether_nav.registry.store import ServiceRegistry
from aether_nav.rules.provider import AdaptiveRulesProvider

logger = get_logger(__name__)

NAVIGATION_TASK = "Evaluate New Nav Eligibility"


class NavigationService:
    """Holds one instance of each component and delegates decisions to the engine."""

    def __init__(
        self,
        recorder: EventRecorder,
        registry: ServiceRegistry,
        policy_enforcer: PolicyEnforcer,
        rules_provider: AdaptiveRulesProvider,
        decision_engine: DecisionEngine,
    ):
        missing = [
            name for name, component in (
                ("recorder", recorder),
                ("registry", registry),
                ("policy_enforcer", policy_enforcer),
                ("rules_provider", rules_provider),
                ("decision_engine", decision_engine),
            )
            if component is None
        ]
        if missing:
            raise ConfigurationError(f"Navigation service components missing: {missing}")
        self.recorder = recorder
        self.registry = registry
        self.policy = policy_enforcer
        self.rules = rules_provider
        self.engine = decision_engine

    async def get_navigation_state(self, user: UserIdentityContext) -> NavigationDecision:
        """Decide whether ``user`` gets the new navigation experience."""
        return await self.engine.make_decision(NAVIGATION_TASK, user)

    @property
    def system_load(self) -> float:
        return self.rules.system_load

    @property
    def load_history(self) -> List[LoadSample]:
        return self.rules.load_history


def build_navigation_service(
    settings: Optional[Settings] = None,
    reasoner: Optional[Reasoner] = None,
    evaluator: Optional[PolicyEvaluator] = None,
    sink: Optional[EventSink] = None,
) -> NavigationService:
    """Construct every component in dependency order."""
    settings = settings or load_settings()

    recorder = EventRecorder(
        capacity=settings.events.capacity,
        sink=sink or SimulatedEventSink(
            settings.events.sink_base_url,
            max_latency_ms=settings.events.max_forward_latency_ms,
        ),
        forward_enabled=settings.events.forward_enabled,
    )
    registry = ServiceRegistry(recorder)
    rules_provider = AdaptiveRulesProvider(
        recorder,
        load_threshold=settings.rules.new_navigation_load_threshold,
        history_size=settings.rules.load_history_size,
    )
    policy_enforcer = PolicyEnforcer(
        recorder,
        evaluator=evaluator or ProbabilisticPolicyEvaluator(
            authorization_pass_rate=settings.policy.authorization_pass_rate,
            regional_pass_rate=settings.policy.regional_pass_rate,
        ),
        privileged_roles=settings.policy.privileged_roles,
        restricted_regions=settings.policy.restricted_regions,
        regulated_operations=settings.policy.regulated_operations,
    )
    engine = DecisionEngine(
        recorder,
        policy_enforcer,
        rules_provider,
        reasoner or GeminiReasoner(
            api_key=settings.reasoning.api_key,
            model=settings.reasoning.model,
        ),
        reasoning_timeout=settings.reasoning.timeout_seconds,
    )
    logger.info(
        "Navigation service ready: %d services, event capacity %d",
        len(registry.list_services()),
        recorder.capacity,
    )
    return NavigationService(recorder, registry, policy_enforcer, rules_provider, engine)


@lru_cache(maxsize=1)
def get_navigation_service() -> NavigationService:
    """The process-wide service, built on first use."""
    return build_navigation_service()
