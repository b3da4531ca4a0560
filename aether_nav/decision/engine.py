"""
Decision Engine — policy-gated navigation decision state machine.

States:
  INIT → AUDIT → (DENIED | REASONING) → COMPLETE

  INIT       record NAV_DS_INIT
  AUDIT      authorization + compliance checks (concurrent) and a fresh rule set
  DENIED     either check failed: fail closed, no reasoning call
  REASONING  consult the reasoning capability; AI approval AND the adaptive
             new-navigation flag decide. Any reasoning failure (including a
             timeout) falls back to the adaptive flag alone.

The engine keeps no state between calls.
"""

import asyncio
from typing import Optional

from aether_nav.decision.reasoner import Reasoner
from aether_nav.errors import ConfigurationError
from aether_nav.events.recorder import EventRecorder
from aether_nav.logging_utils import get_logger
from aether_nav.models.events import (
    NAV_DS_COMPLETE,
    NAV_DS_DENIED,
    NAV_DS_FALLBACK,
    NAV_DS_INIT,
)
from aether_nav.models.identity import UserIdentityContext
from aether_nav.models.navigation import NavigationDecision, ReasoningRequest
from aether_nav.models.rules import DEFAULT_ROUTE, AdaptiveRuleSet
from aether_nav.policy.enforcer import (
    ACCESS_NEW_NAVIGATION,
    NAVIGATION_DATA_PROCESSING,
    PolicyEnforcer,
)
from aether_nav.rules.provider import AdaptiveRulesProvider

logger = get_logger(__name__)

DENIED_CONFIDENCE = 0.95
REASONED_CONFIDENCE = 0.85
FALLBACK_CONFIDENCE = 0.5

DENIED_DESCRIPTION = "Security or Compliance policy denied new navigation access."
FALLBACK_DESCRIPTION = "AI reasoning failed. Defaulting to local heuristics."


class DecisionEngine:
    """Composes policy, adaptive rules and external reasoning into one decision."""

    def __init__(
        self,
        recorder: EventRecorder,
        policy_enforcer: PolicyEnforcer,
        rules_provider: AdaptiveRulesProvider,
        reasoner: Reasoner,
        reasoning_timeout: Optional[float] = 15.0,
    ):
        if recorder is None or policy_enforcer is None or rules_provider is None:
            raise ConfigurationError("Decision engine components must be provided")
        if reasoner is None:
            raise ConfigurationError("Reasoning capability must be provided")
        self.recorder = recorder
        self.policy = policy_enforcer
        self.rules = rules_provider
        self.reasoner = reasoner
        self.reasoning_timeout = reasoning_timeout

    async def make_decision(
        self, task: str, user: UserIdentityContext
    ) -> NavigationDecision:
        """Run the full state machine for one request."""
        # INIT
        self.recorder.record(NAV_DS_INIT, {"userId": user.user_id})

        # AUDIT
        authorized, compliant = await asyncio.gather(
            self.policy.check_authorization(ACCESS_NEW_NAVIGATION, user),
            self.policy.check_compliance(NAVIGATION_DATA_PROCESSING, user.locale),
        )
        rule_set = await self.rules.adapt_and_predict({"userId": user.user_id})
        load = self.rules.system_load

        if not (authorized and compliant):
            return self._deny(authorized, compliant, load)

        # REASONING
        request = ReasoningRequest(
            task=task,
            roles=user.roles,
            locale=user.locale,
            current_load=load,
        )
        try:
            result = await asyncio.wait_for(
                self.reasoner.reason(request), timeout=self.reasoning_timeout
            )
        except Exception as e:
            return self._fallback(rule_set, e)

        active = result.decision and rule_set.new_navigation_enabled
        decision = NavigationDecision(
            is_new_experience_active=active,
            description=result.reasoning,
            suggested_path=self._suggested_path(rule_set, active),
            confidence_score=REASONED_CONFIDENCE,
            decision_context={"load": load, "auth": "GRANTED"},
        )
        self.recorder.record(NAV_DS_COMPLETE, decision.model_dump(mode="json"))
        return decision

    def _deny(self, authorized: bool, compliant: bool, load: float) -> NavigationDecision:
        decision = NavigationDecision(
            is_new_experience_active=False,
            description=DENIED_DESCRIPTION,
            confidence_score=DENIED_CONFIDENCE,
            decision_context={
                "load": load,
                "auth": "GRANTED" if authorized else "DENIED",
                "compliance": "PASSED" if compliant else "FAILED",
            },
        )
        self.recorder.record(NAV_DS_DENIED, decision.model_dump(mode="json"))
        return decision

    def _fallback(self, rule_set: AdaptiveRuleSet, error: Exception) -> NavigationDecision:
        reason = f"{type(error).__name__}: {error}" if str(error) else type(error).__name__
        logger.warning("Reasoning capability failed, using local heuristics: %s", reason)

        active = rule_set.new_navigation_enabled
        decision = NavigationDecision(
            is_new_experience_active=active,
            description=FALLBACK_DESCRIPTION,
            suggested_path=self._suggested_path(rule_set, active),
            confidence_score=FALLBACK_CONFIDENCE,
        )
        self.recorder.record(NAV_DS_FALLBACK, {"error": reason})
        return decision

    def _suggested_path(self, rule_set: AdaptiveRuleSet, active: bool) -> Optional[str]:
        if not active:
            return None
        return rule_set.ai_based_routing.get(DEFAULT_ROUTE)
