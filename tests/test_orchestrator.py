"""Tests for the Navigation Service composition root."""

import asyncio

import pytest

from aether_nav.errors import ConfigurationError
from aether_nav.events.recorder import SimulatedEventSink
from aether_nav.models.events import NAV_DS_COMPLETE, NAV_DS_INIT
from aether_nav.models.identity import UserIdentityContext
from aether_nav.orchestrator.service import (
    NAVIGATION_TASK,
    NavigationService,
    build_navigation_service,
    get_navigation_service,
)
from tests.doubles import FixedPolicyEvaluator, StubReasoner


class TestBuildNavigationService:
    def test_components_share_one_recorder(self, quiet_settings):
        service = build_navigation_service(quiet_settings, reasoner=StubReasoner())

        assert service.registry.recorder is service.recorder
        assert service.policy.recorder is service.recorder
        assert service.rules.recorder is service.recorder
        assert service.engine.recorder is service.recorder
        assert service.engine.policy is service.policy
        assert service.engine.rules is service.rules

    def test_settings_flow_into_components(self, quiet_settings):
        quiet_settings.events.capacity = 10
        quiet_settings.reasoning.timeout_seconds = 3.0
        quiet_settings.rules.new_navigation_load_threshold = 0.5

        service = build_navigation_service(quiet_settings, reasoner=StubReasoner())

        assert service.recorder.capacity == 10
        assert service.recorder.forward_enabled is False
        assert isinstance(service.recorder.sink, SimulatedEventSink)
        assert service.engine.reasoning_timeout == 3.0
        assert service.rules.load_threshold == 0.5

    @pytest.mark.asyncio
    async def test_get_navigation_state(self, quiet_settings, privileged_user):
        reasoner = StubReasoner(decision=True)
        service = build_navigation_service(
            quiet_settings, reasoner=reasoner, evaluator=FixedPolicyEvaluator()
        )

        decision = await service.get_navigation_state(privileged_user)

        assert decision.confidence_score == 0.85
        assert decision.decision_context["auth"] == "GRANTED"
        assert decision.is_new_experience_active is (service.system_load < 0.9)
        assert reasoner.calls[0].task == NAVIGATION_TASK

        names = [e.event_name for e in service.recorder.recent_events(100)]
        assert names[0] == NAV_DS_COMPLETE
        assert names[-1] == NAV_DS_INIT
        assert len(service.load_history) == 1

    @pytest.mark.asyncio
    async def test_concurrent_requests_are_independent(self, quiet_settings, privileged_user):
        service = build_navigation_service(
            quiet_settings, reasoner=StubReasoner(delay=0.01), evaluator=FixedPolicyEvaluator()
        )
        anonymous = UserIdentityContext(roles=["viewer"])

        granted, denied = await asyncio.gather(
            service.get_navigation_state(privileged_user),
            service.get_navigation_state(anonymous),
        )

        assert granted.confidence_score == 0.85
        assert denied.confidence_score == 0.95
        assert denied.is_new_experience_active is False


class TestNavigationServiceWiring:
    def test_missing_component_fails_fast(self, recorder):
        with pytest.raises(ConfigurationError):
            NavigationService(recorder, None, None, None, None)

    def test_process_singleton(self):
        assert get_navigation_service() is get_navigation_service()
