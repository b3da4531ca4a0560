"""Shared fixtures for the navigation service tests."""

import pytest

from aether_nav.config import EventSettings, Settings
from aether_nav.events.recorder import EventRecorder
from aether_nav.models.identity import UserIdentityContext


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder(forward_enabled=False)


@pytest.fixture
def quiet_settings() -> Settings:
    return Settings(events=EventSettings(forward_enabled=False))


@pytest.fixture
def privileged_user() -> UserIdentityContext:
    return UserIdentityContext(
        user_id="citi-exec-492",
        roles=["privileged-user", "mgr"],
        tenant_id="citibank-corp",
        locale="US-NYC",
        session_id="session-77a2-b91c",
    )
