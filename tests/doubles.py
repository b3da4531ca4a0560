"""Deterministic test doubles for the navigation service."""

import asyncio
from typing import List, Optional

from aether_nav.models.events import EventRecord
from aether_nav.models.navigation import ReasoningRequest, ReasoningResult


class FixedPolicyEvaluator:
    """Deterministic policy evaluator."""

    def __init__(self, authorize: bool = True, regional: bool = True):
        self.authorize_result = authorize
        self.regional_result = regional
        self.authorize_calls = 0
        self.regional_calls = 0

    def authorize(self, action, user) -> bool:
        self.authorize_calls += 1
        return self.authorize_result

    def regional_gate(self, operation, region) -> bool:
        self.regional_calls += 1
        return self.regional_result


class StubReasoner:
    """Returns a canned result, or raises ``error``."""

    def __init__(
        self,
        decision: bool = True,
        reasoning: str = "Load is nominal.",
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.result = ReasoningResult(decision=decision, reasoning=reasoning)
        self.error = error
        self.delay = delay
        self.calls: List[ReasoningRequest] = []

    async def reason(self, request: ReasoningRequest) -> ReasoningResult:
        self.calls.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class RecordingSink:
    def __init__(self):
        self.forwarded: List[EventRecord] = []

    async def forward(self, record: EventRecord) -> None:
        self.forwarded.append(record)


class FailingSink:
    def __init__(self):
        self.attempts = 0

    async def forward(self, record: EventRecord) -> None:
        self.attempts += 1
        raise ConnectionError("sink unreachable")


