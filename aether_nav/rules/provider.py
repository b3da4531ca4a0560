"""
Adaptive Rules Provider — derives a feature/routing snapshot from current load.

The provider owns the system load gauge. Each call to ``adapt_and_predict``
samples a fresh load value (a stand-in for real telemetry) and returns an
AdaptiveRuleSet gated on it.
"""

import random
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Deque, List, Optional

from aether_nav.errors import ConfigurationError
from aether_nav.events.recorder import EventRecorder
from aether_nav.models.events import CTX_ADAPT_INIT
from aether_nav.models.rules import (
    AB_TESTING_FLAG,
    DEFAULT_ROUTE,
    NEW_NAVIGATION_FLAG,
    AdaptiveRuleSet,
    LoadSample,
)

INITIAL_LOAD = 0.42


class AdaptiveRulesProvider:
    """
    Produces a rule set per request. Only this class writes the load gauge.
    """

    def __init__(
        self,
        recorder: EventRecorder,
        load_sampler: Optional[Callable[[], float]] = None,
        load_threshold: float = 0.9,
        history_size: int = 20,
    ):
        if recorder is None:
            raise ConfigurationError("EventRecorder must be provided")
        self.recorder = recorder
        self.load_threshold = load_threshold
        self._sample_load = load_sampler or random.random
        self._system_load = INITIAL_LOAD
        self._history: Deque[LoadSample] = deque(maxlen=history_size)

    @property
    def system_load(self) -> float:
        """Most recent load reading, in [0, 1)."""
        return self._system_load

    @property
    def load_history(self) -> List[LoadSample]:
        """Recent load readings, oldest first."""
        return list(self._history)

    async def adapt_and_predict(self, context: Optional[dict] = None) -> AdaptiveRuleSet:
        """Sample load and build the rule set for this request."""
        self._system_load = self._sample_load()
        self._history.append(LoadSample(
            timestamp=datetime.now(timezone.utc).isoformat(),
            load=self._system_load,
        ))
        self.recorder.record(CTX_ADAPT_INIT, {"load": self._system_load})

        return AdaptiveRuleSet(
            feature_flags={
                NEW_NAVIGATION_FLAG: self._system_load < self.load_threshold,
                AB_TESTING_FLAG: True,
            },
            path_priorities={"dashboard": 10, "reports": 8, "settings": 5},
            observability_enabled=True,
            security_check_enabled=True,
            dynamic_path_enabled=True,
            ai_based_routing={DEFAULT_ROUTE: "/dash"},
        )
