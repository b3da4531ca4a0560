"""
Policy Enforcer — authorization and compliance gate for navigation decisions.

Behavioral Contract:
- Every check records its audit event before returning a result
- A user without a user id is never authorized
- Privileged roles are always authorized, without consulting the evaluator
- Only regulated operations in restricted regions go through the regional gate;
  everything else is compliant
"""

import random
from typing import Iterable, Optional, Protocol

from aether_nav.errors import ConfigurationError
from aether_nav.events.recorder import EventRecorder
from aether_nav.logging_utils import get_logger
from aether_nav.models.events import AUTH_CHECK, CMPL_CHECK
from aether_nav.models.identity import UserIdentityContext

logger = get_logger(__name__)

DEFAULT_PRIVILEGED_ROLES = ("privileged-user", "admin")
DEFAULT_RESTRICTED_REGIONS = ("EU",)
NAVIGATION_DATA_PROCESSING = "navigation-data-processing"
ACCESS_NEW_NAVIGATION = "access-new-navigation"


class PolicyEvaluator(Protocol):
    """Protocol for the entitlement and regional checks — pluggable backend."""

    def authorize(self, action: str, user: UserIdentityContext) -> bool: ...

    def regional_gate(self, operation: str, region: str) -> bool: ...


class ProbabilisticPolicyEvaluator:
    """
    Stand-in entitlement engine for the demo.
    Passes authorization and the regional gate at fixed rates.
    """

    def __init__(
        self,
        authorization_pass_rate: float = 0.8,
        regional_pass_rate: float = 0.9,
        rng: Optional[random.Random] = None,
    ):
        self.authorization_pass_rate = authorization_pass_rate
        self.regional_pass_rate = regional_pass_rate
        self._rng = rng or random.Random()

    def authorize(self, action: str, user: UserIdentityContext) -> bool:
        return self._rng.random() < self.authorization_pass_rate

    def regional_gate(self, operation: str, region: str) -> bool:
        return self._rng.random() < self.regional_pass_rate


class PolicyEnforcer:
    """Evaluates authorization and compliance, auditing every check."""

    def __init__(
        self,
        recorder: EventRecorder,
        evaluator: Optional[PolicyEvaluator] = None,
        privileged_roles: Iterable[str] = DEFAULT_PRIVILEGED_ROLES,
        restricted_regions: Iterable[str] = DEFAULT_RESTRICTED_REGIONS,
        regulated_operations: Iterable[str] = (NAVIGATION_DATA_PROCESSING,),
    ):
        if recorder is None:
            raise ConfigurationError("EventRecorder must be provided")
        self.recorder = recorder
        self.evaluator = evaluator or ProbabilisticPolicyEvaluator()
        self.privileged_roles = frozenset(privileged_roles)
        self.restricted_regions = frozenset(restricted_regions)
        self.regulated_operations = frozenset(regulated_operations)

    async def check_authorization(self, action: str, user: UserIdentityContext) -> bool:
        """Is ``user`` entitled to perform ``action``?"""
        self.recorder.record(AUTH_CHECK, {"action": action, "userId": user.user_id})

        if not user.user_id:
            logger.info("Authorization denied for %s: no user id", action)
            return False
        if user.has_any_role(self.privileged_roles):
            return True

        allowed = self.evaluator.authorize(action, user)
        if not allowed:
            logger.info("Authorization denied for %s (user %s)", action, user.user_id)
        return allowed

    async def check_compliance(
        self,
        data_operation_type: str,
        user_region: Optional[str] = None,
    ) -> bool:
        """Is ``data_operation_type`` permitted for a user in ``user_region``?"""
        self.recorder.record(CMPL_CHECK, {
            "dataOperationType": data_operation_type,
            "userRegion": user_region,
        })

        if (
            user_region in self.restricted_regions
            and data_operation_type in self.regulated_operations
        ):
            compliant = self.evaluator.regional_gate(data_operation_type, user_region)
            if not compliant:
                logger.info(
                    "Compliance gate failed for %s in %s", data_operation_type, user_region
                )
            return compliant
        return True
