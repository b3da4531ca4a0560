"""User Identity Context — caller-supplied identity for a single request."""

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class UserIdentityContext(BaseModel):
    """Who is asking. Immutable; never persisted by the core."""

    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    roles: List[str] = []
    tenant_id: Optional[str] = None
    locale: Optional[str] = None            # locale / region marker, e.g. "EU"
    session_id: Optional[str] = None

    @field_validator("roles")
    @classmethod
    def _dedupe_roles(cls, value: List[str]) -> List[str]:
        # Ordered set: keep first occurrence
        return list(dict.fromkeys(value))

    def has_any_role(self, roles: Iterable[str]) -> bool:
        return any(role in self.roles for role in roles)
