"""Navigation Decision and the reasoning capability's request/response shapes."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, JsonValue


class NavigationDecision(BaseModel):
    """The Decision Engine's verdict on activating the new experience."""

    is_new_experience_active: bool
    description: str
    suggested_path: Optional[str] = None
    confidence_score: float = Field(ge=0.0, le=1.0)
    decision_context: Optional[Dict[str, JsonValue]] = None


class ReasoningRequest(BaseModel):
    """Context handed to the external reasoning capability."""

    task: str
    roles: List[str] = []
    locale: Optional[str] = None
    current_load: float


class ReasoningResult(BaseModel):
    """Structured response expected from the reasoning capability.

    Also used as the response schema for schema-validated model output.
    """

    decision: bool = Field(description="Final decision on enabling new navigation.")
    reasoning: str = Field(description="Explanation for the navigation decision.")
