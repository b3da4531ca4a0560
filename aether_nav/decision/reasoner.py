"""
Reasoning capability — the external generative model consulted by the
Decision Engine.

The engine depends only on the ``Reasoner`` protocol. ``GeminiReasoner``
is the production backend; tests substitute their own.
"""

from typing import Any, Optional, Protocol

from google import genai
from google.genai import types

from aether_nav.logging_utils import get_logger
from aether_nav.models.navigation import ReasoningRequest, ReasoningResult

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"
_EMPTY_RESPONSE = '{"decision": true, "reasoning": "Standard system approval"}'


class Reasoner(Protocol):
    """Protocol for the reasoning capability — pluggable backend."""

    async def reason(self, request: ReasoningRequest) -> ReasoningResult: ...


def build_prompt(request: ReasoningRequest) -> str:
    """Render the textual summary sent to the model."""
    roles = ",".join(request.roles)
    return (
        f"Task: {request.task}. "
        f"Evaluate system context: User Role: {roles}, "
        f"Location: {request.locale}, System Load: {request.current_load}. "
        "Determine if 'New Navigation Experience' should be enabled. "
        "Return a short JSON object with 'decision' (boolean) and 'reasoning' (string)."
    )


class GeminiReasoner:
    """Asks a Gemini model for a schema-validated decision."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def reason(self, request: ReasoningRequest) -> ReasoningResult:
        client = self._get_client()
        response = await client.aio.models.generate_content(
            model=self.model,
            contents=build_prompt(request),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=ReasoningResult,
            ),
        )
        text = response.text or _EMPTY_RESPONSE
        logger.debug("Reasoning response from %s: %s", self.model, text)
        return ReasoningResult.model_validate_json(text)
