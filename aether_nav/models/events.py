"""Event Record — one entry in the bounded observability log."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, JsonValue

# Event names emitted by the core components
SVC_STAT_UPD = "SVC_STAT_UPD"
AUTH_CHECK = "AUTH_CHECK"
CMPL_CHECK = "CMPL_CHECK"
CTX_ADAPT_INIT = "CTX_ADAPT_INIT"
NAV_DS_INIT = "NAV_DS_INIT"
NAV_DS_DENIED = "NAV_DS_DENIED"
NAV_DS_COMPLETE = "NAV_DS_COMPLETE"
NAV_DS_FALLBACK = "NAV_DS_FALLBACK"
MANUAL_NAV_PRED_REQ = "MANUAL_NAV_PRED_REQ"

EventDetails = Dict[str, JsonValue]


class EventRecord(BaseModel):
    """An immutable observability event."""

    model_config = ConfigDict(frozen=True)

    timestamp: str                          # ISO-8601, UTC
    event_name: str
    details: Optional[EventDetails] = None
