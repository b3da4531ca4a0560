"""Service Record — an external integration tracked by the Service Registry."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ServiceCategory(str, Enum):
    AI_INTEGRATION = "ai-integration"
    DATA_SIGNAL = "data-signal"
    SECURITY_POLICY = "security-policy"
    FINANCIAL_OPERATION = "financial-operation"
    ECOMMERCE_INTEGRATION = "ecommerce-integration"
    CLOUD_INFRA = "cloud-infra"
    DEV_OPS = "dev-ops"
    CRM = "crm"
    COMMUNICATION_NOTIFICATION = "communication-notification"
    OTHER = "other"


class ServiceRecord(BaseModel):
    """A monitored external integration and its activation state."""

    id: str
    display_name: str
    category: ServiceCategory
    endpoint: str
    active: bool = True
    last_status_change_time: Optional[str] = None     # ISO-8601, set on toggle
    latency: Optional[float] = None                    # milliseconds
