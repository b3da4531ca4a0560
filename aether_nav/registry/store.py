"""
Service Registry — catalog of external integrations and their activation state.

Updated by: user toggles from the console
Queried by: the console's service health matrix

The catalog is seeded once at construction; entries are never added or
removed at runtime, only toggled.
"""

from datetime import datetime, timezone
from typing import List, Optional

from aether_nav.errors import ConfigurationError, ServiceNotFoundError
from aether_nav.events.recorder import EventRecorder
from aether_nav.logging_utils import get_logger
from aether_nav.models.events import SVC_STAT_UPD
from aether_nav.models.services import ServiceCategory, ServiceRecord

logger = get_logger(__name__)


def default_catalog() -> List[ServiceRecord]:
    """The fixed integration catalog the console starts with."""
    return [
        ServiceRecord(
            id="ADOB_ANL",
            display_name="Adobe Analytics",
            category=ServiceCategory.DATA_SIGNAL,
            endpoint="https://logs.adobe.com/anl",
        ),
        ServiceRecord(
            id="GOGL_ANL",
            display_name="Google Analytics",
            category=ServiceCategory.DATA_SIGNAL,
            endpoint="https://analytics.google.com/data",
        ),
        ServiceRecord(
            id="GOGL_CLD_LOG",
            display_name="Google Cloud Logging",
            category=ServiceCategory.CLOUD_INFRA,
            endpoint="https://logging.gcp.com/ingest",
        ),
        ServiceRecord(
            id="AZUR_MNTR",
            display_name="Azure Monitor",
            category=ServiceCategory.CLOUD_INFRA,
            endpoint="https://monitor.azure.com/log",
        ),
        ServiceRecord(
            id="PIPD_DRM_EV",
            display_name="Pipedream Event Bus",
            category=ServiceCategory.DEV_OPS,
            endpoint="https://api.pipedream.com/event",
        ),
        ServiceRecord(
            id="GEMINI_AI",
            display_name="Gemini Reasoning Engine",
            category=ServiceCategory.AI_INTEGRATION,
            endpoint="https://api.gemini.ai",
        ),
    ]


class ServiceRegistry:
    """
    In-memory service catalog. Mutation goes through ``set_active`` only.
    """

    def __init__(
        self,
        recorder: EventRecorder,
        catalog: Optional[List[ServiceRecord]] = None,
    ):
        if recorder is None:
            raise ConfigurationError("EventRecorder must be provided")
        self.recorder = recorder

        services = catalog if catalog is not None else default_catalog()
        ids = [s.id for s in services]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate service ids in catalog: {duplicates}")
        self._services: List[ServiceRecord] = list(services)

    def list_services(self) -> List[ServiceRecord]:
        """The live, ordered service list (read access only)."""
        return self._services

    def get_service(self, service_id: str) -> Optional[ServiceRecord]:
        """Get a specific service by ID."""
        return next((s for s in self._services if s.id == service_id), None)

    def set_active(self, service_id: str, active: bool) -> ServiceRecord:
        """
        Toggle a service's activation state.

        Raises ServiceNotFoundError for unknown ids; the registry and the
        event log are left untouched in that case.
        """
        service = self.get_service(service_id)
        if service is None:
            logger.info("Toggle requested for unknown service %s", service_id)
            raise ServiceNotFoundError(service_id)

        previous = service.active
        service.active = active
        service.last_status_change_time = datetime.now(timezone.utc).isoformat()
        self.recorder.record(SVC_STAT_UPD, {
            "serviceId": service_id,
            "previousState": previous,
            "newState": active,
        })
        return service
