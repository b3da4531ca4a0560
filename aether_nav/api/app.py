"""
AetherNav API — FastAPI endpoints for the operations console.

Exposes:
- Navigation decisions
- Service registry listing and toggling
- The live event feed
- System load telemetry
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from aether_nav import __version__
from aether_nav.errors import ServiceNotFoundError
from aether_nav.models.events import MANUAL_NAV_PRED_REQ
from aether_nav.models.identity import UserIdentityContext
from aether_nav.orchestrator.service import NavigationService, get_navigation_service


# --- Request Models ---

class ServiceToggleRequest(BaseModel):
    active: bool


# --- Application Factory ---

def create_app(service: Optional[NavigationService] = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    nav = service or get_navigation_service()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await nav.recorder.flush()

    app = FastAPI(
        title="AetherNav API",
        description="AetherNav — Operations Console Navigation Service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.navigation_service = nav

    # === NAVIGATION ===

    @app.post("/navigation/state")
    async def navigation_state(user: UserIdentityContext):
        """Run a predictive navigation decision for a user."""
        decision = await nav.get_navigation_state(user)
        nav.recorder.record(
            MANUAL_NAV_PRED_REQ, {"result": decision.is_new_experience_active}
        )
        return decision.model_dump(mode="json")

    # === SERVICES ===

    @app.get("/services")
    async def list_services():
        """Service health matrix."""
        return [s.model_dump(mode="json") for s in nav.registry.list_services()]

    @app.get("/services/{service_id}")
    async def get_service(service_id: str):
        """Get a specific service."""
        svc = nav.registry.get_service(service_id)
        if not svc:
            raise HTTPException(404, "Service not found")
        return svc.model_dump(mode="json")

    @app.put("/services/{service_id}/active")
    async def set_service_active(service_id: str, req: ServiceToggleRequest):
        """Activate or deactivate a service."""
        try:
            svc = nav.registry.set_active(service_id, req.active)
        except ServiceNotFoundError:
            raise HTTPException(404, "Service not found")
        return svc.model_dump(mode="json")

    # === OBSERVABILITY ===

    @app.get("/events")
    async def recent_events(limit: int = Query(default=20, ge=1)):
        """Most recent events, newest first."""
        limit = min(limit, nav.recorder.capacity)
        return [e.model_dump(mode="json") for e in nav.recorder.recent_events(limit)]

    @app.get("/telemetry/load")
    async def system_load():
        """Current system load gauge and recent readings."""
        return {
            "system_load": nav.system_load,
            "history": [s.model_dump(mode="json") for s in nav.load_history],
        }

    return app


# Default application instance
app = create_app()
