"""
api/server.py
=============
FastAPI server that lets external dashboards start and observe the
ambulance route simulation over HTTP.

Start the server::

    python -m api.server          # → http://localhost:5000/api/start-simulation

The ``/api/start-simulation`` endpoint accepts a JSON body with
``origin``, ``destination`` and ``critical`` fields, reconfigures the
route and starts stepping on the server's event loop.

.. note::

   This server is **not** required to run the Pygame viewer.
   It exists for external integrations and testing.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from bus.journey_bus import JourneyBus
from config import API_HOST, API_PORT, BUS_BACKLOG, DEFAULT_VEHICLE_ID
from sim.gazetteer import place_names
from sim.sim_bridge import SimBridge
from sim.traffic_policy import CorridorPolicy

log = logging.getLogger("api")

# ── Pydantic request schemas ─────────────────────────────────────────────────


class StartSimulationRequest(BaseModel):
    """Journey submitted to ``/api/start-simulation``.

    Unknown or empty place names are accepted and resolve to the city
    centre.
    """
    origin: str = ""
    destination: str = ""
    critical: bool = False


# ── Dependencies ─────────────────────────────────────────────────────────────


def get_bridge(request: Request) -> SimBridge:
    """Return the bridge owned by the application."""
    bridge = getattr(request.app.state, "bridge", None)
    if bridge is None:
        raise HTTPException(status_code=503, detail="simulation engine not ready")
    return bridge


# ── FastAPI application ──────────────────────────────────────────────────────


def create_app(
    bridge: Optional[SimBridge] = None, policy: Optional[CorridorPolicy] = None
) -> FastAPI:
    """Build the application.

    Parameters
    ----------
    bridge : SimBridge or None
        Injected engine (tests pass one driven by a ``VirtualClock``).
        When omitted, the lifespan hook builds one on the running event
        loop and disposes it on shutdown.
    policy : CorridorPolicy or None
        Tunables for the engine built by the lifespan hook.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.bridge is None
        if owned:
            app.state.bridge = SimBridge(
                asyncio.get_running_loop(),
                bus=JourneyBus(backlog=BUS_BACKLOG),
                policy=policy,
                vehicle_id=DEFAULT_VEHICLE_ID,
            )
            log.info("simulation engine created on event loop")
        try:
            yield
        finally:
            if owned:
                app.state.bridge.dispose()
                app.state.bridge = None

    app = FastAPI(
        title="Ambulance Corridor Simulation API",
        description="Starts and observes the emergency-vehicle route simulation.",
        version="1.0",
        lifespan=lifespan,
    )
    app.state.bridge = bridge

    @app.post("/api/start-simulation")
    async def start_simulation(
        req: StartSimulationRequest, bridge: SimBridge = Depends(get_bridge)
    ) -> Dict[str, Any]:
        """Reconfigure the route and run it from the pickup point."""
        route = bridge.configure(req.origin, req.destination, req.critical)
        if not bridge.start():
            raise HTTPException(status_code=409, detail="simulation could not be started")
        log.info("start-simulation %r -> %r", req.origin, req.destination)
        return {
            "status": "started",
            "route": route,
            "snapshot": bridge.snapshot().to_dict(),
        }

    @app.post("/api/stop-simulation")
    async def stop_simulation(bridge: SimBridge = Depends(get_bridge)) -> Dict[str, Any]:
        """Cancel the run and discard progress."""
        bridge.stop()
        return {"status": "stopped", "snapshot": bridge.snapshot().to_dict()}

    @app.get("/api/snapshot")
    async def snapshot(bridge: SimBridge = Depends(get_bridge)) -> Dict[str, Any]:
        return bridge.snapshot().to_dict()

    @app.get("/api/signals")
    async def signals(bridge: SimBridge = Depends(get_bridge)) -> List[Dict[str, Any]]:
        return bridge.signal_markers()

    @app.get("/api/route")
    async def route(bridge: SimBridge = Depends(get_bridge)) -> Dict[str, Any]:
        summary = bridge.route_summary()
        summary["waypoints"] = [c.as_list() for c in bridge.route] if bridge.route else []
        return summary

    @app.get("/api/eta")
    async def eta(bridge: SimBridge = Depends(get_bridge)) -> Dict[str, Any]:
        """Nominal elapsed-time estimate; independent of the simulated timeline."""
        journey = bridge.journey()
        if journey is None:
            return {"journey": None, "remaining_minutes": None, "estimated_arrival": None}
        return {
            "journey": journey.to_payload(),
            "remaining_minutes": bridge.eta_minutes(),
            "estimated_arrival": journey.estimated_arrival.isoformat(),
        }

    @app.get("/api/locations")
    async def locations() -> List[str]:
        """Known place names, in match order."""
        return list(place_names())

    @app.get("/api/bus-metrics")
    async def bus_metrics(bridge: SimBridge = Depends(get_bridge)) -> Dict[str, int]:
        return bridge.bus.metrics.report()

    return app


app = create_app()


# ── Standalone entry point ───────────────────────────────────────────────────

if __name__ == "__main__":
    from logging_setup import setup_logging

    setup_logging(logging.INFO)
    log.info("Starting corridor simulation server on http://%s:%d", API_HOST, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT)
