"""
api: HTTP control surface
==========================

Modules
-------
server
    FastAPI application exposing start / stop / snapshot / signals / ETA
    endpoints for one :class:`sim.sim_bridge.SimBridge`.
"""
