"""
sim: Route simulation core
===========================

Modules
-------
traffic_policy
    :class:`CorridorPolicy` tunable constants and :class:`TrafficDensity`.
geo
    :class:`Coordinate`, haversine distance and Bézier helpers.
gazetteer
    Static place-name table and the free-text :func:`resolve`.
route
    :class:`Route` and the curved :func:`generate_route`.
traffic_zones
    Progress-keyed :func:`zone_for` traffic model.
signals
    Derived signal states and the proximity test.
scheduler
    :class:`VirtualClock` cooperative timer source.
motion
    :class:`MotionSimulator` variable-rate stepping engine.
eta
    Fixed-length elapsed-time arrival estimate.
sim_bridge
    :class:`SimBridge` per-vehicle façade publishing onto the journey bus.
"""
