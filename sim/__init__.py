"""
sim: simulation core
=====================

Modules
-------
grid
    :class:`GridGeometry` tile grid and intersection box.
routes
    :class:`Direction`, :class:`Route` and the path compiler.
physics
    Low-level speed and facing helpers.
traffic_policy
    :class:`MotionPolicy` tunable constants and :class:`VelocityLevel`.
vehicle
    :class:`Vehicle` entity and its traffic regulator.
spawner
    :class:`Spawner` admission control.
stats
    :class:`TrafficStats` lifecycle statistics.
world
    :class:`World` entity manager and physics loop.
"""
