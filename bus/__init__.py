"""
bus: In-memory journey messaging infrastructure
=================================================

Provides a lightweight pub/sub transport layer between the route
simulation (publisher only) and any number of observers such as
dashboards, the HTTP API or the Pygame viewer.

Modules
-------
message
    :class:`BusMessage` dataclass.
journey_bus
    :class:`JourneyBus` publish / subscribe / poll transport and topic names.
metrics
    :class:`BusMetrics` counter snapshot.
"""

from .message import BusMessage
from .journey_bus import JourneyBus, TOPIC_JOURNEY, TOPIC_POSITION, TOPIC_STATUS
from .metrics import BusMetrics

__all__ = [
    "BusMessage",
    "JourneyBus",
    "BusMetrics",
    "TOPIC_JOURNEY",
    "TOPIC_POSITION",
    "TOPIC_STATUS",
]
