"""
BusMessage: Data structure representing a message carried by the JourneyBus.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BusMessage:
    """
    Represents a single message sent via the JourneyBus.

    Attributes:
        id (str): Unique identifier for the message.
        topic (str): The topic of the message (e.g., 'ambulance-journey', 'ambulance-position').
        sender (str): ID of the sender (e.g., 'AMB_01', 'api').
        payload (dict): Copy of the published payload.
        ts (float): Timestamp (in seconds) when the message was created.
    """
    id: str
    topic: str
    sender: str
    payload: dict = field(default_factory=dict)
    ts: float = 0.0
