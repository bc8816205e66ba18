"""
JourneyBus: In-memory pub/sub system connecting the simulation to its observers.

Supports:
    - Topic-based messaging
    - Push delivery to subscribers plus a bounded per-topic backlog for polling
    - Isolation of the publisher from failing subscribers
    - Logging of events

Intended usage:
    - The simulation bridge publishes to 'ambulance-journey', 'ambulance-position'
      and 'simulation-status'
    - Dashboards, the HTTP API and the viewer subscribe or poll
"""

import time
import uuid
import logging
from collections import deque
from typing import Callable, Deque, Dict, List

from .message import BusMessage
from .metrics import BusMetrics

log = logging.getLogger(__name__)

Subscriber = Callable[[BusMessage], None]

TOPIC_JOURNEY = "ambulance-journey"
TOPIC_POSITION = "ambulance-position"
TOPIC_STATUS = "simulation-status"


class JourneyBus:
    """
    Transport layer for journey, position and status messages.

    Attributes:
        backlog (int): Maximum number of unpolled messages kept per topic.
        metrics (BusMetrics): Message flow counters.
    """

    def __init__(self, backlog: int = 256):
        """
        Initialize a JourneyBus instance.

        Args:
            backlog (int): Per-topic cap on messages retained for poll(); oldest are discarded first.
        """
        self.backlog = backlog
        self.metrics = BusMetrics()
        self._topics: Dict[str, Deque[BusMessage]] = {}
        self._subscribers: Dict[str, List[Subscriber]] = {}

    def publish(self, topic: str, sender: str, payload: dict) -> str:
        """
        Publish a message to a specific topic.

        The payload is copied, stored for pollers and pushed synchronously to
        every subscriber of the topic. A subscriber that raises is logged and
        counted; the publisher never sees the exception.

        Args:
            topic (str): The topic name (e.g., 'ambulance-journey').
            sender (str): ID of the sender.
            payload (dict): Data dictionary representing the message contents.

        Returns:
            str: The unique message ID.
        """
        msg = BusMessage(
            id=str(uuid.uuid4()),
            topic=topic,
            sender=sender,
            payload=dict(payload),
            ts=time.time(),
        )
        queue = self._topics.get(topic)
        if queue is None:
            queue = self._topics[topic] = deque(maxlen=self.backlog)
        queue.append(msg)
        self.metrics.published += 1
        log.debug("publish topic=%s sender=%s id=%s", topic, sender, msg.id)

        for callback in list(self._subscribers.get(topic, [])):
            try:
                callback(msg)
                self.metrics.delivered += 1
            except Exception:
                self.metrics.subscriber_errors += 1
                log.exception("subscriber_failed topic=%s id=%s", topic, msg.id)
        return msg.id

    def subscribe(self, topic: str, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for every future message on a topic.

        Args:
            topic (str): The topic name.
            callback (Callable[[BusMessage], None]): Invoked synchronously on publish.

        Returns:
            Callable[[], None]: Function that removes this subscription.
        """
        self._subscribers.setdefault(topic, []).append(callback)
        log.info("subscribe topic=%s", topic)

        def _unsubscribe() -> None:
            self.unsubscribe(topic, callback)

        return _unsubscribe

    def unsubscribe(self, topic: str, callback: Subscriber) -> None:
        """
        Remove a previously registered callback; unknown callbacks are ignored.

        Args:
            topic (str): The topic name.
            callback (Callable[[BusMessage], None]): The callback passed to subscribe().
        """
        subs = self._subscribers.get(topic, [])
        if callback in subs:
            subs.remove(callback)
            log.info("unsubscribe topic=%s", topic)

    def poll(self, topic: str) -> List[BusMessage]:
        """
        Retrieve and clear all messages from a given topic.

        Args:
            topic (str): The topic name to poll messages from.

        Returns:
            List[BusMessage]: Messages published to the topic since the last poll, oldest first.
        """
        queue = self._topics.get(topic)
        if not queue:
            return []
        msgs = list(queue)
        queue.clear()
        self.metrics.polled += len(msgs)
        return msgs

    def subscriber_count(self, topic: str) -> int:
        """
        Number of callbacks currently registered for a topic.

        Args:
            topic (str): The topic name.
        """
        return len(self._subscribers.get(topic, []))
