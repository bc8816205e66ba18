"""
BusMetrics: Tracks simple statistics for JourneyBus message flow.
"""


class BusMetrics:
    """
    Tracks metrics for published messages, deliveries, polls and subscriber failures.

    Attributes:
        published (int): Total number of messages published.
        delivered (int): Number of successful subscriber callbacks.
        polled (int): Number of messages handed out by poll().
        subscriber_errors (int): Number of subscriber callbacks that raised.
    """

    def __init__(self):
        """Initialize all counters to zero."""
        self.published = 0
        self.delivered = 0
        self.polled = 0
        self.subscriber_errors = 0

    def report(self) -> dict:
        """
        Return a snapshot of current metrics.

        Returns:
            dict: Dictionary containing 'published', 'delivered', 'polled' and 'subscriber_errors' counters.
        """
        return {
            "published": self.published,
            "delivered": self.delivered,
            "polled": self.polled,
            "subscriber_errors": self.subscriber_errors,
        }
