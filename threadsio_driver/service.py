"""
Entity-level facade over ThreadsIoClient.
"""

from datetime import datetime
from typing import Optional

from .client import ThreadsIoClient
from .entities import User, Event, Page


class ThreadsIoService:
    """
    Sends User/Event/Page entities through a ThreadsIoClient.

    Every method returns the success flag of the API response. Driver
    exceptions propagate unchanged.

    Example:
        service = ThreadsIoService(ThreadsIoClient("my-event-key"))
        user = User("user123", {"name": "Ritchie Blackmore"})
        service.identify(user)
        service.track(user, Event("Connected", {"source": "web"}))
    """

    def __init__(self, client: ThreadsIoClient):
        self.client = client

    def identify(self, user: User, timestamp: Optional[datetime] = None) -> bool:
        return self.client.identify(user.user_id, user.traits, timestamp).success

    def track(self, user: User, event: Event, timestamp: Optional[datetime] = None) -> bool:
        return self.client.track(user.user_id, event.name, event.properties, timestamp).success

    def page(self, user: User, page: Page, timestamp: Optional[datetime] = None) -> bool:
        if timestamp is None:
            timestamp = page.visited_at
        return self.client.page(user.user_id, page.title, page.properties, timestamp).success

    def remove(self, user: User, timestamp: Optional[datetime] = None) -> bool:
        return self.client.remove(user.user_id, timestamp).success
