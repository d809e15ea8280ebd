import asyncio
import logging
from typing import Any, Protocol, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)

class Subscriber(Protocol):
    async def send_json(self, data: Any) -> None: ...

class ClientBroadcaster:
    """
    Fan-out of status and event messages to connected UI clients.
    Best effort: no acknowledgement, no backlog for clients that connect later.
    """

    def __init__(self):
        self.subscribers = set()

    def subscribe(self, subscriber: Subscriber):
        self.subscribers.add(subscriber)
        logger.info("Client connected (%d active)", len(self.subscribers))

    def unsubscribe(self, subscriber: Subscriber):
        self.subscribers.discard(subscriber)
        logger.info("Client disconnected (%d active)", len(self.subscribers))

    async def broadcast(self, message: Union[BaseModel, dict]):
        if isinstance(message, BaseModel):
            message = message.model_dump(by_alias=True)

        targets = list(self.subscribers)
        if not targets:
            return

        results = await asyncio.gather(
            *(client.send_json(message) for client in targets),
            return_exceptions=True
        )
        for client, result in zip(targets, results):
            if isinstance(result, Exception):
                logger.warning("Dropping client after failed send: %s", result)
                self.subscribers.discard(client)
