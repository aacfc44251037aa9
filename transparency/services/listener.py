# transparency/services/listener.py
import asyncio
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..utils.logging import stream_logger

Loader = Callable[[Session], List[Dict[str, Any]]]


class UnknownCollectionError(KeyError):
    """Raised when subscribing to a collection with no registered loader"""


@dataclass(frozen=True)
class Snapshot:
    """Full point-in-time copy of a collection"""
    collection: str
    records: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    sequence: int = 0
    loading: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "collection": self.collection,
            "sequence": self.sequence,
            "loading": self.loading,
            "error": self.error,
            "records": list(self.records),
        }


class Subscription:
    """Receives replacement snapshots of one collection until unsubscribed.

    Only the newest undelivered snapshot is kept; a slow reader skips
    intermediate states instead of queueing them.
    """

    def __init__(self, hub: "CollectionHub", collection: str):
        self.hub = hub
        self.collection = collection
        self.active = True
        self.latest: Optional[Snapshot] = None
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=1)

    def deliver(self, snapshot: Snapshot) -> None:
        if not self.active:
            return
        self.latest = snapshot
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(snapshot)

    async def get(self, timeout: Optional[float] = None) -> Snapshot:
        if timeout is None:
            return await self._queue.get()
        return await asyncio.wait_for(self._queue.get(), timeout)

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self.hub.remove(self)

    def __aiter__(self):
        return self

    async def __anext__(self) -> Snapshot:
        if not self.active:
            raise StopAsyncIteration
        return await self.get()

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class CollectionHub:
    """Publishes collection snapshots to live subscribers"""

    def __init__(self):
        self._loaders: Dict[str, Loader] = {}
        self._subscribers: Dict[str, List[Subscription]] = defaultdict(list)
        self._sequence: Dict[str, int] = defaultdict(int)
        self._published: Dict[str, Snapshot] = {}

    def register(self, collection: str, loader: Loader) -> None:
        self._loaders[collection] = loader

    @property
    def collections(self) -> List[str]:
        return sorted(self._loaders)

    def subscribe(self, collection: str) -> Subscription:
        if collection not in self._loaders:
            raise UnknownCollectionError(collection)
        subscription = Subscription(self, collection)
        self._subscribers[collection].append(subscription)
        stream_logger.info("Subscriber added", extra={
            "collection": collection,
            "subscribers": len(self._subscribers[collection])
        })
        return subscription

    def remove(self, subscription: Subscription) -> None:
        subscribers = self._subscribers.get(subscription.collection, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
            stream_logger.info("Subscriber removed", extra={
                "collection": subscription.collection,
                "subscribers": len(subscribers)
            })

    def subscriber_count(self, collection: str) -> int:
        return len(self._subscribers.get(collection, []))

    def latest(self, collection: str) -> Optional[Snapshot]:
        """Most recently published snapshot of a collection, if any"""
        return self._published.get(collection)

    def _next_sequence(self, collection: str) -> int:
        self._sequence[collection] += 1
        return self._sequence[collection]

    def load(self, db: Session, collection: str) -> Snapshot:
        """Load a snapshot; a failing loader yields an empty, non-loading snapshot"""
        loader = self._loaders.get(collection)
        if loader is None:
            raise UnknownCollectionError(collection)
        try:
            records = tuple(loader(db))
        except Exception as e:
            stream_logger.error("Failed to load collection snapshot", extra={
                "collection": collection,
                "error": str(e)
            }, exc_info=True)
            return Snapshot(
                collection=collection,
                sequence=self._next_sequence(collection),
                error=str(e)
            )
        return Snapshot(
            collection=collection,
            records=records,
            sequence=self._next_sequence(collection)
        )

    def publish(self, snapshot: Snapshot) -> None:
        self._published[snapshot.collection] = snapshot
        for subscription in list(self._subscribers.get(snapshot.collection, [])):
            subscription.deliver(snapshot)

    def broadcast(self, db: Session, collection: str) -> Snapshot:
        """Reload a collection after a write and push it to every subscriber"""
        snapshot = self.load(db, collection)
        if self.subscriber_count(collection):
            stream_logger.debug("Broadcasting snapshot", extra={
                "collection": collection,
                "sequence": snapshot.sequence,
                "record_count": len(snapshot.records)
            })
        self.publish(snapshot)
        return snapshot


collection_hub = CollectionHub()
