# transparency/api/stream.py
import asyncio
import json

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..services.listener import Snapshot, UnknownCollectionError, collection_hub
from ..utils.logging import stream_logger

router = APIRouter(prefix="/api/stream", tags=["stream"])


def format_event(snapshot: Snapshot) -> str:
    """Server-Sent Event carrying one full snapshot"""
    return f"event: snapshot\ndata: {json.dumps(snapshot.to_dict(), default=str)}\n\n"


async def snapshot_events(request: Request, initial: Snapshot, live: bool = True):
    """Yield the initial snapshot, then every replacement until the client goes away.

    The subscription only exists while the response body is being sent. A
    snapshot published between the initial load and subscribing is sent first.
    """
    yield format_event(initial)
    if not live:
        return

    subscription = collection_hub.subscribe(initial.collection)
    sent = initial.sequence
    try:
        newer = collection_hub.latest(initial.collection)
        if newer is not None and newer.sequence > sent:
            sent = newer.sequence
            yield format_event(newer)

        while subscription.active:
            try:
                snapshot = await subscription.get(timeout=settings.STREAM_KEEPALIVE_SECONDS)
            except asyncio.TimeoutError:
                if await request.is_disconnected():
                    break
                yield ": keepalive\n\n"
                continue
            if snapshot.sequence <= sent:
                continue
            sent = snapshot.sequence
            yield format_event(snapshot)
    finally:
        subscription.unsubscribe()


@router.get("/{collection}")
async def stream_collection(collection: str, request: Request, once: bool = False,
                            db: Session = Depends(get_db)):
    """Live snapshots of a collection; `once` returns the current snapshot and closes"""
    try:
        initial = collection_hub.load(db, collection)
    except UnknownCollectionError:
        stream_logger.warning("Unknown collection requested", extra={"collection": collection})
        raise HTTPException(status_code=404, detail="Collection not found")

    stream_logger.info("Streaming collection", extra={
        "collection": collection,
        "once": once,
        "record_count": len(initial.records)
    })
    return StreamingResponse(
        snapshot_events(request, initial, live=not once),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"}
    )
