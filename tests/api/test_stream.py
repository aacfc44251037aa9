# tests/api/test_stream.py
import asyncio
import json

import pytest
from fastapi import status

from transparency.api.stream import snapshot_events
from transparency.models import Partner
from transparency.services.listener import collection_hub


def parse_events(body: str):
    return [
        json.loads(line[len("data: "):])
        for line in body.splitlines()
        if line.startswith("data: ")
    ]


def test_stream_once_returns_current_snapshot(client, sample_partner):
    response = client.get("/api/stream/partners", params={"once": True})

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/event-stream")
    events = parse_events(response.text)
    assert len(events) == 1
    snapshot = events[0]
    assert snapshot["collection"] == "partners"
    assert snapshot["loading"] is False
    assert [p["name"] for p in snapshot["records"]] == ["Acme Foundation"]


def test_stream_unknown_collection(client):
    response = client.get("/api/stream/donors", params={"once": True})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_writes_push_full_snapshots(client):
    """Each committed write replaces the subscriber's snapshot with the whole collection"""
    subscription = collection_hub.subscribe("partners")
    try:
        client.post("/api/partners", json={"name": "Initech"})
        first = subscription.latest
        assert [p["name"] for p in first.records] == ["Initech"]

        partner_id = first.records[0]["id"]
        client.delete(f"/api/partners/{partner_id}")
        second = subscription.latest
        assert second.records == ()
        assert second.sequence > first.sequence
    finally:
        subscription.unsubscribe()

    assert collection_hub.subscriber_count("partners") == 0


def test_writes_only_notify_their_collection(client):
    subscription = collection_hub.subscribe("workspaces")
    try:
        client.post("/api/partners", json={"name": "Initech"})
        assert subscription.latest is None
    finally:
        subscription.unsubscribe()


class ConnectedRequest:
    async def is_disconnected(self):
        return False


def event_payload(event: str):
    return parse_events(event)[0]


@pytest.mark.asyncio
async def test_live_stream_sends_updates_and_unsubscribes_on_close(db_session, sample_partner):
    initial = collection_hub.load(db_session, "partners")
    events = snapshot_events(ConnectedRequest(), initial)

    first = event_payload(await events.__anext__())
    assert [p["name"] for p in first["records"]] == ["Acme Foundation"]
    # Nothing is subscribed until the body goes past the initial snapshot
    assert collection_hub.subscriber_count("partners") == 0

    pending = asyncio.ensure_future(events.__anext__())
    await asyncio.sleep(0)
    assert collection_hub.subscriber_count("partners") == 1

    db_session.add(Partner(name="Initech", amount=0))
    db_session.commit()
    collection_hub.broadcast(db_session, "partners")

    second = event_payload(await asyncio.wait_for(pending, timeout=1))
    assert sorted(p["name"] for p in second["records"]) == ["Acme Foundation", "Initech"]
    assert second["sequence"] > first["sequence"]

    await events.aclose()
    assert collection_hub.subscriber_count("partners") == 0


@pytest.mark.asyncio
async def test_live_stream_sends_snapshot_published_before_subscribing(db_session):
    initial = collection_hub.load(db_session, "partners")
    events = snapshot_events(ConnectedRequest(), initial)
    await events.__anext__()

    db_session.add(Partner(name="Initech", amount=0))
    db_session.commit()
    collection_hub.broadcast(db_session, "partners")

    second = event_payload(await asyncio.wait_for(events.__anext__(), timeout=1))
    assert [p["name"] for p in second["records"]] == ["Initech"]

    await events.aclose()
    assert collection_hub.subscriber_count("partners") == 0


@pytest.mark.asyncio
async def test_once_stream_never_subscribes(db_session):
    events = snapshot_events(ConnectedRequest(), collection_hub.load(db_session, "partners"), live=False)

    assert [e async for e in events] != []
    assert collection_hub.subscriber_count("partners") == 0
