"""Shared test fixtures."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from modules.shared.models import Report
from modules.shared.store import RemoteError


class FakeSubscription:
    def __init__(self, store, on_change):
        self._store = store
        self.on_change = on_change
        self.active = True

    async def unsubscribe(self):
        self.active = False


class FakeStore:
    """In-memory report store with the same contract as RecordStore."""

    def __init__(self, reports=None):
        self.reports = list(reports or [])
        self.inserts = []
        self.subscriptions = []
        self.query_count = 0
        self.fail_query = False
        self.fail_insert = False
        self.fail_subscribe = False
        self.closed = False

    async def query(self):
        self.query_count += 1
        if self.fail_query:
            raise RemoteError("fetch failed")
        return sorted(self.reports, key=lambda r: r.created_at, reverse=True)

    async def insert(self, fields):
        if self.fail_insert:
            raise RemoteError("insert failed")
        now = datetime.now(timezone.utc)
        if self.reports:
            now = max(now, max(r.created_at for r in self.reports) + timedelta(microseconds=1))
        self.inserts.append(dict(fields))
        self.reports.append(Report(id=uuid4(), created_at=now, updated_at=now, **fields))
        self.notify()

    async def subscribe_to_changes(self, on_change):
        if self.fail_subscribe:
            raise RemoteError("subscribe failed")
        subscription = FakeSubscription(self, on_change)
        self.subscriptions.append(subscription)
        return subscription

    def notify(self):
        for subscription in list(self.subscriptions):
            if subscription.active:
                subscription.on_change()

    @property
    def active_subscriptions(self):
        return [s for s in self.subscriptions if s.active]

    async def close(self):
        self.closed = True


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_report():
    """Build a Report; `minutes_ago` is relative to NOW."""
    def _make(title="Low pressure", location="Main St", status="active", severity="medium",
              minutes_ago=0, reported_by="A. Resident", description="Barely a trickle", contact_info=None):
        created = NOW - timedelta(minutes=minutes_ago)
        return Report(
            id=uuid4(),
            title=title,
            description=description,
            location=location,
            status=status,
            severity=severity,
            reported_by=reported_by,
            contact_info=contact_info,
            created_at=created,
            updated_at=created,
        )
    return _make


@pytest.fixture
def sample_reports(make_report):
    return [
        make_report(title="Burst main", location="5th Ave", status="active", severity="critical", minutes_ago=5),
        make_report(title="Brown water", location="Main St", status="investigating", severity="high", minutes_ago=90),
        make_report(title="Leaking hydrant", location="5th Ave", status="resolved", severity="low", minutes_ago=3000),
        make_report(title="No water", location="main st", status="active", severity="medium", minutes_ago=10),
    ]


@pytest.fixture
def store(sample_reports):
    return FakeStore(sample_reports)


@pytest.fixture
def empty_store():
    return FakeStore()


@pytest.fixture
def settle():
    """Let scheduled background tasks run."""
    async def _settle():
        await asyncio.sleep(0.01)
    return _settle


@pytest.fixture
def app(store):
    """Application instance wired to the in-memory store."""
    from main import app as _app

    _app.state.store = store
    yield _app
    _app.state.store = None


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
