import asyncio
import logging
from typing import Callable, List, Optional

import asyncpg
from fastapi import Request

from modules.shared import db
from modules.shared.models import Report
from modules.shared.schema import REPORTS_TABLE, CHANGES_CHANNEL, create_tables

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

INSERT_FIELDS = ("title", "description", "location", "severity", "reported_by", "contact_info", "status")


class RemoteError(Exception):
    """A request to the report store failed."""


class Subscription:
    """Handle for one open change channel. Call unsubscribe() when the owning view goes away."""

    def __init__(self, conn, channel: str, listener) -> None:
        self._conn = conn
        self._channel = channel
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._conn is not None

    async def unsubscribe(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        logger.info(f"Releasing change channel {self._channel}")
        try:
            await conn.remove_listener(self._channel, self._listener)
        finally:
            await conn.close()


class RecordStore:
    """
    Client for the water reports collection.

    Nothing connects until the first request, so bad credentials only
    show up as a RemoteError from query(), insert() or subscribe_to_changes().
    """

    def __init__(self, dsn: Optional[str], api_key: Optional[str],
                 table: str = REPORTS_TABLE, channel: str = CHANGES_CHANNEL) -> None:
        self._dsn = dsn
        self._api_key = api_key
        self._table = table
        self._channel = channel
        self._pool = None
        self._pool_lock = asyncio.Lock()

    async def _get_pool(self):
        if self._pool is None:
            async with self._pool_lock:
                if self._pool is None:
                    self._pool = await db.create_pool(self._dsn, self._api_key)
        return self._pool

    async def query(self) -> List[Report]:
        """Return every report, newest first."""
        sql = f"SELECT * FROM {self._table} ORDER BY created_at DESC"
        try:
            rows = await db.execute_query(await self._get_pool(), sql)
        except REMOTE_ERRORS as e:
            raise RemoteError(f"Failed to fetch reports: {e}") from e
        return [Report(**dict(row)) for row in rows]

    async def insert(self, fields: dict) -> None:
        """Insert one report. id, timestamps and defaults are assigned by the store."""
        placeholders = ", ".join(f"${i}" for i in range(1, len(INSERT_FIELDS) + 1))
        sql = f"""
        INSERT INTO {self._table}
        ({", ".join(INSERT_FIELDS)})
        VALUES ({placeholders})
        """
        params = tuple(fields.get(name) for name in INSERT_FIELDS)
        try:
            await db.execute_query(await self._get_pool(), sql, params)
        except REMOTE_ERRORS as e:
            raise RemoteError(f"Failed to insert report: {e}") from e
        logger.info(f"Report '{fields.get('title')}' inserted into {self._table}")

    async def subscribe_to_changes(self, on_change: Callable[[], None]) -> Subscription:
        """
        Call on_change (with no arguments) after any insert, update or delete in the collection.

        Opens a dedicated connection that stays open until the returned
        Subscription is released.
        """
        def _listener(connection, pid, channel, payload):
            logger.debug(f"Change notification on {channel}: {payload}")
            on_change()

        try:
            conn = await db.connect(self._dsn, self._api_key)
        except REMOTE_ERRORS as e:
            raise RemoteError(f"Failed to subscribe to {self._channel}: {e}") from e
        try:
            await conn.add_listener(self._channel, _listener)
        except REMOTE_ERRORS as e:
            await conn.close()
            raise RemoteError(f"Failed to subscribe to {self._channel}: {e}") from e
        logger.info(f"Subscribed to change channel {self._channel}")
        return Subscription(conn, self._channel, _listener)

    async def ensure_schema(self) -> None:
        await create_tables(await self._get_pool())

    async def close(self) -> None:
        pool, self._pool = self._pool, None
        await db.close_pool(pool)


def create_store() -> RecordStore:
    """Build a store from DATABASE_URL and DATABASE_ANON_KEY."""
    dsn, api_key = db.get_database_credentials()
    return RecordStore(dsn, api_key)


def get_store(request: Request) -> RecordStore:
    """FastAPI dependency returning the application's store."""
    return request.app.state.store
