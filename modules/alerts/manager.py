import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from modules.shared.models import Report
from modules.shared.store import RemoteError
from .models import FILTERS, FilterOption
from .utils import filter_reports, status_counts, empty_message, active_summary, render_card

logger = logging.getLogger(__name__)

OnUpdate = Callable[[], Awaitable[None]]


class AlertListView:
    """
    Every report, newest first, with a local status filter.

    mount() fetches and opens a change subscription; each change
    notification schedules a full re-fetch. unmount() releases the
    subscription. Fetch failures are logged and leave the previous set.
    """

    name = "home"

    def __init__(self, store, on_update: Optional[OnUpdate] = None) -> None:
        self.store = store
        self.on_update = on_update
        self.reports: List[Report] = []
        self.loading = True
        self.filter = "all"
        self._subscription = None
        self._refreshes = set()

    async def mount(self) -> None:
        await self.refresh()
        try:
            self._subscription = await self.store.subscribe_to_changes(self._handle_change)
        except RemoteError:
            logger.exception("Error subscribing to report changes; live updates disabled")

    async def unmount(self) -> None:
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            await subscription.unsubscribe()

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    async def refresh(self) -> None:
        try:
            self.reports = await self.store.query()
            logger.info(f"Fetched {len(self.reports)} reports")
        except RemoteError:
            logger.exception("Error fetching reports")
        finally:
            self.loading = False

    def _handle_change(self) -> None:
        logger.info("Report collection changed, re-fetching")
        # In-flight refreshes are never cancelled; the last one to finish wins
        task = asyncio.create_task(self._refresh_and_notify())
        self._refreshes.add(task)
        task.add_done_callback(self._refreshes.discard)

    async def _refresh_and_notify(self) -> None:
        await self.refresh()
        if self.on_update is not None:
            await self.on_update()

    def set_filter(self, value: str) -> None:
        if value not in FILTERS:
            raise ValueError(f"Unknown filter: {value}")
        self.filter = value

    @property
    def filtered_reports(self) -> List[Report]:
        return filter_reports(self.reports, self.filter)

    def render(self, now: Optional[datetime] = None) -> dict:
        if self.loading:
            return {"view": self.name, "loading": True}

        counts = status_counts(self.reports)
        shown = self.filtered_reports
        return {
            "view": self.name,
            "loading": False,
            "title": "Water Supply Alerts",
            "active_summary": active_summary(counts["active"]),
            "filter": self.filter,
            "filters": [
                FilterOption(
                    value=f,
                    label=f"{f.capitalize()} ({counts[f]})",
                    count=counts[f],
                    selected=f == self.filter,
                )
                for f in FILTERS
            ],
            "reports": [render_card(r, now) for r in shown],
            "empty_message": None if shown else empty_message(self.filter),
        }
