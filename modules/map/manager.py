import logging
from typing import Awaitable, Callable, List, Optional

from modules.shared.models import Report
from modules.shared.store import RemoteError
from modules.shared.utils import pluralize
from .models import LocationGroup
from .utils import group_by_location, render_group, render_detail

logger = logging.getLogger(__name__)


class MapView:
    """Reports grouped by location, with a detail panel for one selected report."""

    name = "map"

    def __init__(self, store, on_update: Optional[Callable[[], Awaitable[None]]] = None) -> None:
        self.store = store
        self.on_update = on_update
        self.reports: List[Report] = []
        self.loading = True
        self.selected: Optional[Report] = None

    async def mount(self) -> None:
        await self.refresh()

    async def unmount(self) -> None:
        pass

    async def refresh(self) -> None:
        # A refetch leaves any current selection as is, even if it is now stale
        try:
            self.reports = await self.store.query()
            logger.info(f"Fetched {len(self.reports)} reports for location view")
        except RemoteError:
            logger.exception("Error fetching reports")
        finally:
            self.loading = False

    @property
    def groups(self) -> List[LocationGroup]:
        return group_by_location(self.reports)

    def select_group(self, location: str) -> Report:
        """Show the newest report of the group at `location`."""
        for group in self.groups:
            if group.location == location:
                self.selected = group.reports[0]
                return self.selected
        raise KeyError(location)

    def clear_selection(self) -> None:
        self.selected = None

    def render(self) -> dict:
        if self.loading:
            return {"view": self.name, "loading": True}

        groups = self.groups
        return {
            "view": self.name,
            "loading": False,
            "title": "Location-Based View",
            "summary": f"{pluralize(len(groups), 'location')} with reported issues",
            "groups": [render_group(g) for g in groups],
            "empty_message": None if groups else "No locations with reports found.",
            "selected": render_detail(self.selected) if self.selected else None,
            "placeholder": None if self.selected else "Select a location to view details",
        }
