import asyncio
import logging
from typing import Awaitable, Callable, Optional

from modules.alerts.manager import AlertListView
from modules.map.manager import MapView
from modules.reports.manager import ReportForm, SUCCESS_DWELL_SECONDS
from .models import View, VIEWS, APP_TITLE, NAV_ITEMS, FOOTER

logger = logging.getLogger(__name__)

# Pause between the form's success callback and returning to the list
NAVIGATE_HOME_DELAY_SECONDS = 0.5


class Shell:
    """
    Holds which of the three views is showing and owns that view.

    Every view gets the same store. Switching views unmounts the old one
    (which drops its change subscription) and mounts a fresh instance, so a
    half-filled report form is discarded when the user navigates away.
    """

    def __init__(
        self,
        store,
        on_render: Optional[Callable[[], Awaitable[None]]] = None,
        navigate_delay: float = NAVIGATE_HOME_DELAY_SECONDS,
        form_dwell: float = SUCCESS_DWELL_SECONDS,
    ) -> None:
        self.store = store
        self.on_render = on_render
        self.navigate_delay = navigate_delay
        self.form_dwell = form_dwell
        self.current_view = "home"
        self.view = None
        self.stopped = False

    async def start(self) -> None:
        await self.navigate("home")

    async def stop(self) -> None:
        self.stopped = True
        view, self.view = self.view, None
        if view is not None:
            await view.unmount()

    async def navigate(self, view_name: View) -> None:
        if view_name not in VIEWS:
            raise ValueError(f"Unknown view: {view_name}")
        if self.stopped:
            logger.debug(f"Ignoring navigation to {view_name} on a stopped shell")
            return
        logger.info(f"Navigating from {self.current_view} to {view_name}")
        previous = self.view
        self.current_view = view_name
        view = self.view = self._build(view_name)
        if previous is not None:
            await previous.unmount()
        await view.mount()
        # stop() may have run while the view was mounting
        if self.stopped:
            await view.unmount()

    def _build(self, view_name: str):
        if view_name == "home":
            return AlertListView(self.store, on_update=self._notify)
        if view_name == "report":
            return ReportForm(
                self.store,
                on_success=self.handle_report_success,
                on_update=self._notify,
                success_dwell=self.form_dwell,
            )
        return MapView(self.store, on_update=self._notify)

    async def handle_report_success(self) -> None:
        await asyncio.sleep(self.navigate_delay)
        if self.stopped:
            return
        await self.navigate("home")
        await self._notify()

    async def _notify(self) -> None:
        if self.on_render is not None:
            await self.on_render()

    def _require(self, view_name: str):
        if self.current_view != view_name:
            raise ValueError(f"Action requires the {view_name} view, current view is {self.current_view}")
        return self.view

    async def dispatch(self, message: dict) -> None:
        """
        Apply one client action to the shell or its active view.
        Raises ValueError (or KeyError) for malformed or out-of-place actions.
        """
        action = message.get("action")
        if action == "navigate":
            await self.navigate(message.get("view"))
        elif action == "filter":
            self._require("home").set_filter(message.get("value"))
        elif action == "select":
            self._require("map").select_group(message.get("location"))
        elif action == "clear_selection":
            self._require("map").clear_selection()
        elif action == "field":
            self._require("report").update_field(message.get("name"), message.get("value"))
        elif action == "submit":
            await self._require("report").submit()
        else:
            raise ValueError(f"Unknown action: {action}")

    def render(self) -> dict:
        return {
            "header": {
                "title": APP_TITLE,
                "nav": [
                    {"view": name, "label": label, "active": name == self.current_view}
                    for name, label in NAV_ITEMS
                ],
            },
            "current_view": self.current_view,
            "body": self.view.render() if self.view is not None else None,
            "footer": FOOTER,
        }
