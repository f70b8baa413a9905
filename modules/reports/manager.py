import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from modules.shared.models import SEVERITIES
from modules.shared.store import RemoteError
from .models import FORM_FIELDS, REQUIRED_FIELDS, SEVERITY_OPTIONS
from .utils import empty_fields, missing_fields, build_insert_payload

logger = logging.getLogger("reports.manager")

# Seconds the success banner stays up before the parent is told
SUCCESS_DWELL_SECONDS = 1.5

ERROR_MESSAGE = "Failed to submit report. Please try again."
SUCCESS_MESSAGE = "Report submitted successfully!"


class FormValidationError(ValueError):
    def __init__(self, fields: List[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(fields)}")
        self.fields = fields


class ReportForm:
    """
    Six-field report form that submits one insert per submit().

    On success the fields reset, the success banner shows for
    `success_dwell` seconds and then `on_success` is awaited. On failure
    the error banner shows and the fields are kept for another attempt.
    """

    name = "report"

    def __init__(
        self,
        store,
        on_success: Optional[Callable[[], Awaitable[None]]] = None,
        on_update: Optional[Callable[[], Awaitable[None]]] = None,
        success_dwell: float = SUCCESS_DWELL_SECONDS,
    ) -> None:
        self.store = store
        self.on_success = on_success
        self.on_update = on_update
        self.success_dwell = success_dwell
        self.fields = empty_fields()
        self.is_submitting = False
        self.submit_status = "idle"
        self._pending = set()

    async def mount(self) -> None:
        pass

    async def unmount(self) -> None:
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    def update_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown field: {name}")
        if name == "severity" and value not in SEVERITIES:
            raise ValueError(f"Unknown severity: {value}")
        self.fields[name] = value

    async def submit(self) -> bool:
        """Returns True when the report was stored."""
        missing = missing_fields(self.fields, REQUIRED_FIELDS)
        if missing:
            raise FormValidationError(missing)
        if self.is_submitting:
            logger.debug("Submit ignored, a submission is already in flight")
            return False

        self.is_submitting = True
        self.submit_status = "idle"
        try:
            await self._notify()
            await self.store.insert(build_insert_payload(self.fields))
        except RemoteError:
            logger.exception("Error submitting report")
            self.submit_status = "error"
            return False
        finally:
            self.is_submitting = False

        logger.info("Report submitted successfully")
        self.submit_status = "success"
        self.fields = empty_fields()
        task = asyncio.create_task(self._finish())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    async def _finish(self) -> None:
        await asyncio.sleep(self.success_dwell)
        # on_success may unmount this form, which must not cancel the callback itself
        self._pending.discard(asyncio.current_task())
        if self.on_success is not None:
            await self.on_success()

    async def _notify(self) -> None:
        if self.on_update is not None:
            await self.on_update()

    def render(self) -> dict:
        banner = None
        if self.submit_status == "error":
            banner = {"kind": "error", "message": ERROR_MESSAGE}
        elif self.submit_status == "success":
            banner = {"kind": "success", "message": SUCCESS_MESSAGE}

        return {
            "view": self.name,
            "title": "Report Water Issue",
            "fields": dict(self.fields),
            "required": list(REQUIRED_FIELDS),
            "severity_options": [{"value": v, "label": label} for v, label in SEVERITY_OPTIONS],
            "status": self.submit_status,
            "banner": banner,
            "submit_label": "Submitting..." if self.is_submitting else "Submit Report",
            "submit_disabled": self.is_submitting,
        }
