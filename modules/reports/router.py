from fastapi import APIRouter, Depends
import logging

from modules.shared.response import success_response, error_response
from modules.shared.store import RecordStore, RemoteError, get_store
from .manager import ReportForm, ERROR_MESSAGE, SUCCESS_MESSAGE
from .models import ReportSubmit
from .utils import build_insert_payload

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/form")
async def get_form(store: RecordStore = Depends(get_store)):
    """Blank form: default values, required fields and severity choices."""
    return success_response(ReportForm(store).render(), "Form retrieved successfully")

@router.post("/submit")
async def submit(report: ReportSubmit, store: RecordStore = Depends(get_store)):
    logger.info(f"Submitting report: {report.title!r} at {report.location!r}")
    try:
        await store.insert(build_insert_payload(report.model_dump()))
    except RemoteError:
        logger.exception("Error submitting report")
        return error_response(ERROR_MESSAGE, 502)
    return success_response(None, SUCCESS_MESSAGE)
