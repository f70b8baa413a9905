from fastapi import APIRouter, Depends, Query
import logging

from modules.shared.response import success_response, error_response
from modules.shared.store import RecordStore, get_store
from .manager import AlertListView
from .utils import is_valid_filter

# Set up logger
logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/")
async def get_alerts(status: str = Query("all"), store: RecordStore = Depends(get_store)):
    """
    Alert list with an optional status filter.
    Query parameters:
        - status: one of 'all', 'active', 'investigating', 'resolved' (default 'all')
    """
    logger.debug(f"Get alerts endpoint called with status={status}")
    if not is_valid_filter(status):
        return error_response(f"Unknown status filter: {status}", 400)

    view = AlertListView(store)
    await view.refresh()
    view.set_filter(status)
    return success_response(view.render(), "Alerts retrieved successfully")
