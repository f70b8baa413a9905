from typing import Optional

from fastapi import APIRouter, Depends, Query

from modules.shared.response import success_response, error_response
from modules.shared.store import RecordStore, get_store
from .manager import MapView

router = APIRouter()

@router.get("/")
async def get_map_locations(location: Optional[str] = Query(None), store: RecordStore = Depends(get_store)):
    """
    Reports grouped by location. Pass `location` to fill the detail panel with that group's newest report.
    """
    view = MapView(store)
    await view.mount()
    if location is not None:
        try:
            view.select_group(location)
        except KeyError:
            return error_response(f"No reports at location: {location}", 404)
    return success_response(view.render(), "Map data fetched successfully")
