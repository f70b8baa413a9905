import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from modules.shared.store import create_store
from modules.alerts.router import router as alerts_router
from modules.map.router import router as map_router
from modules.reports.router import router as reports_router
from modules.shell.router import router as shell_router

load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title="Clean Water Alert API")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(alerts_router, prefix="/api/alerts")
app.include_router(map_router, prefix="/api/map")
app.include_router(reports_router, prefix="/api/reports")
app.include_router(shell_router, prefix="/api/session")


def _env_flag(name):
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


@app.on_event("startup")
async def startup_event():
    """Create the report store handle; it connects on first use"""
    if getattr(app.state, "store", None) is None:
        app.state.store = create_store()
    if _env_flag("DATABASE_BOOTSTRAP_SCHEMA"):
        logger.info("Bootstrapping water reports schema")
        await app.state.store.ensure_schema()

@app.on_event("shutdown")
async def shutdown_event():
    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
