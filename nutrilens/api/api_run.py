from fastapi import FastAPI, HTTPException, Query
from typing import Optional
import logging

from nutrilens.events.web_observers import (
    dismiss as dismiss_web_event,
    get_events as get_web_events,
    start as start_event_observers,
)
from nutrilens.utilities.constants import ALLERGIES_LIST, DAILY_GOALS, DIET_OPTIONS, SLOTS

# Routers
from nutrilens.api.api_ai import router as ai_router
from nutrilens.api.routes import nutrition, profile, scan, tracker

# Logging
logger = logging.getLogger("nutrilens_app")

# Initialize FastAPI app
app = FastAPI(title="NutriLens Diet Tracker API")

# Include routers
app.include_router(ai_router)
app.include_router(nutrition.router)
app.include_router(scan.router)
app.include_router(tracker.router)
app.include_router(profile.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web notices when the app starts."""
    start_event_observers()
    logger.info("Web observers for planner and lookup notices started")


@app.get("/")
def index():
    """Vocabularies the client needs to build its forms."""
    return {
        "name": app.title,
        "slots": list(SLOTS),
        "diets": DIET_OPTIONS,
        "allergies": ALLERGIES_LIST,
        "goals": DAILY_GOALS,
    }


# -------------------- Notices --------------------
@app.get("/api/events")
def list_events(since: Optional[int] = Query(default=None, ge=0)):
    """Transient warnings (fallback plans, failed lookups) newer than `since`."""
    return get_web_events(since)


@app.delete("/api/events/{event_id}")
def dismiss_event(event_id: int):
    if not dismiss_web_event(event_id):
        raise HTTPException(status_code=404, detail="Notice not found")
    return {"status": "dismissed", "id": event_id}
