import logging

from fastapi import FastAPI

from app.config import settings
from app.tracker.router import router as tracker_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="GoalTracker", version="0.1.0")
app.include_router(tracker_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "tracker": {
            "month_analytics": "/tracker/analytics/month",
            "goal_analytics": "/tracker/analytics/goals/{goal_id}",
            "operations": "/tracker/analytics/operations",
            "vision": "/tracker/analytics/vision",
            "catalog": "/tracker/catalog",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
