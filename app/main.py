from fastapi import Depends, FastAPI

from app.api import get_api_router
from core.config import Settings, get_settings
from core.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Recurring Date Picker", version="0.1.0")

# Include API routes
app.include_router(get_api_router())


@app.get("/api/health")
async def health(settings: Settings = Depends(get_settings)) -> dict:
    return {"status": "ok", "max_count": settings.max_count, "timezone": settings.timezone}
