"""FastAPI application entry point."""
import logging

from fastapi import FastAPI

from . import models
from .auth import router as auth_router
from .database import engine
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="Fish Care Auth Backend", version="0.1.0")
app.include_router(auth_router)


@app.on_event("startup")
async def on_startup() -> None:
    """Configure logging and ensure database tables exist."""

    configure_logging()
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)
    logger.info("Database schema ready")


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple readiness probe for uptime checks."""

    return {"status": "ok"}
