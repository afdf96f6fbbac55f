"""Main entry point for NutriTrack."""

import logging

import uvicorn
from fastapi import FastAPI

from nutritrack.api import router as api_router
from nutritrack.config import get_settings


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app = FastAPI(
    title="NutriTrack API",
    description="Meal plans, recipes, community challenges and coaching for nutrition tracking",
    version="1.0.0",
)
app.include_router(api_router)


@app.get("/health")
async def health():
    settings = get_settings()
    return {
        "status": "ok",
        "store": settings.store_backend,
        "ai_provider": settings.ai_provider,
    }


def run():
    """Run the API server."""
    configure_logging()
    settings = get_settings()
    logger.info("Starting NutriTrack API on %s:%s", settings.api_host, settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
