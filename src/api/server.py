"""FastAPI app exposing intake parsing and draft assembly."""

from fastapi import FastAPI

from src.api.draft_routes import router as draft_router
from src.api.intake_routes import router as intake_router
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.api.server")


def create_app() -> FastAPI:
    """Create the FastAPI app. Every endpoint is a pure function of its request."""
    app = FastAPI(title="Campaign Intake", version="0.1.0")
    app.include_router(intake_router)
    app.include_router(draft_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.debug("api.app_created", routes=len(app.routes))
    return app
