"""FastAPI application for the Reports Service."""
from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

from libs.common.middleware import add_observability_middleware
from services.reports_service.router import router as reports_router


def create_app() -> FastAPI:
    """Create and configure the Reports Service FastAPI app."""
    app = FastAPI(
        title="Community Reports Service",
        version="0.1.0",
        description="Recurring attendance analytics for Community Worship and Word Sharing Circles.",
    )
    add_observability_middleware(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "reports"}

    app.include_router(reports_router)

    return app


app = create_app()
