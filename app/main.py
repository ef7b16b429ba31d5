from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.headlines import router as headlines_router
from app.api.headlines import sites_router
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.crawler.sites import get_site_specs


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    # Load the site table once so configuration errors surface at startup
    get_site_specs()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Aggregated news headlines with optional country statistics",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(headlines_router, prefix="/api/v1")
    app.include_router(sites_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
