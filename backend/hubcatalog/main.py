"""
Hub Catalog FastAPI Application
Plugin, tag, issue and FAQ catalog served over a JSON API
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, Optional, Union

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .database import StorageEngine
from .middleware.error_handling import register_exception_handlers
from .middleware.metrics import PrometheusMiddleware
from .routes import faqs, issues, plugins, tags
from .services.prometheus_metrics import get_metrics_instance

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} {settings.app_version}...")

    storage = StorageEngine.from_settings(settings)
    if storage.initialize():
        logger.info("Catalog tables ready")
    else:
        # Keep serving; each storage-backed request fails with PersistenceError
        logger.error("Catalog store unavailable - storage-backed requests will fail")
    app.state.storage = storage

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    storage.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the catalog application.

    Args:
        settings: Overrides the environment-derived settings (used by tests)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Community hub catalog of plugins, tags, issues and FAQs",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(PrometheusMiddleware)

    public_dir = Path(settings.public_dir)

    @app.get("/", include_in_schema=False, response_model=None)
    async def root() -> Union[FileResponse, Dict[str, Any]]:
        """Serve the hub front page."""
        index_html = public_dir / "index.html"
        if index_html.is_file():
            return FileResponse(index_html)
        return {"message": f"{settings.app_name} API", "version": settings.app_version}

    @app.get("/health")
    async def health_check(request: Request) -> JSONResponse:
        """Health check endpoint for container orchestration."""
        storage: StorageEngine = request.app.state.storage

        # Synchronous DB check runs in the thread pool
        loop = asyncio.get_event_loop()
        db_healthy = await loop.run_in_executor(None, storage.check_health)

        health_status = {
            "status": "healthy" if db_healthy else "degraded",
            "timestamp": time.time(),
            "version": settings.app_version,
            "database": "healthy" if db_healthy else "unhealthy",
        }
        if not db_healthy:
            return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status)
        return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(
            content=get_metrics_instance().get_metrics(),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    app.include_router(plugins.router)
    app.include_router(tags.router)
    app.include_router(issues.router)
    app.include_router(faqs.router)

    # Mounted last so API routes take precedence over same-named files
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")
        logger.info(f"Serving static files from {public_dir}")

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("hubcatalog.main:app", host=settings.host, port=settings.port)
