# AutoLead CRM backend entrypoint: dealership lead management API.

import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from autolead.app.api import analytics
from autolead.app.api import email_ingestion
from autolead.app.api import leads
from autolead.app.api import login
from autolead.app.core.logger import get_logger
from autolead.app.core.settings import get_settings
from autolead.app.core.time import utc_now
from autolead.app.db import base  # noqa: F401  registers every model with the mapper
from autolead.app.db.session import Database, get_database
from autolead.app.middlewares.rate_limit import RateLimitMiddleware
from autolead.app.middlewares.security_headers import SecurityHeadersMiddleware

logger = get_logger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    settings = get_settings()
    database = database or get_database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s (%s)", settings.app_name, settings.environment)
        yield
        app.state.database.dispose()
        logger.info("Database connections released")

    app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)
    app.state.database = database

    # Last added runs first: CORS, then security headers, then the rate limiter
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Server error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    app.include_router(login.router)
    app.include_router(leads.router)
    app.include_router(email_ingestion.router)
    app.include_router(analytics.router)

    @app.get("/health")
    def health_check():
        return {"status": "OK", "timestamp": utc_now().isoformat()}

    if settings.is_production and os.path.isdir(settings.client_build_dir):
        # Registered last so API routes take precedence over the client bundle
        add_client_routes(app, settings.client_build_dir)
    else:

        @app.get("/")
        def read_root():
            return {"app": "AutoLead CRM backend", "status": "ok"}

    return app


def add_client_routes(app: FastAPI, build_dir: str) -> None:
    """Serve the built client: real files as-is, every other non-API GET gets index.html."""
    root = os.path.realpath(build_dir)
    index_file = os.path.join(root, "index.html")

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_client(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = os.path.realpath(os.path.join(root, full_path))
        if full_path and candidate.startswith(root + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        return FileResponse(index_file)


app = create_app()


def run() -> None:
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "3000")))


if __name__ == "__main__":
    run()
