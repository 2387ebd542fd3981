from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio.core.config import get_settings
from portfolio.core.log import configure_logging
from portfolio.routers import projects as projects_router
from portfolio.routers import slug as slug_router
from portfolio.services.project_service import ProjectService
from portfolio.services.slug_service import SlugService

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Factory compatível com uvicorn/gunicorn."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Portfolio Admin API")

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            }
        )
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    slug_service = SlugService()
    app.state.slug_service = slug_service
    app.state.project_service = ProjectService(slug_service.repository, slug_service)

    app.include_router(slug_router.router)
    app.include_router(projects_router.router)
    log.info("Portfolio API pronta (env=%s)", settings.app_env)
    return app
