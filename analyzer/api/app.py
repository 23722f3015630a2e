from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from analyzer.api.dependencies import AppServices
from analyzer.api.errors import register_exception_handlers
from analyzer.api.middleware import RequestLoggingMiddleware
from analyzer.api.routes import analysis, auth, meta
from analyzer.config.settings import Settings


def create_app(settings: Settings, services: AppServices) -> FastAPI:
    """Create the FastAPI application around already-built services."""
    app = FastAPI(
        title="Accessibility Analyzer",
        description="WCAG accessibility reports with per-user history",
        version=settings.app_version,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app, settings)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(analysis.router, prefix=settings.api_prefix)
    app.include_router(meta.router, prefix=settings.api_prefix)
    return app
