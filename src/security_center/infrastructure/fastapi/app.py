"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ...config.logging_config import setup_logging
from ...config.settings import SecurityCenterSettings, get_settings
from ...core.exceptions.base import SecurityCenterError, create_error_response
from ...core.exceptions.http_mapping import get_http_status_code
from ...features.auth.routers import auth_router, user_router
from ...features.sessions.routers import session_router
from .container import ServiceContainer

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[SecurityCenterSettings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create the security center application.

    Args:
        settings: Settings to use; read from the environment when omitted
        container: Prebuilt services, mainly for tests; built from settings when omitted

    Raises:
        ConfigurationError: if the configured cache backend or identity provider is unknown
    """
    setup_logging()
    settings = settings or (container.settings if container else get_settings())
    container = container or ServiceContainer.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting {settings.app_name}",
            extra={"environment": settings.environment, "version": settings.app_version},
        )
        await container.startup()

        yield

        logger.info(f"Shutting down {settings.app_name}")
        await container.shutdown()

    app = FastAPI(
        title="Security Center",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.exception_handler(SecurityCenterError)
    async def security_center_error_handler(request: Request, exc: SecurityCenterError) -> JSONResponse:
        status_code = get_http_status_code(exc)
        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc}")
        else:
            logger.info(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=create_error_response(exc, expose_message=status_code < 500),
        )

    app.dependency_overrides[session_router.get_session_manager] = lambda: container.session_manager
    app.dependency_overrides[auth_router.get_auth_service] = lambda: container.auth_service

    app.include_router(session_router.router)
    app.include_router(auth_router.router)
    app.include_router(user_router.router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        cache = await container.cache_service.health_check()
        healthy = bool(cache.get("healthy"))
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "degraded",
                "service": settings.app_name,
                "version": settings.app_version,
                "environment": settings.environment,
                "checks": {"cache": cache},
            },
        )

    return app
