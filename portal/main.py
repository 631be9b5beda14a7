# portal/main.py

import sys

from fastapi import FastAPI
from loguru import logger

from portal.core.config import settings
from portal.core.session_store import SessionStore
from portal.services.api_client import ApiClient
from portal.services.auth_service import AuthContext

# Routers
from portal.api.endpoints import (
    applications as applications_router,
    auth as auth_router,
    inquiry as inquiry_router,
    profile as profile_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    level=settings.LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV == "dev",
)


def create_app(
    store: SessionStore | None = None,
    api_client: ApiClient | None = None,
) -> FastAPI:
    app = FastAPI(
        title="University Housing Portal",
        version="1.0.0",
        description="Student portal for submitting and tracking university-housing applications.",
    )

    # --------------------------------------------------------
    # SHARED STATE
    # --------------------------------------------------------
    store = store or (api_client.store if api_client else SessionStore())
    app.state.api_client = api_client or ApiClient(store)
    app.state.auth = AuthContext(store)

    # --------------------------------------------------------
    # REGISTER ROUTERS
    # --------------------------------------------------------
    app.include_router(auth_router.router)
    app.include_router(applications_router.router)
    app.include_router(inquiry_router.router)
    app.include_router(profile_router.router)

    # --------------------------------------------------------
    # LIFECYCLE
    # --------------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("Starting University Housing Portal...")
        state = app.state.auth.initialize()
        logger.info(f"Auth state on startup: {state.status.value}")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.api_client.aclose()
        logger.info("Backend client closed.")

    # --------------------------------------------------------
    # ROOT HEALTH CHECK
    # --------------------------------------------------------
    @app.get("/", tags=["System"])
    async def root():
        return {
            "status": "ok",
            "service": "University Housing Portal",
            "version": app.version,
            "backend": settings.API_BASE_URL or None,
        }

    return app


app = create_app()
