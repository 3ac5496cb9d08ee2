# slotify/main.py
"""
FastAPI application entry point.
Includes request timing middleware, global error handlers, and all routers.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slotify.config import settings
from slotify.database import Database
from slotify.routers import auth, checkins, flags, health, reports, slots, users
from slotify.utils.errors import AppError
from slotify.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    owns_db = getattr(app.state, "db", None) is None
    if owns_db:
        app.state.db = Database(settings.DATABASE_URL)

    logger.info("🚀 Slotify Backend starting up...")
    app.state.db.create_tables()
    logger.info("✅ Database tables ready")

    if settings.SEED_DEFAULTS:
        from slotify.services.seed_service import seed_defaults
        session = app.state.db.SessionLocal()
        try:
            seed_defaults(session)
        finally:
            session.close()

    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT} ({settings.ENVIRONMENT})")
    logger.info("📖 API docs at /docs")

    yield

    logger.info("🛑 Slotify Backend shutting down...")
    if owns_db:
        app.state.db.dispose()
        app.state.db = None


def create_app(db: Optional[Database] = None) -> FastAPI:
    """
    Build the application. Pass an explicit Database handle to share it with
    the caller (tests, scripts); otherwise one is opened from settings at startup.
    """
    app = FastAPI(
        title="Slotify Parking API",
        description="Parking slot inventory, check-in/check-out, security flags and daily reports.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.db = db

    # ── CORS (mobile client and admin dashboard) ────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # ── Request Timing Middleware ────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    # ── Exception Handlers ───────────────────────────────────────────────────
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "INTERNAL_ERROR", "message": "An unexpected error occurred"},
        )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(auth.router,     prefix="/api/v1", tags=["🔑 Auth"])
    app.include_router(slots.router,    prefix="/api/v1", tags=["🅿️  Slots"])
    app.include_router(checkins.router, prefix="/api/v1", tags=["🚗 Check-ins"])
    app.include_router(flags.router,    prefix="/api/v1", tags=["🚨 Flags"])
    app.include_router(reports.router,  prefix="/api/v1", tags=["📊 Reports"])
    app.include_router(users.router,    prefix="/api/v1", tags=["👥 Users"])
    app.include_router(health.router,   prefix="/api/v1", tags=["💚 Health"])

    return app


app = create_app()
