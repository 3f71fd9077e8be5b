"""ComplianceLens — FastAPI application entry point."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from backend.config import settings
from backend.logging_config import setup_logging

from backend.api.dashboard import router as dashboard_router
from backend.api.deadlines import router as deadlines_router
from backend.api.deps import get_store
from backend.api.incidents import router as incidents_router
from backend.observability.metrics import metrics
from backend.store.base import RecordStore

logger = logging.getLogger("compliancelens")

SERVICE_VERSION = "0.3.0"


def _startup_checks() -> None:
    """Log warnings for misconfigured or missing settings."""
    startup_errors: list[str] = []

    try:
        pinned = settings.pinned_now
    except ValueError:
        msg = f"REFERENCE_NOW is not a valid ISO-8601 instant: {settings.reference_now!r}; using the wall clock"
        logger.warning(f"⚠  {msg}")
        startup_errors.append(msg)
        pinned = None

    if pinned is not None:
        msg = f"Clock pinned to {pinned.isoformat()} via REFERENCE_NOW"
        logger.warning(f"⚠  {msg}")
        if settings.is_production:
            startup_errors.append(msg)

    if settings.is_production and not settings.cors_origins_list:
        msg = "APP_ENV=production but CORS_ORIGINS is empty"
        logger.warning(f"⚠  {msg}")
        startup_errors.append(msg)

    if settings.is_production and settings.enable_demo_data:
        msg = "APP_ENV=production with ENABLE_DEMO_DATA=true; dashboards will show fixture records"
        logger.warning(f"⚠  {msg}")

    if settings.strict_startup_validation and startup_errors:
        raise RuntimeError("Startup validation failed: " + " | ".join(startup_errors))

    if settings.enable_demo_data:
        logger.info("○ Serving demo fixture records")
    logger.info(
        f"○ Expiring-soon window: {settings.expiring_soon_window_days}d, "
        f"SLA at-risk threshold: {settings.sla_at_risk_hours}h"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    setup_logging(settings.log_level)
    _startup_checks()
    logger.info("✦ ComplianceLens API started")

    yield

    logger.info("✦ ComplianceLens API shutting down")


app = FastAPI(
    title="ComplianceLens",
    description="Compliance risk & SLA scoring API",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request tracing + access log middleware
@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.perf_counter()

    response: Response = await call_next(request)

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    response.headers["X-Request-ID"] = request_id
    metrics.observe_request(request.url.path, response.status_code, duration_ms)
    logger.info(
        "request completed",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


# Security headers middleware
@app.middleware("http")
async def security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


# Routers
app.include_router(dashboard_router)
app.include_router(incidents_router)
app.include_router(deadlines_router)


@app.get("/")
async def root():
    return JSONResponse(
        {
            "service": "compliancelens-api",
            "status": "ok",
            "endpoints": {
                "health": "/api/health",
                "overview": "/api/dashboard/overview",
                "docs": "/docs",
            },
        }
    )


def _clock_pinned() -> bool:
    try:
        return settings.pinned_now is not None
    except ValueError:
        return False


async def _store_ready(store: RecordStore) -> bool:
    try:
        return await store.health_check()
    except Exception:
        logger.exception("record store readiness check failed")
        return False


@app.get("/api/health")
async def health_check(store: RecordStore = Depends(get_store)):
    store_ready = await _store_ready(store)
    return {
        "status": "healthy" if store_ready else "degraded",
        "service": "compliancelens",
        "version": SERVICE_VERSION,
        "store_ready": store_ready,
        "clock_pinned": _clock_pinned(),
    }


@app.get("/api/health/live")
async def liveness_check():
    return {"status": "alive", "service": "compliancelens"}


@app.get("/api/metrics")
async def get_metrics():
    return {
        "service": "compliancelens",
        "version": SERVICE_VERSION,
        "metrics": metrics.snapshot(),
    }


@app.get("/api/health/ready")
async def readiness_check(response: Response, store: RecordStore = Depends(get_store)):
    store_ready = await _store_ready(store)
    if not store_ready:
        response.status_code = 503

    return {
        "status": "ready" if store_ready else "not_ready",
        "checks": {"store": store_ready},
    }
