"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from cashflow_tracker.api.middleware import RequestIDMiddleware, MetricsMiddleware
from cashflow_tracker.api.v1 import expenses, forecast, incomes, profile
from cashflow_tracker.infrastructure.database.session import init_db
from cashflow_tracker.infrastructure.observability.logging import setup_logging
from cashflow_tracker.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Cash-Flow Tracker",
        description="Income, expense and salary tracking with projected cash balance",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(incomes.router, prefix="/v1", tags=["incomes"])
    app.include_router(expenses.router, prefix="/v1", tags=["expenses"])
    app.include_router(profile.router, prefix="/v1", tags=["profile"])
    app.include_router(forecast.router, prefix="/v1", tags=["forecast"])

    return app


app = create_app()
