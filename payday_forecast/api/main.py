"""FastAPI application factory"""

from fastapi import Depends, FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from payday_forecast.api.dependencies import get_settings
from payday_forecast.api.middleware import RequestIDMiddleware, MetricsMiddleware
from payday_forecast.api.v1 import forecast, health, history, actions
from payday_forecast.infrastructure.observability.logging import setup_logging
from payday_forecast.config import Settings, settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Payday Forecast",
        description="Balance forecast, budget health and payday history service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check(config: Settings = Depends(get_settings)):
        return {"status": "ok", "service": config.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(forecast.router, prefix="/v1", tags=["forecast"])
    app.include_router(health.router, prefix="/v1", tags=["health"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(actions.router, prefix="/v1", tags=["actions"])

    return app


app = create_app()
