"""FastAPI application factory"""

import logging
from typing import Optional

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from payment_optimizer.api.dependencies import get_settings
from payment_optimizer.api.middleware import MetricsMiddleware, RequestIDMiddleware
from payment_optimizer.api.v1 import allocations, score
from payment_optimizer.config import Settings, settings as default_settings
from payment_optimizer.domain.models import Strategy
from payment_optimizer.infrastructure.observability.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the stateless allocation service.

    Args:
        app_settings: Engine and logging configuration; defaults to the
            environment-loaded settings

    Returns:
        App exposing /health, /metrics and the /v1 allocation routes
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level)

    app = FastAPI(
        title="Payment Optimizer",
        description="Multi-card payment allocation and credit score impact service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.dependency_overrides[get_settings] = lambda: app_settings

    # Last added runs first: request id must exist before metrics observe the call
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": app_settings.service_name,
            "strategies": [strategy.value for strategy in Strategy],
        }

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(allocations.router, prefix="/v1", tags=["allocations"])
    app.include_router(score.router, prefix="/v1", tags=["score"])

    logger.info(
        "Application configured",
        extra={
            "service": app_settings.service_name,
            "baseline_score": app_settings.baseline_score,
            "healthy_utilization_threshold": app_settings.healthy_utilization_threshold,
        },
    )

    return app


app = create_app()
