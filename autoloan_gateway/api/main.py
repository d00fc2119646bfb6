"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from autoloan_gateway.api.middleware import MetricsMiddleware, RequestIDMiddleware
from autoloan_gateway.api.v1 import amortization, evaluation, score, tax_presets
from autoloan_gateway.config import settings
from autoloan_gateway.infrastructure.observability.logging import setup_logging

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Auto Loan Gateway",
        description="Auto-loan affordability, underwriting and lender offer service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added = first executed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(evaluation.router, prefix="/v1", tags=["evaluations"])
    app.include_router(amortization.router, prefix="/v1", tags=["amortization"])
    app.include_router(score.router, prefix="/v1", tags=["risk"])
    app.include_router(tax_presets.router, prefix="/v1", tags=["tax"])

    return app


app = create_app()
