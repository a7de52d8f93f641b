"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from invoice_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from invoice_gateway.api.v1 import billing, installments, projections
from invoice_gateway.infrastructure.observability.logging import setup_logging
from invoice_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Invoice Gateway",
        description="Billing cycle and installment schedule calculations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
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
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(billing.router, prefix="/v1", tags=["billing"])
    app.include_router(projections.router, prefix="/v1", tags=["projections"])

    return app


app = create_app()
