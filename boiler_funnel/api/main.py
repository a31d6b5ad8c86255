"""FastAPI application factory"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from boiler_funnel.api.middleware import RequestIDMiddleware, MetricsMiddleware
from boiler_funnel.api.routes import booking, finance, forms, payments, products
from boiler_funnel.infrastructure.observability.logging import setup_logging
from boiler_funnel.config import settings

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Boiler Funnel API",
        description="Quote, finance, booking and checkout service for boiler replacements",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added = first executed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
    )

    @app.get("/health")
    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(forms.router, prefix="/api/forms", tags=["forms"])
    app.include_router(products.router, prefix="/api/products", tags=["products"])
    app.include_router(finance.router, prefix="/api/finance", tags=["finance"])
    app.include_router(booking.router, prefix="/api/booking", tags=["booking"])
    app.include_router(payments.router, prefix="/api/payments", tags=["payments"])

    return app


app = create_app()
