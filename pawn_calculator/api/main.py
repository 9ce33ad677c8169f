"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from pawn_calculator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from pawn_calculator.api.v1 import options, quote, weights
from pawn_calculator.infrastructure.database.session import init_db
from pawn_calculator.infrastructure.observability.logging import setup_logging
from pawn_calculator.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Pawnshop Loan Calculator",
        description="Collateral-weighted loan rate and repayment schedule service",
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
    app.include_router(options.router, prefix="/v1", tags=["options"])
    app.include_router(quote.router, prefix="/v1", tags=["quotes"])
    app.include_router(weights.router, prefix="/v1", tags=["weights"])

    return app


app = create_app()
