"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from caderninho.api.middleware import RequestIDMiddleware, MetricsMiddleware
from caderninho.api.v1 import cards, entries, establishments, expenses, installments, limits, statement
from caderninho.infrastructure.database.session import init_db
from caderninho.infrastructure.observability.logging import setup_logging
from caderninho.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Caderninho API",
        description="Expenses, credit card installments, spending limits and monthly statements",
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
    app.include_router(cards.router, prefix="/v1", tags=["cards"])
    app.include_router(establishments.router, prefix="/v1", tags=["establishments"])
    app.include_router(expenses.router, prefix="/v1", tags=["expenses"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(limits.router, prefix="/v1", tags=["spending-limits"])
    app.include_router(entries.router, prefix="/v1", tags=["monthly-entries"])
    app.include_router(statement.router, prefix="/v1", tags=["statements"])

    return app


app = create_app()
