"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from uzhavar_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from uzhavar_gateway.api.v1 import markets, farmers, loads, sales, notifications, assistant
from uzhavar_gateway.infrastructure.database.models import Base
from uzhavar_gateway.infrastructure.database.session import engine, SessionLocal
from uzhavar_gateway.infrastructure.database.seed import seed_reference_data
from uzhavar_gateway.infrastructure.observability.logging import setup_logging
from uzhavar_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and load reference markets before serving"""
    Base.metadata.create_all(bind=engine)
    if settings.seed_reference_data:
        with SessionLocal() as db:
            seed_reference_data(db)
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Uzhavar360 Market Gateway",
        description="Crop intake, sale settlement and farmer notification service",
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
    app.include_router(markets.router, prefix="/v1", tags=["markets"])
    app.include_router(farmers.router, prefix="/v1", tags=["farmers"])
    app.include_router(loads.router, prefix="/v1", tags=["loads"])
    app.include_router(sales.router, prefix="/v1", tags=["sales"])
    app.include_router(notifications.router, prefix="/v1", tags=["notifications"])
    app.include_router(assistant.router, prefix="/v1", tags=["assistant"])

    return app


app = create_app()
