"""
FastAPI Application Entry Point - Nursery Service
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import SQLAlchemyError

from nursery import __version__
from nursery.config import settings
from nursery.database import init_db
from nursery.api import admin, cart, checkout, contact, health, orders, plants
from nursery.services.cart import CartRegistry
from nursery.utils.logging import configure_logging

configure_logging(settings.LOG_LEVEL)

logger = structlog.get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Nursery Service",
    description="Plant nursery storefront and back office",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Session carts, in memory only
app.state.carts = CartRegistry()

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(plants.router)
app.include_router(cart.router)
app.include_router(checkout.router)
app.include_router(contact.router)
app.include_router(admin.router)
app.include_router(orders.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures that no endpoint handled itself"""
    logger.error("storage_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage request failed"}
    )


@app.on_event("startup")
def startup_event():
    """Initialize database on startup"""
    logger.info("service_starting", service=settings.SERVICE_NAME)
    init_db()
    logger.info(
        "service_started",
        service=settings.SERVICE_NAME,
        port=settings.SERVICE_PORT,
        events_enabled=settings.EVENTS_ENABLED
    )


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("service_stopping", service=settings.SERVICE_NAME, open_carts=len(app.state.carts))
