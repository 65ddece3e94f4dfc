"""
FastAPI Application Entry Point - Order email notifications

Runs apart from the storefront API and without its CORS allow-list; the
endpoint sets its own permissive CORS headers.
"""
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from nursery import __version__
from nursery.config import settings
from nursery.api import notifications
from nursery.utils.logging import configure_logging

configure_logging(settings.LOG_LEVEL)

# Create FastAPI application (minimal - one stub endpoint)
app = FastAPI(
    title="Nursery Notifications",
    description="Logs order confirmation emails instead of sending them",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.include_router(notifications.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.get("/health", tags=["health"])
def health_check():
    """Health check endpoint"""
    return {
        "service": f"{settings.SERVICE_NAME}-notifications",
        "status": "healthy"
    }
