"""
Floor Plan - Main Application Entry Point
Backing store for the restaurant floor plan: tables, zones, orders, QR tokens
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import structlog

from floorplan.core.config import get_settings
from floorplan.core.database import init_db
from floorplan.api import tables, zones, orders, guest

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing floor plan backend")
    init_db()

    yield

    # Shutdown
    logger.info("Shutting down floor plan backend")


# Create FastAPI application
app = FastAPI(
    title="Floor Plan API",
    description="Multi-tenant restaurant floor plan: tables, zones, positions and QR ordering",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
restaurant_prefix = f"{settings.API_V1_PREFIX}/restaurants/{{restaurant_id}}"
app.include_router(tables.router, prefix=f"{restaurant_prefix}/tables", tags=["tables"])
app.include_router(zones.router, prefix=f"{restaurant_prefix}/zones", tags=["zones"])
app.include_router(orders.router, prefix=f"{restaurant_prefix}/orders", tags=["orders"])
app.include_router(guest.router, prefix=f"{settings.API_V1_PREFIX}/guest", tags=["guest"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "floorplan-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "floorplan.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
