"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from agritag.config import settings
from agritag.api.rate_limit import limiter
from agritag.middleware.error_handler import ErrorHandlerMiddleware
from agritag.api.v1.routers import advisory, dashboards, projects, subjects, tags

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Document store: {settings.document_store_base_url}")
    logger.info(f"Harvest config: maturity_age={settings.harvest_maturity_age}, "
                f"fast_varieties={settings.harvest_fast_varieties}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")
    if not settings.weather_api_key:
        logger.warning("WEATHER_API_KEY is not set, dashboards will run without weather")

    yield

    # Shutdown
    from agritag.infrastructure.document_store_client import get_document_store_client
    from agritag.infrastructure.weather_client import get_weather_client
    logger.info("Shutting down application...")
    await get_document_store_client().close()
    await get_weather_client().close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    description="""
    Field Tagging API for Trees and Farm Animals

    Field users scan barcode/NFC tags on trees and animals, record timestamped
    observations against them, and review each project on a map with
    weather-driven care advice.

    ## Features

    - **Tag Decoding**: Resolve compact tag payloads to device class, tier,
      species and serial; unknown codes never block a scan
    - **Append-only Logs**: Every record is a new log entry; fields left out
      carry over from the subject's latest entry
    - **Harvest Forecast**: Flowering and harvest dates from the latest care
      date, pushed back for cold, extreme heat and rain
    - **Animal Health**: Weight, vaccination and production checks
    - **Dashboards**: Activity statistics, log series and GeoJSON map features
    - **Rate Limiting**: Protects the API from abuse

    ## Tag Layout

    `<DeviceClass:2><Version:1><SpeciesCode:2><Serial>`, e.g. `ST1AP0001`
    is a Smart Tree tag, Standard tier, Alpukat (avocado), serial 0001.
    Device class `ST` selects the tree species table, anything else the
    animal table.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(tags.router, prefix="/api/v1")
app.include_router(projects.router, prefix="/api/v1")
app.include_router(subjects.router, prefix="/api/v1")
app.include_router(dashboards.router, prefix="/api/v1")
app.include_router(advisory.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
