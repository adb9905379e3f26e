"""
FastAPI Backend for ZONECHECK.

Provides REST API endpoints for:
- Zone geometry canonicalization
- Commercial zone overlap checks for the map editor
- GeoJSON serialization of editor polygons
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from api.config import settings
from api.middleware import setup_middleware
from api.routers import system, zones
from zonecheck import __version__

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(message)s',  # JSON logs are self-contained
)
logger = logging.getLogger(__name__)


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    """
    Application factory for ZONECHECK API.

    Returns:
        FastAPI: Configured application instance
    """
    application = FastAPI(
        title="ZONECHECK API",
        description="""
## Commercial Zone Overlap API

Advisory geometry checks for commercial territory editors.

### Features
- Canonicalizes GeoJSON, {lat, lng} arrays and JSON-encoded geometry
- Detects overlaps between a drawn polygon and existing zones
- Serializes editor polygons as GeoJSON

Checks never fail on malformed geometry: unreadable zones are skipped.
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    setup_middleware(application, debug=settings.debug)

    # CORS middleware - use configured origins only
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})

    application.include_router(system.router)
    application.include_router(zones.router)

    return application


# Create the application
app = create_app()


# ============================================================================
# Run Server
# ============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level,
    )
