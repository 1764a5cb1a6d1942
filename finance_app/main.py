"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finance_app import __version__
from finance_app.api import router as api_router
from finance_app.calculations import InvalidParameter
from finance_app.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Personal finance calculators: tax, loans, investments and retirement",
    version=__version__,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=True,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(InvalidParameter)
async def invalid_parameter_handler(request: Request, exc: InvalidParameter):
    """Reject bad calculator input with a 400."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "parameter": exc.name},
    )


@app.get("/")
async def home():
    return {"message": f"{settings.app_name} is running"}


@app.get("/api")
async def api_index():
    """List the available endpoints."""
    return {
        "message": f"Welcome to the {settings.app_name}!",
        "availableEndpoints": sorted(
            path
            for path in app.openapi()["paths"]
            if path.startswith("/api/")
        ),
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}
