"""
netdim API - Main Application

Exposes the GSM, UMTS, hertzian and optical dimensioning calculators as JSON
endpoints under ``/api``.
"""
import logging

import uvicorn
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.api import api_router
from .config import settings
from .errors import CalculationError
from .logging import log_request, setup_logging
from .models import ErrorResponse, HealthResponse

# Configure logging
logger = logging.getLogger(__name__)
setup_logging()

app = FastAPI(
    title=settings.project_name,
    description="Network dimensioning engine for GSM, UMTS, microwave and optical links",
    version=settings.version,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    log_request(request)
    response = await call_next(request)
    log_request(request, response=response)
    return response


api = APIRouter(prefix="/api")


@api.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(version=settings.version)


api.include_router(api_router)
app.include_router(api)


@app.exception_handler(CalculationError)
async def calculation_exception_handler(request: Request, exc: CalculationError):
    """A calculation that has no answer for the given inputs."""
    log_request(request, error=exc)
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(message="Calculation failed", error=str(exc)).model_dump(),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler that returns a JSON response for all unhandled exceptions."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message="Internal server error", error=str(exc)).model_dump(),
    )


# Run the application with uvicorn when executed directly
if __name__ == "__main__":
    uvicorn.run(
        "netdim.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
