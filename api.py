"""
SessionAuth FastAPI Application

Main entry point for the SessionAuth API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import MongoDB
from common.utils import success_response, error_response, APIException, BadRequestException

# App-specific imports
from sessionauth.config import get_settings
from sessionauth.database import ensure_indexes
from sessionauth.services.auth.cookies import AuthCookies, REFRESH_PATH

# Import routers
from sessionauth.routers import auth_router, user_router, sessions_router

# Import service initialization
from sessionauth.dependencies import init_all_services

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Instance
# =============================================================================
database = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown tasks like database connections
    and service initialization.
    """
    # Startup
    logger.info("Starting SessionAuth API...")
    settings.validate_required()

    await database.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )
    await ensure_indexes(database.db)

    init_all_services(db=database.db, settings=settings)
    logger.info("SessionAuth API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down SessionAuth API...")
    await database.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="SessionAuth API",
    description="Session-based authentication with refresh token rotation",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================
def _error_json(request: Request, status_code: int, content: dict, headers=None) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=content, headers=headers)
    # A failed refresh means the client must log in again
    if request.url.path == REFRESH_PATH:
        AuthCookies.clear_auth_cookies(response)
    return response


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return _error_json(
        request,
        exc.status_code,
        error_response(exc.message, code=exc.code, details=exc.details),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return await api_exception_handler(
        request,
        BadRequestException("Validation failed", code="VALIDATION_ERROR", details=errors),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_json(
        request,
        500,
        error_response("Internal server error", code="INTERNAL_ERROR"),
    )


# =============================================================================
# Include Routers
# =============================================================================
app.include_router(auth_router, tags=["Authentication"])
app.include_router(user_router, tags=["User"])
app.include_router(sessions_router, tags=["Sessions"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and database connection.
    """
    return success_response({
        "status": "ok",
        "version": "1.0.0",
        "database": database.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
