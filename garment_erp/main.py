"""
Garment ERP FastAPI Main Application
Entry point for the garment back-office REST API
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
import logging
import sys

from garment_erp.core.config import settings
from garment_erp.core.database import check_db_connection, init_db
from garment_erp.core.exceptions import GarmentERPException
from garment_erp.core.logging import setup_logging, get_logger
from garment_erp.schemas.common import ErrorResponse
from garment_erp.api.v1.api_router import api_router

setup_logging()

logger = get_logger("api")

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## Garment ERP Back Office API

    Order-to-store workflow for a garment manufacturer.

    ### Business Modules:
    - Buyers, suppliers and the product catalogue
    - Orders with per-size quantities and financial-year PO numbers
    - Material and machine purchases with GST costing
    - Production runs opened by completed purchases
    - Store entries, store logs and the reconciled store inventory
    """,
    docs_url=settings.DOCS_URL,
    redoc_url=settings.REDOC_URL,
    openapi_url=settings.OPENAPI_URL,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["System"])
async def health_check():
    """
    Health check endpoint for monitoring and load balancers

    Returns system status and database connectivity
    """
    try:
        db_status = check_db_connection()

        return {
            "status": "healthy" if db_status else "degraded",
            "version": settings.APP_VERSION,
            "database": "connected" if db_status else "disconnected",
            "debug": settings.DEBUG
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Service unavailable")


# System information endpoint
@app.get("/info", tags=["System"])
async def system_info():
    """
    System information endpoint
    """
    return {
        "application": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "api_version": "v1",
        "docs_url": settings.DOCS_URL,
        "business_modules": {
            "masters": "Buyers, suppliers, products",
            "orders": "Buyer orders and PO numbering",
            "purchases": "Fabric, buttons, packets and machine purchases",
            "production": "Cutting and production stages",
            "store": "Store entries, store logs, inventory reconciliation"
        }
    }


# Application startup event
@app.on_event("startup")
async def startup_event():
    """
    Verify the database and create missing tables
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        if not check_db_connection():
            logger.error("Failed to connect to database on startup")
            raise Exception("Database connection failed")

        logger.info("Database connection established")

        init_db()

        logger.info("Application startup completed successfully")

    except Exception as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)


# Application shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down application")


@app.exception_handler(GarmentERPException)
async def application_exception_handler(request: Request, exc: GarmentERPException):
    """
    Render typed application errors with the status code of their class
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_type}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error,
            "detail": exc.detail,
            "type": exc.error_type
        }
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    """Unique and foreign key violations that slipped past the services"""
    logger.warning(f"{request.method} {request.url.path}: integrity error {exc.orig}")

    return JSONResponse(
        status_code=400,
        content={
            "error": "Conflict",
            "detail": "Record conflicts with existing data",
            "type": "conflict"
        }
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    Global exception handler for unhandled errors

    Args:
        request: FastAPI request object
        exc: Exception that occurred

    Returns:
        JSON error response
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.DEBUG else "An unexpected error occurred",
            "type": "server_error"
        }
    )


# Include API routers
app.include_router(
    api_router,
    prefix=settings.API_V1_STR,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "garment_erp.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
