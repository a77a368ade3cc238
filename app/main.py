"""
Main entry point of the document export service.
Creates and configures the web application.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.api.router import api_router
from app.exceptions import DocumentExportError, InputValidationError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle.

    On startup: load settings and log where the service is listening.
    On shutdown: log the shutdown.
    """
    settings = get_settings()
    logger.info(f"Document export service starting on {settings.host}:{settings.port}")
    logger.info(f"Exports are saved to {settings.output_dir}")

    yield

    logger.info("Document export service shutting down")


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    1. Basic app metadata
    2. CORS for the dashboard frontend
    3. Structured error responses
    4. API routers under /api/v1
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Document Export Service",
        description="PDF offer proposals, timesheets and invoices",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Document-Id", "X-Page-Count"],
    )

    # Custom exceptions become structured JSON responses
    @app.exception_handler(DocumentExportError)
    async def export_error_handler(request: Request, exc: DocumentExportError):
        status_code = 400 if isinstance(exc, InputValidationError) else 500
        return JSONResponse(
            status_code=status_code,
            content={
                "error_code": exc.error_code,
                "message": exc.message,
                "details": exc.details,
                "timestamp": datetime.now().isoformat(),
            },
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error_code": "ERR_INTERNAL",
                "message": "Internal server error",
                "details": None,
                "timestamp": datetime.now().isoformat(),
            },
        )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


@app.get("/")
async def root():
    """Basic service information."""
    return {
        "name": "Document Export Service",
        "version": "1.0.0",
        "description": "PDF offer proposals, timesheets and invoices",
        "docs": "/docs",
        "api": "/api/v1",
    }


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
