"""
FastAPI Main Application

Entry point for the MyWallet ledger API.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .. import __version__
from ..config import Settings
from ..errors import ErrorKind, LedgerError, messages_from_validation
from .database import Database
from .routes import accounts_router, debug_router, ledger_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting MyWallet API...")
    database = Database(settings.database_url)
    database.create_all()
    app.state.database = database
    yield
    # Shutdown
    logger.info("Shutting down MyWallet API...")
    database.dispose()


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    if exc.kind == ErrorKind.INTERNAL:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = LedgerError(ErrorKind.VALIDATION, messages_from_validation(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Unhandled storage failure on %s %s", request.method, request.url.path)
    error = LedgerError(ErrorKind.INTERNAL, "Storage failure")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Runtime settings (loaded from config/env if None)

    Returns:
        Configured FastAPI app
    """
    if settings is None:
        settings = Settings.load()

    configure_logging(settings.log_level)

    app = FastAPI(
        title="MyWallet API",
        description="Personal-finance ledger: signup, login, incomes and outcomes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)

    # Include routers
    app.include_router(accounts_router)
    app.include_router(ledger_router)
    if settings.debug_endpoints:
        logger.warning("Debug endpoints are enabled")
        app.include_router(debug_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "MyWallet API",
            "version": __version__,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mywallet.api.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "5000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
