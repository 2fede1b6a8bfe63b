"""
FastAPI main application for the trade journal.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from tradelog.config import configure_logging, settings
from tradelog.core.exceptions.journal import (
    DataError,
    FileValidationError,
    ImportFailedError,
    InvalidStateTransitionError,
    MappingIncompleteError,
    TradeNotFoundError,
    ValidationError,
)

from .routers import imports, trades

configure_logging(settings.log_level)

app = FastAPI(
    title="Trade Journal API",
    version="1.0.0",
    description="API for trade P&L calculation and broker CSV reconciliation",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
)

app.include_router(trades.router, prefix="/api/trades", tags=["trades"])
app.include_router(imports.router, prefix="/api/imports", tags=["imports"])


@app.exception_handler(FileValidationError)
async def file_validation_handler(request: Request, exc: FileValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc), "filename": exc.filename})


@app.exception_handler(MappingIncompleteError)
async def mapping_handler(request: Request, exc: MappingIncompleteError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc), "unmapped": exc.unmapped})


@app.exception_handler(ImportFailedError)
async def import_failed_handler(request: Request, exc: ImportFailedError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(TradeNotFoundError)
async def not_found_handler(request: Request, exc: TradeNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidStateTransitionError)
async def state_handler(request: Request, exc: InvalidStateTransitionError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(DataError)
async def data_error_handler(request: Request, exc: DataError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint returning API information."""
    return {"message": "Trade Journal API", "version": "1.0.0", "status": "running"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
