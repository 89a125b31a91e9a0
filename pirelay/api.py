"""FastAPI app: search relay, health check and client application serving.

The email table and the RePORTER client are created in the lifespan and
handed to endpoints through dependencies, so tests can swap either one.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, Field

from .config import settings
from .email_table import EmailTable, load_email_table
from .logging_config import setup_logging
from .pipelines.enrichment import SearchRelayError, search_with_emails
from .reporter import ReporterClient

logger = logging.getLogger(__name__)


# Pydantic response models
class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    email_database_size: int = Field(alias="emailDatabaseSize")


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    details: str | None = None
    status: int | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    # Startup
    setup_logging()
    app.state.email_table = load_email_table(
        settings.email_table_path,
        fallback_dir=settings.email_table.fallback_dir,
    )
    app.state.reporter_client = ReporterClient.from_settings()
    logger.info(f"Server running in {settings.environment.value} mode")

    yield

    # Shutdown
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="NIH RePORTER search relay with PI email lookup",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors.methods,
    allow_headers=settings.cors.headers,
)


# Dependencies
def get_email_table(request: Request) -> EmailTable:
    table = getattr(request.app.state, "email_table", None)
    if table is None:
        return EmailTable.absent()
    return table


def get_reporter_client(request: Request) -> ReporterClient:
    client = getattr(request.app.state, "reporter_client", None)
    if client is None:
        client = ReporterClient.from_settings()
    return client


# Exception handlers
@app.exception_handler(SearchRelayError)
async def search_relay_error_handler(request, exc: SearchRelayError):
    """Handle upstream search failures."""
    logger.error(f"Error in {request.url.path}: {exc.details} (status={exc.status})")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error=exc.message,
            details=exc.details,
            status=exc.status,
        ).model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
async def health(table: EmailTable = Depends(get_email_table)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        environment="development" if settings.is_development else "production",
        emailDatabaseSize=table.size,
    )


@app.post("/api/search")
async def search(
    query: dict[str, Any] = Body(...),
    table: EmailTable = Depends(get_email_table),
    client: ReporterClient = Depends(get_reporter_client),
) -> dict[str, Any]:
    """Relay a project search to NIH RePORTER and attach PI emails.

    The body is forwarded unchanged. Each project's first principal
    investigator gains an ``email`` field.

    Raises:
        SearchRelayError: Upstream failure (rendered as HTTP 500)
    """
    logger.info(f"Received search request: {query}")
    response = await search_with_emails(client, table, query)
    logger.info("Sending response back to client...")
    return response


def resolve_static_file(static_dir: Path, requested: str) -> Path | None:
    """Map a request path to a file under ``static_dir``.

    Falls back to ``index.html`` for client-side routes. Paths escaping
    ``static_dir`` are never served.
    """
    root = static_dir.resolve()
    if requested:
        try:
            candidate = (root / requested).resolve()
            if candidate.is_relative_to(root) and candidate.is_file():
                return candidate
        except (OSError, ValueError):
            # Over-long segments, NUL bytes
            pass

    index = root / "index.html"
    if index.is_file():
        return index
    return None


# Must stay registered after the API routes
@app.get("/{full_path:path}", include_in_schema=False)
async def client_app(full_path: str) -> FileResponse:
    """Serve the built client application."""
    path = resolve_static_file(settings.static_dir, full_path)
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return FileResponse(path)
