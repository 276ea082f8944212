"""
FastAPI routes for the dashboard presentation layer.
Upload a workbook, toggle filters, change sort order and read the derived views.
"""
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from cid_dashboard import __version__
from cid_dashboard.core.config import get_settings
from cid_dashboard.core.exceptions import UploadError, ValidationError
from cid_dashboard.core.logger import setup_logger
from cid_dashboard.core.schema import (
    ChartData,
    LoadResult,
    SortState,
    SummaryMetrics,
    Transaction,
    TypeFilter,
)
from cid_dashboard.services.session import DashboardSession

logger = setup_logger(__name__)

ALLOWED_EXTENSIONS = (".xlsx", ".xls")


def validate_file_extension(filename: Optional[str]) -> None:
    """
    Validate file has a spreadsheet extension.

    Args:
        filename: Name of file to validate

    Raises:
        UploadError: If file extension is invalid
    """
    if not filename or not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise UploadError(
            f"Invalid file type: {filename}. Only .xlsx and .xls are supported.",
            details={"filename": filename, "allowed": list(ALLOWED_EXTENSIONS)},
        )


def validate_file_size(content: bytes, limit_bytes: int) -> None:
    """
    Validate an upload does not exceed the configured size.

    Raises:
        UploadError: With status 413 if the content is too large
    """
    if len(content) > limit_bytes:
        raise UploadError(
            f"File too large: limit is {limit_bytes} bytes",
            details={"size": len(content), "limit": limit_bytes},
            status_code=413,
        )


def get_session(request: Request) -> DashboardSession:
    return request.app.state.session


def create_app(session: Optional[DashboardSession] = None) -> FastAPI:
    """
    Build the API around one dashboard session.

    Args:
        session: Session to serve (a fresh one by default)

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Spreadsheet transaction ingestion and summary dashboard",
        version=__version__,
    )
    app.state.session = session or DashboardSession()

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning(f"Rejected request {request.url.path}: {exc.message}")
        return JSONResponse(status_code=400, content={"error": exc.message, "details": exc.details})

    @app.exception_handler(UploadError)
    async def upload_error_handler(request: Request, exc: UploadError):
        logger.warning(f"Rejected upload: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "details": exc.details})

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "cid_dashboard",
            "version": __version__,
        }

    @app.get("/favicon.ico")
    async def favicon():
        """Return empty response for favicon to avoid 404 errors."""
        return Response(status_code=204)

    @app.post("/upload", response_model=LoadResult)
    async def upload_file(
        file: UploadFile = File(...),
        session: DashboardSession = Depends(get_session),
    ):
        """
        Replace the session's records with the contents of a workbook.

        Unreadable workbooks are not an HTTP error: the session falls back to
        an empty state and the result carries status "unreadable".
        """
        logger.info(f"Received file: {file.filename}")
        validate_file_extension(file.filename)

        content = await file.read()
        validate_file_size(content, settings.max_upload_bytes)

        return await session.load_file(content, file.filename)

    @app.get("/transactions", response_model=List[Transaction])
    async def list_transactions(session: DashboardSession = Depends(get_session)):
        """Filtered records in the active sort order."""
        return session.records

    @app.get("/summary", response_model=SummaryMetrics)
    async def get_summary(session: DashboardSession = Depends(get_session)):
        return session.summary

    @app.get("/charts", response_model=ChartData)
    async def get_charts(session: DashboardSession = Depends(get_session)):
        return session.charts

    @app.get("/dashboard")
    async def get_dashboard(session: DashboardSession = Depends(get_session)):
        """Everything the presentation layer renders, in one response."""
        return {
            "records": session.records,
            "summary": session.summary,
            "charts": session.charts,
            "filters": session.type_filter,
            "sort": session.sort_state,
            "last_load": session.last_load,
        }

    @app.put("/filters/{kind}", response_model=TypeFilter)
    async def set_filter(kind: str, enabled: bool, session: DashboardSession = Depends(get_session)):
        return session.set_type_filter(kind, enabled)

    @app.put("/sort", response_model=SortState)
    async def set_sort(key: str, direction: str = "asc", session: DashboardSession = Depends(get_session)):
        return session.set_sort(key, direction)

    @app.post("/sort/{key}/toggle", response_model=SortState)
    async def toggle_sort(key: str, session: DashboardSession = Depends(get_session)):
        """Column-header click."""
        return session.toggle_sort(key)

    @app.delete("/session", status_code=204)
    async def clear_session(session: DashboardSession = Depends(get_session)):
        session.clear()
        return Response(status_code=204)

    return app


app = create_app()
