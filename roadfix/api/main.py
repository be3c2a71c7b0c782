"""
Roadfix Connect - REST API

FastAPI application exposing community road hazard reports, crowd
confirmation and contributor stats to the presentation layer.

The caller's identity comes from the X-User-Id header set by the
identity provider in front of this service.

Run with: uvicorn roadfix.api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Optional, Type

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from roadfix import __version__
from roadfix.core.config import Settings, settings
from roadfix.core.logging import setup_logging
from roadfix.confirmations import (
    ConfirmationError,
    ConfirmationService,
    ConfirmationStore,
    ReportNotFoundError,
    ReportQueries,
    ReportRecord,
    ReportView,
    SelfConfirmationError,
    StoreUnavailableError,
    priority_presentation,
    status_presentation,
)
from roadfix.database import DatabaseConnection, SQLAlchemyConfirmationStore, get_db

logger = logging.getLogger(__name__)


def prepare_schema(db: DatabaseConnection, app_settings: Settings = settings) -> bool:
    """
    Create missing tables at startup.

    Production schemas are owned by the Alembic migrations, so tables are
    never created there even when db_auto_create_tables is set.

    Returns:
        True if create_tables() ran
    """
    if not app_settings.db_auto_create_tables or app_settings.is_production:
        logger.info(f"Skipping table creation (env={app_settings.app_env})")
        return False

    db.create_tables()
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    prepare_schema(get_db())
    yield


# FastAPI app
app = FastAPI(
    title="Roadfix Connect",
    description="Community road hazard reports with crowd confirmation and contributor scoring",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Pydantic Models
# ============================================================================

class HealthResponse(BaseModel):
    """API health check response."""
    status: str
    version: str
    timestamp: str
    database: bool


class ReportResponse(BaseModel):
    """Single road hazard report."""
    id: str
    issue_type: str
    description: str
    image_url: Optional[str] = None
    priority: str
    status: str
    user_id: str
    confirmation_count: int = Field(ge=0, description="Distinct citizens who confirmed the report")
    created_at: Optional[str] = None
    status_class: str
    priority_class: str


class ReportListResponse(BaseModel):
    """Recent reports, newest first."""
    count: int
    reports: list[ReportResponse]


class FeedReportResponse(ReportResponse):
    """Report annotated for the requesting user."""
    is_own: bool
    confirmed_by_user: bool
    can_confirm: bool


class FeedResponse(BaseModel):
    """Community feed for the requesting user."""
    count: int
    confirmed_count: int
    reports: list[FeedReportResponse]


class ConfirmationResponse(BaseModel):
    """Result of a confirmation request."""
    outcome: str = Field(description="confirmed or already_confirmed")
    report_id: str
    confirmation_count: int
    user_score: Optional[int] = None


class ConfirmedReportsResponse(BaseModel):
    """Reports the requesting user has confirmed."""
    user_id: str
    count: int
    report_ids: list[str]


class UserStatsResponse(BaseModel):
    """Contribution stats for the requesting user."""
    user_id: str
    score: int
    updated_at: Optional[str] = None


def _report_response(report: ReportRecord) -> ReportResponse:
    return ReportResponse(
        **report.to_dict(),
        status_class=status_presentation(report.status).value,
        priority_class=priority_presentation(report.priority).value,
    )


def _feed_report_response(view: ReportView) -> FeedReportResponse:
    return FeedReportResponse(**view.to_dict())


# ============================================================================
# Dependencies
# ============================================================================

_store: Optional[ConfirmationStore] = None


def get_store() -> ConfirmationStore:
    """Shared store on the global database connection."""
    global _store
    if _store is None:
        _store = SQLAlchemyConfirmationStore(get_db())
    return _store


def get_confirmation_service(store: ConfirmationStore = Depends(get_store)) -> ConfirmationService:
    return ConfirmationService(store)


def get_report_queries(store: ConfirmationStore = Depends(get_store)) -> ReportQueries:
    return ReportQueries(store)


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Authenticated user id supplied by the identity provider."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


# ============================================================================
# Error Handling
# ============================================================================

ERROR_STATUS_CODES: Dict[Type[ConfirmationError], int] = {
    ReportNotFoundError: 404,
    SelfConfirmationError: 403,
    StoreUnavailableError: 503,
}


@app.exception_handler(ConfirmationError)
async def confirmation_error_handler(request: Request, exc: ConfirmationError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    logger.warning(f"{request.method} {request.url.path} -> {status_code} ({exc.kind})")
    return JSONResponse(status_code=status_code, content={"detail": exc.to_dict()})


# ============================================================================
# System Routes
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
def health_check(store: ConfirmationStore = Depends(get_store)):
    """Check API health status and store connectivity."""
    database_ok = store.check_connection()

    return HealthResponse(
        status="healthy" if database_ok else "degraded",
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=database_ok,
    )


# ============================================================================
# Report Routes
# ============================================================================

@app.get("/api/v1/reports", response_model=ReportListResponse, tags=["Reports"])
def list_reports(
    limit: int = Query(
        default=settings.recent_reports_limit,
        ge=1,
        le=settings.max_reports_limit,
    ),
    queries: ReportQueries = Depends(get_report_queries),
):
    """List the most recent community reports, newest first."""
    reports = queries.list_recent_reports(limit)

    return ReportListResponse(
        count=len(reports),
        reports=[_report_response(r) for r in reports],
    )


@app.get("/api/v1/reports/feed", response_model=FeedResponse, tags=["Reports"])
def community_feed(
    limit: int = Query(
        default=settings.recent_reports_limit,
        ge=1,
        le=settings.max_reports_limit,
    ),
    user_id: str = Depends(get_current_user_id),
    queries: ReportQueries = Depends(get_report_queries),
):
    """
    Recent reports annotated for the current user.

    Each report says whether the user owns it, has already confirmed it,
    and whether the confirm action should be offered.
    """
    views = queries.community_feed(user_id, limit)

    return FeedResponse(
        count=len(views),
        confirmed_count=sum(1 for v in views if v.confirmed_by_user),
        reports=[_feed_report_response(v) for v in views],
    )


@app.post(
    "/api/v1/reports/{report_id}/confirmations",
    response_model=ConfirmationResponse,
    tags=["Confirmations"],
)
def confirm_report(
    report_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ConfirmationService = Depends(get_confirmation_service),
):
    """
    Confirm a report on behalf of the current user.

    Repeating a confirmation is harmless and returns `already_confirmed`.
    Confirming your own report is rejected with 403.
    """
    result = service.confirm(report_id, user_id)

    return ConfirmationResponse(
        outcome=result.outcome.value,
        report_id=result.report_id,
        confirmation_count=result.confirmation_count,
        user_score=result.user_score,
    )


# ============================================================================
# User Routes
# ============================================================================

@app.get("/api/v1/users/me/confirmations", response_model=ConfirmedReportsResponse, tags=["Users"])
def list_my_confirmations(
    user_id: str = Depends(get_current_user_id),
    queries: ReportQueries = Depends(get_report_queries),
):
    """IDs of every report the current user has confirmed."""
    report_ids = sorted(queries.list_user_confirmed_report_ids(user_id))

    return ConfirmedReportsResponse(
        user_id=user_id,
        count=len(report_ids),
        report_ids=report_ids,
    )


@app.get("/api/v1/users/me/stats", response_model=UserStatsResponse, tags=["Users"])
def get_my_stats(
    user_id: str = Depends(get_current_user_id),
    queries: ReportQueries = Depends(get_report_queries),
):
    """Contribution score for the current user."""
    stats = queries.get_user_stats(user_id)

    if not stats:
        raise HTTPException(status_code=404, detail="No stats recorded for this user yet")

    return UserStatsResponse(**stats.to_dict())


# ============================================================================
# Main
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    setup_logging()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
