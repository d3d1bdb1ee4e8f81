from fastapi import APIRouter, HTTPException

from ..core.config import get_settings
from ..core.logger import get_logger
from ..models.schemas import HealthResponse

router = APIRouter(prefix="/health", tags=["Health"])

_logger = get_logger(__name__)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=HealthResponse,
    summary="Service health",
    description=(
        "Liveness/health endpoint. Always returns 200 when the app is up. "
        "No database connections are attempted here."
    ),
    responses={
        200: {"description": "Service is healthy"},
    },
)
def get_health() -> HealthResponse:
    """
    Root health indicator used for liveness. Always returns 200 with {'status':'ok'}.
    Does not touch the database engine, so it stays green when the DB is unreachable.
    """
    settings = get_settings()
    _logger.debug("Health (no-DB) check", extra={"env": settings.APP_ENV})
    return HealthResponse(status="ok")


# PUBLIC_INTERFACE
@router.get(
    "/db",
    response_model=HealthResponse,
    summary="Database connectivity",
    description="Runs a simple SELECT 1 via the SQLAlchemy engine to confirm DB connectivity.",
    responses={
        200: {"description": "Database reachable"},
        503: {"description": "Database unavailable"},
    },
)
def health_db() -> HealthResponse:
    """
    Database connectivity health check.

    Behavior:
    - Imports the lazy engine accessor at request time so /health never initializes it.
    - Executes a lightweight `SELECT 1`.
    - Returns 200 with {"status":"ok"} on success.
    - Returns 503 with details on failure (including redacted connection info).
    """
    from sqlalchemy import text
    from ..db.sqlalchemy import get_effective_db_params, get_engine

    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        _logger.info("DB connectivity OK via /health/db")
        return HealthResponse(status="ok")
    except Exception as exc:
        eff = get_effective_db_params()
        _logger.error("DB connectivity failed", exc_info=exc, extra={"effective_url": eff.get("url_redacted")})
        raise HTTPException(
            status_code=503,
            detail=f"database_unavailable: {exc} | effective={eff.get('url_redacted')}",
        )
