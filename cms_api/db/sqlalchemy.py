"""
SQLAlchemy database initialization.

Creates (lazily):
- engine: SQLAlchemy engine using DATABASE_URL
- SessionLocal: session factory for per-request DB sessions
- Base: Declarative base for ORM models
- get_db: FastAPI dependency to provide a session and ensure cleanup

Design:
- Avoid creating the engine at import time to prevent uvicorn import failures
  when environment variables are not yet present. Instead, provide getters
  that initialize on first use.
"""

from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from ..core.config import get_settings
from ..core.logger import get_logger

logger = get_logger(__name__)

# Global ORM base
Base = declarative_base()

# Module-level cached engine and session factory (lazy init)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _ensure_psycopg2_scheme(url: str) -> str:
    """
    Ensure the SQLAlchemy URL uses the psycopg2 driver explicitly for Postgres.
    """
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


def _get_db_url() -> str:
    """
    Resolve the database URL from settings.

    Raises ValueError if missing to make failures explicit at first DB access (not import).
    """
    settings = get_settings()
    url = (settings.DATABASE_URL or "").strip()
    if not url:
        raise ValueError("Database configuration not found. Provide DATABASE_URL.")
    return _ensure_psycopg2_scheme(url)


def _effective_db_params(url: str) -> Dict[str, Any]:
    """
    Parse and return effective DB connection params for logging without password.
    """
    parsed = make_url(url)
    return {
        "url_redacted": parsed.render_as_string(hide_password=True),
        "driver": parsed.drivername,
        "host": parsed.host,
        "port": parsed.port,
        "database": parsed.database,
    }


# PUBLIC_INTERFACE
def get_effective_db_params() -> Dict[str, Any]:
    """Return redacted effective DB parameters for diagnostics without exposing secrets."""
    try:
        return _effective_db_params(_get_db_url())
    except Exception as exc:
        return {"url_redacted": "<unconfigured>", "driver": "unknown", "error": str(exc)}


def _ensure_engine_initialized() -> None:
    """
    Initialize the SQLAlchemy engine and session factory if not already done.
    This function is idempotent and safe to call multiple times.
    """
    global _engine, _SessionLocal
    if _engine is not None and _SessionLocal is not None:
        return
    settings = get_settings()
    db_url = _get_db_url()

    engine_kwargs: Dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": bool(settings.DB_ECHO),
    }
    if db_url.startswith("sqlite"):
        # Sync routes run in FastAPI's threadpool; the connection outlives its creating thread.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    if settings.DISABLE_DB_POOL:
        engine_kwargs["poolclass"] = NullPool

    _engine = create_engine(db_url, **engine_kwargs)
    _SessionLocal = sessionmaker(bind=_engine, autocommit=False, autoflush=False, class_=Session)

    logger.info(
        "SQLAlchemy engine initialized.",
        extra={
            "echo": bool(settings.DB_ECHO),
            "pool": ("NullPool" if settings.DISABLE_DB_POOL else "Default"),
            "payload_storage": settings.PAYLOAD_STORAGE,
            **_effective_db_params(db_url),
        },
    )


# PUBLIC_INTERFACE
def get_engine() -> Engine:
    """Return the lazily-initialized SQLAlchemy Engine instance."""
    _ensure_engine_initialized()
    assert _engine is not None  # for type checkers
    return _engine


# PUBLIC_INTERFACE
def get_sessionmaker() -> sessionmaker:
    """Return the lazily-initialized SQLAlchemy sessionmaker."""
    _ensure_engine_initialized()
    assert _SessionLocal is not None  # for type checkers
    return _SessionLocal


# PUBLIC_INTERFACE
def init_db(engine: Optional[Engine] = None) -> None:
    """Create all tables registered on Base (no-op for tables that already exist)."""
    # Registers the ORM models on Base.metadata
    from ..models import sql_models  # noqa: F401

    target = engine or get_engine()
    Base.metadata.create_all(bind=target)
    logger.info("Database schema ensured.", extra={"tables": sorted(Base.metadata.tables)})


# PUBLIC_INTERFACE
def get_db() -> Generator[Session, None, None]:
    """Yield a SQLAlchemy session and ensure it is closed after request."""
    SessionLocal = get_sessionmaker()
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        try:
            db.close()
        except Exception as exc:
            logger.error("Error closing DB session", exc_info=exc)
