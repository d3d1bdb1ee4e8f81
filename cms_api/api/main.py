from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..core.config import get_settings
from ..core.errors import InvalidPayload
from ..core.logger import get_logger
from ..routers.content import router as content_router
from ..routers.health import router as health_router

# Important: avoid creating DB connections at import time.
# The engine is created lazily on first request or in the startup hook below.

settings = get_settings()
logger = get_logger(__name__)

# Initialize FastAPI application with metadata and orjson for performance
app = FastAPI(
    title=settings.APP_NAME,
    description="Content management backend storing arbitrary JSON documents as content items.",
    version="1.0.0",
    default_response_class=ORJSONResponse,
    openapi_tags=[
        {"name": "Health", "description": "Service health and diagnostics"},
        {"name": "Content", "description": "Content item CRUD"},
    ],
)

# CORS configuration driven by settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("FastAPI app initialized", extra={"app_name": settings.APP_NAME, "env": settings.APP_ENV})


@app.exception_handler(InvalidPayload)
async def invalid_payload_handler(request: Request, exc: InvalidPayload) -> ORJSONResponse:
    """Bad request whose body is the bare message string."""
    return ORJSONResponse(status_code=400, content=exc.message)


@app.exception_handler(SQLAlchemyError)
async def storage_fault_handler(request: Request, exc: SQLAlchemyError) -> ORJSONResponse:
    """Unexpected persistence failure; logged with traceback and reported as 500."""
    logger.error(
        "Unhandled database error",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    return ORJSONResponse(status_code=500, content={"detail": "Database error"})


@app.on_event("startup")
async def startup_event():
    """FastAPI startup hook.

    Creates the content_items table when AUTO_CREATE_TABLES is enabled. With it
    disabled the app starts without touching the database, and the schema is
    expected to be managed outside the app.
    """
    if settings.AUTO_CREATE_TABLES:
        from ..db.sqlalchemy import init_db

        init_db()
    logger.info("Startup complete.", extra={"auto_create_tables": settings.AUTO_CREATE_TABLES})


@app.on_event("shutdown")
async def shutdown_event():
    """FastAPI shutdown hook."""
    logger.info("Shutdown complete.")


# Root health remains available (back-compat)
@app.get("/", summary="Health Check (root)", tags=["Health"])
def health_check_root():
    """Root-level health check.

    Returns:
        A simple JSON message indicating the service is healthy.
    """
    return {"message": "Healthy"}


app.include_router(health_router)
app.include_router(content_router)


if __name__ == "__main__":
    # Allow running as: python -m cms_api.api.main
    import uvicorn  # type: ignore

    uvicorn.run("cms_api.api.main:app", host="0.0.0.0", port=settings.PORT, log_level="info")
