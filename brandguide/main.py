"""FastAPI application entry point."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from brandguide.api import router as api_router
from brandguide.core.logging import get_logger
from brandguide.db.supabase_client import StorageUnavailableError

logger = get_logger(__name__)

app = FastAPI(
    title="Brand Guide Engine",
    description="Tiered section editing and AI rewrites for brand style guides",
    version="0.1.0",
)


@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_handler(
    request: Request, exc: StorageUnavailableError
) -> JSONResponse:
    logger.error(f"Storage unavailable for {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Guide storage is unavailable"})


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Guide and rewrite endpoints
app.include_router(api_router, prefix="/v1", tags=["v1"])
