"""FastAPI application for agreement previews."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from legaldoc.exceptions import LegalDocError
from legaldoc.utils.logging_config import get_logger
from server.models import ErrorResponse
from server.preview_processor import RequestTooLargeError
from server.routers.preview import router as preview_router
from server.server_config import APP_DESCRIPTION, APP_TITLE

logger = get_logger(__name__)

app = FastAPI(title=APP_TITLE, description=APP_DESCRIPTION)
app.include_router(preview_router)


@app.exception_handler(LegalDocError)
async def legaldoc_error_handler(request: Request, exc: LegalDocError) -> JSONResponse:
    """Map library errors to ``ErrorResponse`` bodies."""
    status_code = (
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        if isinstance(exc, RequestTooLargeError)
        else status.HTTP_400_BAD_REQUEST
    )
    logger.warning("Request failed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=str(exc)).model_dump())


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy"}
