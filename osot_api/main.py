"""
OSOT Membership API - FastAPI Application Entry Point
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from osot_api.config import get_settings
from osot_api.errors import AppError, ErrorCode, HTTP_STATUS_BY_CODE, InternalError
from osot_api.routers import membership_categories
from osot_api.services.dataverse import get_dataverse_client

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Membership category determination for occupational therapists and assistants",
    version="0.1.0",
    debug=settings.debug,
)

app.include_router(membership_categories.router)


def error_response(status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"[{exc.operation_id}] {exc.code.value}: {exc.message}")
    else:
        logger.info(f"[{exc.operation_id}] {exc.code.value}: {exc.message}")
    return error_response(exc.status_code, exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return error_response(
        HTTP_STATUS_BY_CODE[ErrorCode.VALIDATION_ERROR],
        {
            "code": ErrorCode.VALIDATION_ERROR.value,
            "message": "Request validation failed",
            "operation_id": None,
            "details": {"validation_errors": errors},
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = InternalError("An unexpected error occurred")
    return error_response(error.status_code, error.to_dict())


@app.on_event("shutdown")
async def shutdown_event():
    """Close the shared Dataverse HTTP client if one was created."""
    if get_dataverse_client.cache_info().currsize:
        await get_dataverse_client().close()
        get_dataverse_client.cache_clear()


@app.get("/health")
def health_check():
    """Health check endpoint that also reports whether Dataverse is configured."""
    return {
        "status": "healthy",
        "dataverse": "configured" if settings.dataverse_configured else "not configured",
        "debug": settings.debug,
    }
