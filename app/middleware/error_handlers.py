"""
Request context middleware and error responses for the CV Validator API
"""
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.exceptions import CVValidatorBaseException, map_to_http_exception
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


def error_response(request_id: str, status_code: int, detail: Dict[str, Any]) -> JSONResponse:
    """Error body shared by every non-verdict failure"""
    body = {
        "success": False,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
        "status_code": status_code,
        **detail,
    }
    return JSONResponse(status_code=status_code, content=body, headers={"X-Request-ID": request_id})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 for form fields that fail validation before any document work"""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"Rejected form on {request.url.path}: {len(errors)} invalid field(s)")
    return error_response(request_id, 422, {
        "error": "Validation failed",
        "message": "Request data validation failed",
        "validation_errors": errors,
    })


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an X-Request-ID, times it, and turns exceptions that
    escape a route into the JSON error body.
    """

    def __init__(self, app, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()
        # bodies carry whole documents, so only their declared size is logged
        size = request.headers.get("content-length", "0")

        try:
            response = await call_next(request)
        except CVValidatorBaseException as exc:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}", extra={"request_id": request_id})
            http_exc = map_to_http_exception(exc)
            response = error_response(request_id, http_exc.status_code, http_exc.detail)
        except Exception as exc:
            logger.error(f"Unhandled {exc.__class__.__name__} on {request.url.path}: {exc}",
                         extra={"request_id": request_id}, exc_info=True)
            response = error_response(request_id, 500, {
                "error": "Internal server error",
                "message": "An unexpected error occurred. Please try again later.",
            })

        elapsed = time.perf_counter() - start
        log = logger.warning if elapsed > self.slow_request_threshold else logger.info
        log(f"{request.method} {request.url.path} ({size} bytes) -> {response.status_code} in {elapsed:.3f}s",
            extra={"request_id": request_id})

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{elapsed:.3f}"
        return response
