from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kennel.common.exceptions import register_exception_handlers
from kennel.common.request_context import RequestIdLogFilter, reset_request_id, set_request_id
from kennel.common.responses import ApiResponse
from kennel.config import get_settings
from kennel.contact.router import router as contact_router
from kennel.dashboard.router import router as dashboard_router
from kennel.environment.router import router as environment_router
from kennel.member.router import router as member_router
from kennel.photo.router import environment_photos_router, member_photos_router, puppy_photos_router
from kennel.post.router import router as post_router
from kennel.puppy.router import router as puppy_router

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
)
for _handler in logging.getLogger().handlers:
    _handler.addFilter(RequestIdLogFilter())


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
)

cors_origins = settings.cors_origins_list()
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app, debug=settings.debug)


@app.middleware("http")
async def request_logging_middleware(request, call_next):
    logger = logging.getLogger("kennel.request")
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    request.state.request_id = request_id
    token = set_request_id(request_id)
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.exception(
            "request_failed request_id=%s method=%s path=%s duration_ms=%.2f",
            request_id,
            request.method,
            request.url.path,
            duration_ms,
        )
        raise
    finally:
        reset_request_id(token)

    duration_ms = (time.perf_counter() - start) * 1000.0
    response.headers["x-request-id"] = request_id
    log_fn = logger.info
    if response.status_code >= 500:
        log_fn = logger.error
    elif response.status_code >= 400:
        log_fn = logger.warning
    log_fn(
        "request_completed request_id=%s method=%s path=%s status=%s duration_ms=%.2f",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response

# Register routers
app.include_router(dashboard_router)
app.include_router(post_router)
app.include_router(member_router)
app.include_router(puppy_router)
app.include_router(environment_router)
app.include_router(member_photos_router)
app.include_router(puppy_photos_router)
app.include_router(environment_photos_router)
app.include_router(contact_router)


@app.get("/health", response_model=ApiResponse)
def health() -> ApiResponse:
    return ApiResponse.ok({"status": "ok"})
