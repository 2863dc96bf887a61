# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, and Prometheus request metrics for operations visibility.
# Uploaded media is served from the configured upload directory under `/uploads`.

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import RequestResponseEndpoint

from clinic_site.api.api_config import get_api_config
from clinic_site.api.dependencies import get_database_client
from clinic_site.api.error_handlers import register_error_handlers
from clinic_site.api.routers.blog_tags import router as blog_tags_router
from clinic_site.api.routers.blogs import router as blogs_router
from clinic_site.api.routers.departments import router as departments_router
from clinic_site.api.routers.faqs import router as faqs_router
from clinic_site.api.routers.health import router as health_router
from clinic_site.api.routers.services import router as services_router
from clinic_site.api.routers.testimonials import router as testimonials_router
from clinic_site.api.schemas.common import ERROR_RESPONSES
from clinic_site.common.logging import configure_logging

LOGGER = logging.getLogger("api")

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)

UNMATCHED_ROUTE_LABEL = "unmatched"


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE_LABEL


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Content API for the clinic website: blogs, departments, FAQs, services, "
            "and testimonials, with admin-only write access."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "blogs", "description": "Blog posts, per-author listings, and blog tags."},
            {"name": "departments", "description": "Clinic departments."},
            {"name": "faqs", "description": "Frequently asked questions."},
            {"name": "services", "description": "Medical services offered by the clinic."},
            {"name": "testimonials", "description": "Patient testimonials with optional avatars."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0
            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            path_label = _route_label(request)
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        try:
            db = get_database_client()
            app.state.db_connected_at_startup = db.can_connect()
        except SQLAlchemyError:
            app.state.db_connected_at_startup = False
        if not app.state.db_connected_at_startup:
            LOGGER.warning("Database unreachable at startup")

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(blogs_router, prefix=config.api_prefix, responses=ERROR_RESPONSES)
    app.include_router(blog_tags_router, prefix=config.api_prefix, responses=ERROR_RESPONSES)
    app.include_router(departments_router, prefix=config.api_prefix, responses=ERROR_RESPONSES)
    app.include_router(faqs_router, prefix=config.api_prefix, responses=ERROR_RESPONSES)
    app.include_router(services_router, prefix=config.api_prefix, responses=ERROR_RESPONSES)
    app.include_router(testimonials_router, prefix=config.api_prefix, responses=ERROR_RESPONSES)

    upload_root = Path(config.media_root) / config.upload_dir
    upload_root.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_root), name="uploads")

    return app


app = create_app()
