# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus metrics, and optional request logging.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import RequestResponseEndpoint

from pet_catalog.api.api_config import get_api_config
from pet_catalog.api.dependencies import get_database_client
from pet_catalog.api.error_handlers import register_error_handlers
from pet_catalog.api.routers.articles import router as articles_router
from pet_catalog.api.routers.clinics import router as clinics_router
from pet_catalog.api.routers.health import router as health_router
from pet_catalog.api.routers.pets import router as pets_router
from pet_catalog.common.logging import configure_logging

logger = logging.getLogger(__name__)

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
    ["method", "path"],
)


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Read-only catalog of adoptable pets, veterinary clinics, and pet care articles. "
            "List endpoints are filtered and paginated; clinics support proximity search."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "pets", "description": "Pets listed for adoption, filtered by city."},
            {
                "name": "clinics",
                "description": "Veterinary clinics, including open emergency and nearby searches.",
            },
            {"name": "articles", "description": "Pet care articles by pet type and category."},
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
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=request.url.path).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                try:
                    db = get_database_client()
                    db.log_request(
                        table_name=config.request_log_table_name,
                        request_id=request_id,
                        path=request.url.path,
                        method=request.method,
                        status_code=response.status_code,
                        duration_ms=duration_ms,
                    )
                except SQLAlchemyError:
                    logger.warning("Request log write failed for request_id=%s", request_id, exc_info=True)

            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=request.url.path).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        db = get_database_client()
        app.state.db_connected_at_startup = db.can_connect()
        if not app.state.db_connected_at_startup:
            logger.warning("Database is not reachable at startup; catalog queries will fail until it is.")

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(pets_router, prefix=config.api_version_path)
    app.include_router(clinics_router, prefix=config.api_version_path)
    app.include_router(articles_router, prefix=config.api_version_path)

    return app


app = create_app()
