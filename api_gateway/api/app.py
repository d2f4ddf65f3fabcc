# This file builds the FastAPI application and registers all API routers.
# It is the composition root: settings and the gRPC client are created once here and shared through `app.state`.
# The app adds request IDs, timing headers, access logging, and Prometheus metrics for every request.
# Swagger UI, the OpenAPI document, and static images are mounted under fixed prefixes.

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from api_gateway.api.error_handlers import register_error_handlers
from api_gateway.api.routers.branch import router as branch_router
from api_gateway.api.routers.customer import router as customer_router
from api_gateway.api.routers.health import router as health_router
from api_gateway.api.routers.seller import router as seller_router
from api_gateway.api.routers.shop import router as shop_router
from api_gateway.api.routers.system_user import router as system_user_router
from api_gateway.common.logging import configure_logging
from api_gateway.common.settings import Settings, get_settings
from api_gateway.rpc.client import BackendConnectionError, RpcClient

logger = logging.getLogger("api_gateway.api")

SWAGGER_UI_PATH = "/swagger/index.html"
OPENAPI_PATH = "/swagger/doc.json"
STATIC_PREFIX = "/images"

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the gateway.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "Gateway request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of gateway requests currently being processed.",
    ["method"],
)


def _route_label(scope: Scope) -> str:
    # Templates such as `/GetByIdShop/{id}` keep metric label cardinality bounded.
    route = scope.get("route")
    return getattr(route, "path", None) or scope["path"]


class RequestContextMiddleware:
    """Assign request ids, add timing headers, log one access line, and record metrics.

    Written against raw ASGI so `receive` reaches the endpoint untouched and
    `Request.is_disconnected()` sees the client going away.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get("x-request-id") or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        method_label = scope["method"]
        started = time.perf_counter()
        status_code = 500

        async def send_with_context(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = (time.perf_counter() - started) * 1000.0
                headers = MutableHeaders(scope=message)
                headers["x-request-id"] = request_id
                headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            await send(message)

        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            await self.app(scope, receive, send_with_context)
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(scope)
            logger.info(
                "request_id=%s %s %s -> %s (%.2f ms)",
                request_id,
                method_label,
                scope["path"],
                status_code,
                duration_s * 1000.0,
            )
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


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    owns_client = False
    if app.state.rpc_client is None:
        try:
            app.state.rpc_client = await RpcClient.connect(settings)
            owns_client = True
        except BackendConnectionError as exc:
            logger.error("grpc dial error: %s", exc)
    try:
        yield
    finally:
        if owns_client and app.state.rpc_client is not None:
            await app.state.rpc_client.close()
            app.state.rpc_client = None


def create_app(
    settings: Settings | None = None,
    rpc_client: RpcClient | None = None,
) -> FastAPI:
    """Create the configured gateway application.

    Pass `rpc_client` to reuse an existing facade; otherwise one is dialed when the
    application starts and closed when it stops.
    """

    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Api gateway",
        description=(
            "REST gateway for the user service. Each endpoint translates a JSON request "
            "into one gRPC call and returns the backend response."
        ),
        version=settings.VERSION,
        docs_url=SWAGGER_UI_PATH,
        openapi_url=OPENAPI_PATH,
        redoc_url=None,
        lifespan=_lifespan,
        openapi_tags=[
            {"name": "health", "description": "Gateway liveness, readiness, and version metadata."},
            {"name": "customer", "description": "Customer CRUD."},
            {"name": "system user", "description": "System user CRUD."},
            {"name": "seller", "description": "Seller CRUD."},
            {"name": "branch", "description": "Branch CRUD."},
            {"name": "shop", "description": "Shop CRUD."},
        ],
    )
    app.state.settings = settings
    app.state.rpc_client = rpc_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.ALLOWED_ORIGINS),
        allow_credentials="*" not in settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestContextMiddleware)

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/swagger", include_in_schema=False)
    def swagger_redirect() -> RedirectResponse:
        return RedirectResponse(url=SWAGGER_UI_PATH)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(customer_router)
    app.include_router(system_user_router)
    app.include_router(seller_router)
    app.include_router(branch_router)
    app.include_router(shop_router)

    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount(STATIC_PREFIX, StaticFiles(directory=static_dir), name="images")
    else:
        logger.warning("Static directory %s not found; %s is not served", static_dir, STATIC_PREFIX)

    return app


app = create_app()
