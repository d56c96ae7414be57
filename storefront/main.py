"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, middleware, routers.
No business logic here. See storefront.core.lifespan and
storefront.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from storefront.api import api_router
from storefront.core.config import get_settings
from storefront.core.exception_handlers import register_exception_handlers
from storefront.core.lifespan import create_lifespan
from storefront.core.limiter import limiter
from storefront.infrastructure.external.storage.local_storage import PUBLIC_MOUNT
from storefront.middleware import AccessControlMiddleware, RequestLogMiddleware
from storefront.pages import render_root_page
from storefront.shared.telemetry import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost. Request order: request log, CORS, access control.
    app.add_middleware(AccessControlMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api")

    if settings.storage_backend == "local":
        app.mount(
            PUBLIC_MOUNT,
            StaticFiles(directory=settings.storage_root, check_dir=False),
            name="files",
        )

    @app.get("/", response_class=HTMLResponse)
    def root() -> HTMLResponse:
        """Landing page with links to API documentation."""
        return HTMLResponse(content=render_root_page(settings.app_name, settings.app_version))

    return app


app = create_app()
