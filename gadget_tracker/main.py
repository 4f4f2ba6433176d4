import os
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import structlog

from .config import settings
from .db import Base, engine
from .errors import register_error_handlers
from .logging import setup_logging, RequestIdMiddleware
from .routes.users import router as users_router
from .routes.assets import router as assets_router
from .routes.qr import router as qr_router
from .routes.dashboard import router as dashboard_router
from .routes.exports import router as exports_router
from .routes.notifications import router as notifications_router


logger = structlog.get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name)

    # Middlewares
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    register_error_handlers(app)

    # Routers
    app.include_router(users_router)
    app.include_router(assets_router)
    app.include_router(qr_router)
    app.include_router(dashboard_router)
    app.include_router(exports_router)
    app.include_router(notifications_router)

    # Export artifacts (CSV sheets, HTML reports)
    os.makedirs(settings.exports_dir, exist_ok=True)
    app.mount(
        settings.downloads_url_prefix.rstrip("/"),
        StaticFiles(directory=settings.exports_dir),
        name="downloads",
    )

    # Metrics
    if settings.enable_metrics:
        Instrumentator().instrument(app).expose(app)

    @app.get("/health")
    def health():
        return {"ok": True, "app": settings.app_name, "environment": settings.environment}

    @app.on_event("startup")
    def _startup():
        # Ensure local SQLite directory exists
        if settings.database_url.startswith("sqlite:///./"):
            os.makedirs("var", exist_ok=True)
        if settings.auto_create_db:
            Base.metadata.create_all(bind=engine)
            logger.info("tables_verified", tables=sorted(Base.metadata.tables.keys()))
        logger.info("startup_complete", environment=settings.environment)

    return app


app = create_app()
