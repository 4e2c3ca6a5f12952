"""Agent Portal API: FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from agent_portal.core.config import Settings, settings as default_settings
from agent_portal.core.exceptions import register_exception_handlers
from agent_portal.core.session import SessionStore
from agent_portal.db.base import Database
from agent_portal.middleware.session import SessionMiddleware
from agent_portal.schemas.common import HealthResponse
from agent_portal.services.storage import LocalBlobStorage

# v1 routers
from agent_portal.routers.v1.agents import router as agents_v1_router
from agent_portal.routers.v1.audit import dashboard_router as dashboard_v1_router
from agent_portal.routers.v1.audit import router as audit_v1_router
from agent_portal.routers.v1.auth import router as auth_v1_router
from agent_portal.routers.v1.documents import router as documents_v1_router
from agent_portal.routers.v1.inspections import router as inspections_v1_router

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and storage root once, optionally seed, dispose the engine on exit."""
    database: Database = app.state.database
    logger.info("Starting %s (%s)", app.state.settings.app_name, app.state.settings.app_env)
    await database.init_schema()
    app.state.storage.root.mkdir(parents=True, exist_ok=True)
    if app.state.settings.seed_demo_data:
        from agent_portal.db.seed import seed_demo_data

        await seed_demo_data(database)
    try:
        yield
    finally:
        await database.dispose()


def create_app(
    settings: Settings | None = None,
    *,
    database: Database | None = None,
    storage: LocalBlobStorage | None = None,
) -> FastAPI:
    settings = settings or default_settings
    _configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )

    # --- Collaborators, constructed once and shared via app.state ---
    session_store = SessionStore.from_settings(settings)
    storage = storage or LocalBlobStorage.from_settings(settings)
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)
    app.state.session_store = session_store
    app.state.storage = storage

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Session cookie → request.state.user ---
    app.add_middleware(SessionMiddleware, store=session_store)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(auth_v1_router, prefix="/api/v1")
    app.include_router(agents_v1_router, prefix="/api/v1")
    app.include_router(inspections_v1_router, prefix="/api/v1")
    app.include_router(documents_v1_router, prefix="/api/v1")
    app.include_router(audit_v1_router, prefix="/api/v1")
    app.include_router(dashboard_v1_router, prefix="/api/v1")

    # --- Stored PDFs, served at the URLs handed out by /documents/{id}/url ---
    if settings.storage_base_url.startswith("/"):
        app.mount(
            settings.storage_base_url,
            StaticFiles(directory=storage.root, check_dir=False),
            name="files",
        )

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
