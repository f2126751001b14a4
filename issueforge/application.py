import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from issueforge import __version__
from issueforge.config import Settings
from issueforge.database.store import IssueStore
from issueforge.error_handlers import register_exception_handlers
from issueforge.errors import StoreUnavailable
from issueforge.middleware.timing import timing_middleware
from issueforge.routes.issues import router as issues_router

logger = logging.getLogger(__name__)

ENDPOINTS = [
    "GET /api/issues - Get all issues",
    "POST /api/issues - Create new issue",
    "PUT /api/issues/:id - Update issue by ID",
    "DELETE /api/issues/:id - Delete issue by ID",
]


def create_app(settings: Settings) -> FastAPI:
    """Build the API service bound to the store described by settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: connect and create tables. No degraded mode if this fails.
        store = IssueStore(settings.database_url, echo=settings.echo_sql)
        try:
            await store.connect()
        except StoreUnavailable as exc:
            logger.critical(f"Database connection error: {exc.message}")
            await store.close()
            raise

        app.state.store = store
        try:
            yield
        finally:
            # Shutdown: dispose of the engine
            await store.close()

    app = FastAPI(title="IssueForge API", version=__version__, lifespan=lifespan)

    app.middleware("http")(timing_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(issues_router)

    @app.get("/")
    async def service_info():
        return {
            "message": "IssueForge API",
            "version": __version__,
            "database": store_backend(settings.database_url),
            "endpoints": ENDPOINTS,
        }

    return app


def store_backend(database_url: str) -> str:
    """Backend name of a SQLAlchemy URL, e.g. 'postgresql' for postgresql+asyncpg://..."""
    return database_url.split(":", 1)[0].split("+", 1)[0]
