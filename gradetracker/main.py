# /gradetracker/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Application-specific Router Imports ---
from .routers import (
    students_router,
    courses_router,
    enrollments_router,
    assessments_router,
    grades_router,
    auth_router,
    reports_router,
    dashboard_router,
    sync_router,
    mirror_router,
)

# --- Service Imports for Startup Logic ---
from .core.config import MIRROR_SERVE_PREFIX, configure_logging
from .db.database import SessionLocal, init_db
from .services.database_helpers.store_base import Store
from .services.database_helpers.store_sql import SQLKeyValueStore
from .services.database_service import DatabaseService
from .services.sync_helpers.backends import StoreMirrorBackend, SyncBackend
from .services.sync_service import SyncService, build_default_backends

logger = logging.getLogger(__name__)


def create_app(store: Optional[Store] = None, backends: Optional[Sequence[SyncBackend]] = None) -> FastAPI:
    """
    Builds the API. Without arguments the store is the SQL database from
    DATABASE_URL and the mirrors come from the environment; tests pass an
    in-memory store and their own backends.
    """

    # --- Application Lifecycle Management ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # This code runs ONCE when the application starts up.
        configure_logging()
        app_store = store
        if app_store is None:
            init_db()
            app_store = SQLKeyValueStore(SessionLocal)

        db_service = DatabaseService(app_store)
        tiers = build_default_backends(app_store) if backends is None else backends
        sync_service = SyncService(db_service, tiers)

        app.state.db_service = db_service
        app.state.sync_service = sync_service
        app.state.mirror = StoreMirrorBackend("mirror", app_store, MIRROR_SERVE_PREFIX)

        source = await sync_service.initialize()
        logger.info("Grade Tracker ready, data source: %s", source)
        yield
        # This code runs ONCE when the application shuts down.

    # --- FastAPI Application Instance Creation ---
    app = FastAPI(
        title="Grade Tracker API",
        description="Student records, grade computation and cloud mirroring for the grade tracker.",
        version="1.0.0",
        lifespan=lifespan
    )

    # --- Middleware Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- API Router Inclusion ---
    app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
    app.include_router(courses_router.router, prefix="/api/courses", tags=["Courses"])
    app.include_router(enrollments_router.router, prefix="/api/enrollments", tags=["Enrollments"])
    app.include_router(assessments_router.router, prefix="/api/assessments", tags=["Assessments"])
    app.include_router(grades_router.router, prefix="/api/grades", tags=["Grades"])
    app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"])
    app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
    app.include_router(sync_router.router, prefix="/api/sync", tags=["Cloud Sync"])
    # Mirror contract spoken by RestMirrorBackend of other deployments.
    app.include_router(mirror_router.router, prefix="/api/mirror", tags=["Mirror"])

    # --- Root / Health Check Endpoint ---
    @app.get("/", tags=["Health Check"])
    async def read_root():
        """A simple health check endpoint to confirm the API is online."""
        return {"status": "Grade Tracker backend is running!", "version": app.version}

    return app


app = create_app()
