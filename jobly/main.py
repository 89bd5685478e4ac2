"""
Jobly - Main Application

FastAPI backend with:
- PostgreSQL for companies, jobs, users and applications
- JWT authentication (admin / self-or-admin gates)

Run: uvicorn jobly.main:create_app --factory --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobly import __version__
from jobly.api.routes import api_router
from jobly.core.auth import authenticate_jwt, build_password_context
from jobly.core.config import Settings, get_settings
from jobly.core.errors import register_error_handlers
from jobly.core.logging import setup_logging
from jobly.db import Database, get_database
from jobly.schemas.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    database: Database = app.state.db
    if app.state.settings.auto_create_schema:
        database.create_all()
        logger.info("Database schema ensured")
    logger.info("Jobly API started")
    yield
    database.dispose()
    logger.info("Jobly API stopped")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application around an explicit settings and database object."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Jobly",
        description="""
        Job board API.

        ## Features
        - **Authentication**: JWT bearer tokens, admin and self-or-admin access
        - **Companies**: CRUD, filter by size and name
        - **Jobs**: CRUD, filter by title, salary and equity
        - **Users**: CRUD and job applications
        """,
        version=__version__,
        lifespan=lifespan,
        # identity is attached to every request; routes add their own gates
        dependencies=[Depends(authenticate_jwt)],
    )

    app.state.settings = settings
    app.state.db = database or Database.from_settings(settings)
    app.state.pwd_context = build_password_context(settings.bcrypt_rounds)

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check(database: Database = Depends(get_database)):
        """Detailed health check."""
        return {
            "status": "healthy",
            "database": "connected" if database.ping() else "disconnected",
        }

    return app
