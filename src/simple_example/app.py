"""
SimpleExample Users API
Layered CRUD service: routes -> service -> repository -> relational store
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simple_example.api.routes import health, users
from simple_example.config.settings import ALLOWED_ORIGINS, LOG_LEVEL
from simple_example.database.connection import close_database, init_database
from simple_example.utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    await init_database()
    yield
    await close_database()


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, error handling and routes"""
    app = FastAPI(
        title="SimpleExample Users API",
        description="CRUD API for user management",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials="*" not in ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix="/users", tags=["Users"])

    return app


app = create_app()
