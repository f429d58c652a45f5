"""
main.py
-------
Entry point for the finance dashboard API.

Responsibilities:
    - Initialize the database connection pool and schema on startup.
    - Build the FastAPI application with CORS, request logging and all routers.
    - Run the server with uvicorn.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import API_HOST, API_PORT, CORS_ORIGINS
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers import (
    balance_handler,
    dashboard_handler,
    export_handler,
    savings_handler,
    spending_limit_handler,
    transaction_handler,
)
from handlers.error_handler import register_error_handlers
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(manage_database: bool = True) -> FastAPI:
    """
    Build the application.

    Args:
        manage_database: Open the pool and create tables on startup and close
            the pool on shutdown. Tests pass False and inject fake services.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ── 1. Database setup ─────────────────────────────────
        if manage_database:
            logger.info("Initializing database...")
            init_pool()
            create_tables()
        logger.info("Finance dashboard API is running")
        yield
        # ── 2. Cleanup on shutdown ────────────────────────────
        if manage_database:
            close_pool()
        logger.info("Finance dashboard API stopped")

    app = FastAPI(title="Finance Dashboard API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"Response: {response.status_code}")
        return response

    register_error_handlers(app)

    for module in (
        transaction_handler,
        savings_handler,
        spending_limit_handler,
        balance_handler,
        dashboard_handler,
        export_handler,
    ):
        app.include_router(module.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:
    """Run the API server."""
    logger.info(f"Starting server on {API_HOST}:{API_PORT}")
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
