from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from governance.config import load_env_files


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    _configure_logging()

    application = FastAPI(
        title="Governance Register API",
        version="1.0.0",
    )

    from governance.api.routers import documents_router, entries_router

    application.include_router(entries_router)
    application.include_router(documents_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
