from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import Settings, load_settings
from app.core.logging import configure_logging
from app.db.migrations import apply_migrations
from app.nlp.adapter import Lemmatizer

configure_logging()
logger = logging.getLogger(__name__)


def _default_lemmatizer_factory(settings: Settings) -> Lemmatizer:
    from app.nlp.farasa import load_subprocess_lemmatizer

    return load_subprocess_lemmatizer(settings)


def create_app(
    settings: Settings | None = None,
    lemmatizer_factory: Callable[[Settings], Lemmatizer] = _default_lemmatizer_factory,
) -> FastAPI:
    app_settings = settings or load_settings()
    configure_logging(app_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        applied: list[str] = []

        try:
            app_settings.db_path.parent.mkdir(parents=True, exist_ok=True)
            applied = apply_migrations(app_settings.db_path)
            app.state.db_ready = True
            app.state.db_error = None
        except Exception as exc:
            app.state.db_ready = False
            app.state.db_error = str(exc)
            logger.exception(
                "backend_db_startup_failed",
                extra={"db_path": str(app_settings.db_path)},
            )

        lemmatizer: Lemmatizer | None = None
        try:
            lemmatizer = lemmatizer_factory(app_settings)
            if app_settings.analyzer_eager_start:
                await lemmatizer.ensure_ready()
            app.state.analyzer_ready = True
            app.state.analyzer_error = None
        except Exception as exc:
            app.state.analyzer_ready = False
            app.state.analyzer_error = str(exc)
            logger.exception(
                "backend_analyzer_startup_failed",
                extra={"analyzer_artifact": app_settings.analyzer_artifact},
            )
        app.state.lemmatizer = lemmatizer

        startup_status = "ok" if app.state.db_ready and app.state.analyzer_ready else "degraded"
        logger.info(
            "backend_startup",
            extra={
                "status": startup_status,
                "environment": app_settings.environment,
                "db_path": str(app_settings.db_path),
                "host": app_settings.host,
                "port": app_settings.port,
                "applied_migrations": applied,
                "db_error": app.state.db_error,
                "analyzer_error": app.state.analyzer_error,
                "analyzer": lemmatizer.metadata() if lemmatizer else None,
            },
        )
        try:
            yield
        finally:
            if lemmatizer is not None:
                await lemmatizer.aclose()
            logger.info("backend_shutdown")

    app = FastAPI(title="Mufradat Backend", version="0.1.0", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.db_ready = False
    app.state.db_error = None
    app.state.analyzer_ready = False
    app.state.analyzer_error = None
    app.state.lemmatizer = None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app_settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)
    return app


app = create_app()
