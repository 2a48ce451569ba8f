"""
Application factory for the order console API.

``create_app`` wires explicitly constructed handles (settings, database
session factory, broker) into ``app.state``; routes reach them through
the dependencies in ``api.deps``. Serve it with::

    order-console                    # reads CONSOLE_CONFIG
    uvicorn order_console.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from order_console.api.exception_handlers import register_exception_handlers
from order_console.api.router import api_router
from order_console.core.broker import KafkaBroker
from order_console.core.config import Settings, load_settings
from order_console.core.logging_config import setup_logging
from order_console.db.base import create_db_engine, create_session_factory

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    session_factory: sessionmaker | None = None,
    broker: KafkaBroker | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Missing handles are created from ``settings`` (loaded from
    ``CONSOLE_CONFIG`` when not given). The broker is connected on startup
    and closed on shutdown; injected handles are used as they are.
    """
    settings = settings or load_settings()
    if configure_logging:
        setup_logging(settings.logger)

    engine = None
    if session_factory is None:
        engine = create_db_engine(settings.database)
        session_factory = create_session_factory(engine)
    owns_broker = broker is None
    if broker is None:
        broker = KafkaBroker(settings.kafka)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if owns_broker:
            broker.connect()
        logger.info("%s started", settings.app.app_name)
        try:
            yield
        finally:
            if owns_broker:
                broker.close()
            if engine is not None:
                engine.dispose()
            logger.info("%s stopped", settings.app.app_name)

    app = FastAPI(title=settings.app.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.broker = broker

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health(request: Request):
        store_ok = True
        db = request.app.state.session_factory()
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Specification store health check failed")
            store_ok = False
        finally:
            db.close()

        return {
            "status": "ok" if store_ok else "degraded",
            "store": store_ok,
            "broker": request.app.state.broker.is_ready,
        }

    return app


def run() -> None:
    """Console entry point: load the configuration and serve the API."""
    settings = load_settings()
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.app.http_host_listen,
        port=settings.app.http_port_listen,
        log_config=None,
    )
