# Hourly Invoicer backend entrypoint: FastAPI application factory.

from contextlib import asynccontextmanager

from fastapi import FastAPI

from invoicer.app.api import auth, clients, invoices, settings as settings_routes
from invoicer.app.api.cors import install_cors
from invoicer.app.api.errors import register_exception_handlers
from invoicer.app.core.logging import configure_logging, get_logger
from invoicer.app.core.settings import Settings, get_settings
from invoicer.app.db.session import Database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    applied = app.state.database.init()
    logger.info("Starting %s in %s mode (%d migrations applied)", settings.app_name, settings.environment, len(applied))
    try:
        yield
    finally:
        app.state.database.dispose()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application around an explicitly owned database handle.

    Raises ``RuntimeError`` when no token signing key is configured.
    """
    settings = settings or get_settings()
    settings.validate()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)

    install_cors(app)
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(settings_routes.router)
    app.include_router(clients.router)
    app.include_router(invoices.router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app
