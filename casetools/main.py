from contextlib import asynccontextmanager

from fastapi import FastAPI

from casetools.config import get_settings
from casetools.infrastructure.notifications import (
    get_notification_dispatcher,
    reset_notification_dispatcher,
)
from casetools.interfaces.api.routes import register_routes
from casetools.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup and release the broker on shutdown."""

    configure_logging(get_settings().log_level)
    yield
    get_notification_dispatcher().close()
    reset_notification_dispatcher()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Case notifications", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
