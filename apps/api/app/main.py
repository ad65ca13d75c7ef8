from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from app.api.errors import register_exception_handlers
from app.api.routes import router as api_router
from app.core.config import get_settings
from app.logging import configure_logging
from app.middleware.correlation_id import CorrelationIdMiddleware
from app.middleware.request_logging import RequestLoggingMiddleware
from app.otel import correlation_request_hook, setup_otel


configure_logging()
logger = logging.getLogger("app.lifecycle")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("system.started")
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    # Added last runs first: the correlation id is bound before request logging.
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(CorrelationIdMiddleware)
    register_exception_handlers(application)
    application.include_router(api_router)

    setup_otel(settings)
    FastAPIInstrumentor.instrument_app(application, server_request_hook=correlation_request_hook)
    return application


app = create_app()
