import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hsa.api.middleware.error_handler import (
    handle_database_error,
    handle_generic_error,
    handle_hsa_error,
    handle_integrity_error,
    handle_validation_error,
)
from hsa.api.middleware.logging import RequestLoggingMiddleware
from hsa.api.v1 import router as v1_router
from hsa.api.v1.health import router as health_router
from hsa.config import settings
from hsa.core.exceptions import HSAError
from hsa.core.logging import setup_logging
from hsa.db.init_db import init_db
from hsa.db.session import async_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await init_db(async_engine)
    logger.info("HSA service started", extra={"env": settings.app_env})
    yield
    # Shutdown
    await async_engine.dispose()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="HSA Demo API",
        description="Health Savings Account ledger with virtual card authorization",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(HSAError, handle_hsa_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("hsa.main:app", host=settings.host, port=settings.port)
