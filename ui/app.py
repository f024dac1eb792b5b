"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import load_config
from core.health import (
    HealthChecker,
    check_event_loop,
    create_generator_check,
    create_verify_check,
)
from core.issuer import IdIssuer
from internal.logging import get_logger, parse_level, StructuredLogger
from utils.crash import create_async_handler
from ui.routes import ids, api, health

VERSION = "1.0.0"


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()
    
    # Configure structured logging
    StructuredLogger.configure(min_level=parse_level(config.logging.level))
    logger_instance = get_logger()

    # Raises ConfigError before the app exists if the verify section is unusable
    issuer = IdIssuer(config.to_options(), logger=logger_instance)
    health_checker = HealthChecker()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger_instance.info("Application starting", version=VERSION, verify=issuer.verify_enabled)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        
        yield
        
        # Shutdown
        logger_instance.info("Application shutdown complete", **issuer.get_stats())

    app = FastAPI(
        title="Prefixed IDs",
        version=VERSION,
        description="prefixed, sortable, tamper-evident identifiers",
        lifespan=lifespan,
    )

    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("generator", create_generator_check(issuer), critical=True)
    health_checker.register("verify", create_verify_check(issuer), critical=False)

    # Initialize route modules with dependencies
    ids.init(issuer)
    api.init(issuer, health_checker)
    health.init(issuer, health_checker)

    # Include routers
    app.include_router(ids.router)
    app.include_router(api.router)
    app.include_router(health.router)

    app.state.issuer = issuer
    return app
