"""BloodBond API — application factory and process lifecycle.

Invariants:
    - The database manager and the Stripe gateway are created in the lifespan,
      kept on app.state, and the engine is disposed on shutdown
    - Routers are included explicitly; error handlers are registered once
    - No authentication here: callers are authorized upstream of this service
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import donation_requests, health, payments, users
from app.config import Settings, get_settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging
from app.infrastructure.stripe_gateway import StripeGateway

logger = logging.getLogger(__name__)


def build_payment_gateway(settings: Settings) -> StripeGateway:
    return StripeGateway(
        api_key=settings.stripe_secret_key,
        currency=settings.stripe_currency,
        success_url=settings.checkout_success_url,
        cancel_url=settings.checkout_cancel_url,
        product_name=settings.checkout_product_name,
        max_retries=settings.stripe_max_retries,
        base_delay_ms=settings.stripe_base_delay_ms,
        max_delay_ms=settings.stripe_max_delay_ms,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.payment_gateway = build_payment_gateway(settings)
    logger.info(f"BloodBond API ready (currency={settings.stripe_currency})")
    try:
        yield
    finally:
        await app.state.db_manager.close()
        logger.info("BloodBond API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(title="BloodBond API", version="1.0.0", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for module in (health, donation_requests, payments, users):
        application.include_router(module.router)
    register_error_handlers(application)
    return application


app = create_app()
