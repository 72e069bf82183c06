"""Dependency Providers — wire repositories and services into route handlers.

Invariants:
    - One AsyncSession per request (get_db); services never outlive the request
    - Long-lived resources (db manager, payment gateway) come from app.state,
      created by the lifespan — no module-level connections

Design Decisions:
    - Plain functions with Depends over a DI container: FastAPI's overrides are
      enough for tests to swap the session and the gateway
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.repository_protocols import PaymentGateway
from app.infrastructure.database import get_db
from app.infrastructure.fund_repository import SqlFundRepository
from app.infrastructure.request_repository import SqlDonationRequestRepository
from app.infrastructure.user_repository import SqlUserRepository
from app.services.lifecycle_manager import DonationLifecycleManager
from app.services.payment_reconciler import PaymentReconciler
from app.services.query_engine import RequestQueryEngine
from app.services.user_accounts import UserAccountService


def get_payment_gateway(request: Request) -> PaymentGateway:
    """The gateway created by the lifespan."""
    gateway = getattr(request.app.state, "payment_gateway", None)
    if gateway is None:
        raise RuntimeError("Payment gateway not initialized")
    return gateway


def get_lifecycle_manager(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> DonationLifecycleManager:
    return DonationLifecycleManager(
        SqlDonationRequestRepository(db),
        settings.search_default_limit,
        settings.search_max_limit,
    )


def get_query_engine(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RequestQueryEngine:
    return RequestQueryEngine(
        SqlDonationRequestRepository(db),
        settings.search_default_limit,
        settings.search_max_limit,
    )


def get_payment_reconciler(
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
) -> PaymentReconciler:
    return PaymentReconciler(
        gateway,
        SqlFundRepository(db),
        settings.search_default_limit,
        settings.search_max_limit,
    )


def get_user_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserAccountService:
    return UserAccountService(
        SqlUserRepository(db),
        settings.search_default_limit,
        settings.search_max_limit,
    )
