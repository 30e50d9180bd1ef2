"""
Enrollment composition root
Builds the withdrawal service from settings, one per request
"""
from __future__ import annotations

from fastapi import Depends

from shared.config import Settings, get_settings
from shared.infrastructure.database import DatabaseSessionFactory
from enrollment.application.services.withdrawal_service import WithdrawalService
from enrollment.infrastructure.adapters import EnrollmentUnitOfWork, StripeSubscriptionGateway

# Global singletons, created on first request
_session_factory: DatabaseSessionFactory | None = None
_gateway: StripeSubscriptionGateway | None = None


def get_session_factory(settings: Settings = Depends(get_settings)) -> DatabaseSessionFactory:
    """
    Get or create the global DatabaseSessionFactory singleton.
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = DatabaseSessionFactory(
            database_url=settings.effective_database_url,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
        )
    return _session_factory


def get_subscription_gateway(settings: Settings = Depends(get_settings)) -> StripeSubscriptionGateway:
    global _gateway
    if _gateway is None:
        _gateway = StripeSubscriptionGateway.from_settings(settings)
    return _gateway


def get_withdrawal_service(
    settings: Settings = Depends(get_settings),
    session_factory: DatabaseSessionFactory = Depends(get_session_factory),
    gateway: StripeSubscriptionGateway = Depends(get_subscription_gateway),
) -> WithdrawalService:
    """A fresh unit of work and service for every request."""
    return WithdrawalService(
        uow=EnrollmentUnitOfWork(session_factory),
        gateway=gateway,
        program=settings.DUGSI_PROGRAM,
        account_type=settings.STRIPE_ACCOUNT_TYPE,
    )


async def dispose_session_factory() -> None:
    """Close pooled connections; called on application shutdown."""
    global _session_factory
    if _session_factory is not None:
        await _session_factory.dispose()
        _session_factory = None
