"""
Domain-level exception hierarchy for enrollment & billing.

These exceptions subclass the shared exception classes so they continue to map
to the standardized error contract, while carrying the machine-readable codes
the admin client switches on.
"""

from fastapi import status

from shared.exceptions import (
    ConflictError,
    DomainError,
    ExternalServiceError,
    InvalidInputError,
    NotFoundError,
)


class StudentNotFoundError(NotFoundError):
    """Raised when a profile is missing or belongs to another program."""
    code = "student_not_found"

    def __init__(self, message: str = "Student not found", **kwargs) -> None:
        super().__init__(message, **kwargs)


class FamilyNotFoundError(NotFoundError):
    """Raised when no profile of the program carries the family reference."""
    code = "family_not_found"

    def __init__(self, message: str = "Family not found", **kwargs) -> None:
        super().__init__(message, **kwargs)


class AlreadyWithdrawnError(ConflictError):
    code = "already_withdrawn"

    def __init__(self, message: str = "Student is already withdrawn", **kwargs) -> None:
        super().__init__(message, **kwargs)


class NotWithdrawnError(ConflictError):
    code = "not_withdrawn"

    def __init__(self, message: str = "Student is not withdrawn", **kwargs) -> None:
        super().__init__(message, **kwargs)


class NoActiveSubscriptionError(NotFoundError):
    code = "no_active_subscription"

    def __init__(self, message: str = "No active subscription found for this family", **kwargs) -> None:
        super().__init__(message, **kwargs)


class InvalidTransitionError(InvalidInputError):
    """Raised when an enrollment status change is not allowed by the state machine."""


class BillingNotConfiguredError(InvalidInputError):
    code = "billing_not_configured"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, message: str = "Billing product is not configured", **kwargs) -> None:
        super().__init__(message, **kwargs)


class BillingProviderError(ExternalServiceError):
    """
    Raised by the subscription gateway when the provider rejects or fails a call.

    Never surfaces to callers of the withdrawal flows: the engine turns it into
    ``billing_updated=False`` with the provider message.
    """


__all__ = [
    "DomainError",
    "InvalidInputError",
    "StudentNotFoundError",
    "FamilyNotFoundError",
    "AlreadyWithdrawnError",
    "NotWithdrawnError",
    "NoActiveSubscriptionError",
    "InvalidTransitionError",
    "BillingNotConfiguredError",
    "BillingProviderError",
]
