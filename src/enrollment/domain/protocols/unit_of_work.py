"""
Enrollment Unit of Work Protocol
"""
from __future__ import annotations

from typing import Any, Protocol

from enrollment.domain.protocols.repositories import (
    IBillingAssignmentRepository,
    IClassEnrollmentRepository,
    IEnrollmentRecordRepository,
    IStudentProfileRepository,
    ISubscriptionRepository,
)


class IEnrollmentUnitOfWork(Protocol):
    """
    Transaction boundary over the enrollment repositories.

    Repositories are bound to the transaction of the current ``async with``
    block; leaving the block without ``commit()`` discards every change.
    """

    students: IStudentProfileRepository
    enrollments: IEnrollmentRecordRepository
    billing_assignments: IBillingAssignmentRepository
    subscriptions: ISubscriptionRepository
    class_enrollments: IClassEnrollmentRepository

    async def __aenter__(self) -> IEnrollmentUnitOfWork:
        ...

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
