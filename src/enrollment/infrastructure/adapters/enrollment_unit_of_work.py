"""
Enrollment Unit of Work
Coordinates enrollment repositories within a transaction
"""
from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_unit_of_work import SQLAlchemyUnitOfWork
from enrollment.infrastructure.persistence.repositories import (
    BillingAssignmentRepository,
    ClassEnrollmentRepository,
    EnrollmentRecordRepository,
    StudentProfileRepository,
    SubscriptionRepository,
)


class EnrollmentUnitOfWork(SQLAlchemyUnitOfWork):
    """
    Unit of Work for the enrollment module.

    Repositories are created lazily on first access and bound to the
    session of the current block; they are dropped when the block ends.

    Usage:
        async with uow:
            profile = await uow.students.get_by_id(student_id)
            profile.withdraw()
            await uow.students.update(profile)
            await uow.commit()
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        super().__init__(session_factory)
        self._students: Optional[StudentProfileRepository] = None
        self._enrollments: Optional[EnrollmentRecordRepository] = None
        self._billing_assignments: Optional[BillingAssignmentRepository] = None
        self._subscriptions: Optional[SubscriptionRepository] = None
        self._class_enrollments: Optional[ClassEnrollmentRepository] = None

    @property
    def students(self) -> StudentProfileRepository:
        if self._students is None:
            self._students = StudentProfileRepository(self.session)
        return self._students

    @property
    def enrollments(self) -> EnrollmentRecordRepository:
        if self._enrollments is None:
            self._enrollments = EnrollmentRecordRepository(self.session)
        return self._enrollments

    @property
    def billing_assignments(self) -> BillingAssignmentRepository:
        if self._billing_assignments is None:
            self._billing_assignments = BillingAssignmentRepository(self.session)
        return self._billing_assignments

    @property
    def subscriptions(self) -> SubscriptionRepository:
        if self._subscriptions is None:
            self._subscriptions = SubscriptionRepository(self.session)
        return self._subscriptions

    @property
    def class_enrollments(self) -> ClassEnrollmentRepository:
        if self._class_enrollments is None:
            self._class_enrollments = ClassEnrollmentRepository(self.session)
        return self._class_enrollments

    def _reset_repositories(self) -> None:
        self._students = None
        self._enrollments = None
        self._billing_assignments = None
        self._subscriptions = None
        self._class_enrollments = None
