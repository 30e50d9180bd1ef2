"""
Enrollment Repository Protocols (Interfaces)
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence
from uuid import UUID

from enrollment.domain.entities import (
    BillingAssignment,
    ClassEnrollment,
    EnrollmentRecord,
    StudentProfile,
    Subscription,
)
from enrollment.domain.value_objects import FamilyKey


class IStudentProfileRepository(Protocol):
    """Student profile repository interface"""

    async def get_by_id(self, profile_id: UUID) -> Optional[StudentProfile]:
        """Get profile by ID"""
        ...

    async def exists_in_family(self, key: FamilyKey) -> bool:
        """True when at least one profile, active or not, belongs to the family"""
        ...

    async def list_active_in_family(self, key: FamilyKey) -> Sequence[StudentProfile]:
        """Active (REGISTERED or ENROLLED) members, oldest first"""
        ...

    async def count_active_in_family(self, key: FamilyKey) -> int:
        """Number of active members, read from the current transaction"""
        ...

    async def update(self, profile: StudentProfile) -> StudentProfile:
        ...


class IEnrollmentRecordRepository(Protocol):
    """Enrollment record repository interface"""

    async def get_open_for_profile(self, profile_id: UUID) -> Optional[EnrollmentRecord]:
        """Current open (REGISTERED or ENROLLED) record of a profile"""
        ...

    async def add(self, record: EnrollmentRecord) -> EnrollmentRecord:
        ...

    async def update(self, record: EnrollmentRecord) -> EnrollmentRecord:
        ...


class IBillingAssignmentRepository(Protocol):
    """Billing assignment repository interface"""

    async def list_active_for_profile(self, profile_id: UUID) -> Sequence[BillingAssignment]:
        """Active assignments of a profile, newest first"""
        ...

    async def add(self, assignment: BillingAssignment) -> BillingAssignment:
        ...

    async def update(self, assignment: BillingAssignment) -> BillingAssignment:
        ...

    async def deactivate_all_for_subscription(self, subscription_id: UUID, at: datetime) -> int:
        """Deactivate every active assignment of a subscription, returning the count"""
        ...


class ISubscriptionRepository(Protocol):
    """Subscription mirror repository interface"""

    async def get_by_id(self, subscription_id: UUID) -> Optional[Subscription]:
        ...

    async def find_authoritative_for_family(
        self,
        family_reference_id: UUID,
        program: str,
        account_type: str,
    ) -> Optional[Subscription]:
        """
        Subscription of the most recently created active billing assignment
        of a family member whose subscription is active or paused
        """
        ...

    async def update(self, subscription: Subscription) -> Subscription:
        ...


class IClassEnrollmentRepository(Protocol):
    """Class roster repository interface"""

    async def get_active_for_profile(self, profile_id: UUID) -> Optional[ClassEnrollment]:
        ...

    async def update(self, enrollment: ClassEnrollment) -> ClassEnrollment:
        ...
