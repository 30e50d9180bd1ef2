import copy
import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

import pytest

from enrollment.application.services.withdrawal_service import WithdrawalService
from enrollment.domain.entities import (
    BillingAssignment,
    ClassEnrollment,
    EnrollmentRecord,
    StudentProfile,
    Subscription,
)
from enrollment.domain.errors import BillingProviderError
from enrollment.domain.protocols import ProviderSubscription
from enrollment.domain.types import (
    ACTIVE_ENROLLMENT_STATUSES,
    EnrollmentStatus,
    SubscriptionStatus,
)
from enrollment.domain.value_objects import FamilyKey

PROGRAM = "DUGSI_PROGRAM"
ACCOUNT_TYPE = "DUGSI"


@pytest.fixture
def database_url() -> str:
    url = os.getenv("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL not set; skipping DB-dependent tests")
    return url


# ─────────────────────────────── In-memory store ───────────────────────────────

@dataclass
class InMemoryStore:
    profiles: dict = field(default_factory=dict)
    enrollments: dict = field(default_factory=dict)
    billing_assignments: dict = field(default_factory=dict)
    subscriptions: dict = field(default_factory=dict)
    class_enrollments: dict = field(default_factory=dict)
    _tick: int = 0

    def now(self) -> datetime:
        # strictly increasing so "newest" ordering is deterministic
        self._tick += 1
        return datetime(2020, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=self._tick)

    def tables(self) -> dict:
        return {
            "profiles": self.profiles,
            "enrollments": self.enrollments,
            "billing_assignments": self.billing_assignments,
            "subscriptions": self.subscriptions,
            "class_enrollments": self.class_enrollments,
        }

    # seeding helpers

    def add_profile(
        self,
        name: str,
        family_reference_id: Optional[UUID] = None,
        status: EnrollmentStatus = EnrollmentStatus.ENROLLED,
        program: str = PROGRAM,
    ) -> StudentProfile:
        profile = StudentProfile(
            id=uuid4(),
            full_name=name,
            program=program,
            family_reference_id=family_reference_id,
            status=status,
            created_at=self.now(),
        )
        self.profiles[profile.id] = profile
        record = EnrollmentRecord(
            id=uuid4(),
            program_profile_id=profile.id,
            status=status,
            start_date=self.now(),
            end_date=None if status is not EnrollmentStatus.WITHDRAWN else self.now(),
        )
        self.enrollments[record.id] = record
        return profile

    def add_subscription(
        self,
        amount: int,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
        account_type: str = ACCOUNT_TYPE,
        external_id: Optional[str] = None,
    ) -> Subscription:
        subscription = Subscription(
            id=uuid4(),
            external_subscription_id=external_id or f"sub_{uuid4().hex[:12]}",
            account_type=account_type,
            status=status,
            amount=amount,
            created_at=self.now(),
        )
        self.subscriptions[subscription.id] = subscription
        return subscription

    def assign(
        self,
        subscription: Subscription,
        profile: StudentProfile,
        amount: int = 8000,
        is_active: bool = True,
    ) -> BillingAssignment:
        now = self.now()
        assignment = BillingAssignment(
            id=uuid4(),
            subscription_id=subscription.id,
            program_profile_id=profile.id,
            amount=amount,
            is_active=is_active,
            start_date=now,
            created_at=now,
        )
        self.billing_assignments[assignment.id] = assignment
        return assignment

    def add_class_enrollment(self, profile: StudentProfile) -> ClassEnrollment:
        class_enrollment = ClassEnrollment(
            id=uuid4(),
            program_profile_id=profile.id,
            class_id=uuid4(),
            is_active=True,
            start_date=self.now(),
        )
        self.class_enrollments[class_enrollment.id] = class_enrollment
        return class_enrollment

    def seed_family(self, names: list[str], amount: int) -> tuple[UUID, list[StudentProfile], Subscription]:
        """Enrolled siblings sharing one active subscription."""
        family_reference_id = uuid4()
        subscription = self.add_subscription(amount)
        children = []
        for name in names:
            child = self.add_profile(name, family_reference_id)
            self.assign(subscription, child, amount // len(names))
            children.append(child)
        return family_reference_id, children, subscription

    # read helpers for assertions

    def profile(self, profile_id: UUID) -> StudentProfile:
        return self.profiles[profile_id]

    def subscription(self, subscription_id: UUID) -> Subscription:
        return self.subscriptions[subscription_id]

    def records_for(self, profile_id: UUID) -> list[EnrollmentRecord]:
        return sorted(
            (r for r in self.enrollments.values() if r.program_profile_id == profile_id),
            key=lambda r: r.start_date,
        )

    def assignments_for(self, profile_id: UUID) -> list[BillingAssignment]:
        return [a for a in self.billing_assignments.values() if a.program_profile_id == profile_id]


# ─────────────────────────────── Fake unit of work ───────────────────────────────

class _FakeRepository:
    table: str

    def __init__(self, uow: "FakeUnitOfWork") -> None:
        self.uow = uow

    @property
    def rows(self) -> dict:
        return self.uow.store.tables()[self.table]

    def _check(self, operation: str) -> None:
        self.uow.check_failure(f"{self.table}.{operation}")

    async def get_by_id(self, entity_id: UUID):
        row = self.rows.get(entity_id)
        return copy.deepcopy(row) if row is not None else None

    async def add(self, entity):
        self._check("add")
        self.rows[entity.id] = copy.deepcopy(entity)
        return copy.deepcopy(entity)

    async def update(self, entity):
        self._check("update")
        if entity.id not in self.rows:
            raise LookupError(f"{self.table} row {entity.id} does not exist")
        self.rows[entity.id] = copy.deepcopy(entity)
        return copy.deepcopy(entity)


class FakeStudentProfileRepository(_FakeRepository):
    table = "profiles"

    def _family(self, key: FamilyKey) -> list[StudentProfile]:
        members = []
        for profile in self.rows.values():
            if profile.program != key.program:
                continue
            if key.is_solo and profile.id != key.solo_student_id:
                continue
            if not key.is_solo and profile.family_reference_id != key.reference_id:
                continue
            members.append(profile)
        return sorted(members, key=lambda p: p.created_at)

    async def exists_in_family(self, key: FamilyKey) -> bool:
        return bool(self._family(key))

    async def list_active_in_family(self, key: FamilyKey) -> list[StudentProfile]:
        return [
            copy.deepcopy(p) for p in self._family(key) if p.status in ACTIVE_ENROLLMENT_STATUSES
        ]

    async def count_active_in_family(self, key: FamilyKey) -> int:
        return len([p for p in self._family(key) if p.status in ACTIVE_ENROLLMENT_STATUSES])


class FakeEnrollmentRecordRepository(_FakeRepository):
    table = "enrollments"

    async def get_open_for_profile(self, profile_id: UUID) -> Optional[EnrollmentRecord]:
        records = [
            r for r in self.rows.values()
            if r.program_profile_id == profile_id and r.status in ACTIVE_ENROLLMENT_STATUSES
        ]
        if not records:
            return None
        return copy.deepcopy(max(records, key=lambda r: r.start_date))


class FakeBillingAssignmentRepository(_FakeRepository):
    table = "billing_assignments"

    async def list_active_for_profile(self, profile_id: UUID) -> list[BillingAssignment]:
        rows = [a for a in self.rows.values() if a.program_profile_id == profile_id and a.is_active]
        return [copy.deepcopy(a) for a in sorted(rows, key=lambda a: a.created_at, reverse=True)]

    async def deactivate_all_for_subscription(self, subscription_id: UUID, at: datetime) -> int:
        self._check("deactivate_all_for_subscription")
        count = 0
        for assignment in self.rows.values():
            if assignment.subscription_id == subscription_id and assignment.is_active:
                assignment.deactivate(at)
                count += 1
        return count


class FakeSubscriptionRepository(_FakeRepository):
    table = "subscriptions"

    async def find_authoritative_for_family(
        self,
        family_reference_id: UUID,
        program: str,
        account_type: str,
    ) -> Optional[Subscription]:
        profiles = self.uow.store.profiles
        candidates = []
        for assignment in self.uow.store.billing_assignments.values():
            if not assignment.is_active:
                continue
            profile = profiles.get(assignment.program_profile_id)
            if profile is None or profile.family_reference_id != family_reference_id:
                continue
            if profile.program != program:
                continue
            subscription = self.rows.get(assignment.subscription_id)
            if subscription is None or subscription.account_type != account_type:
                continue
            if not subscription.is_authoritative:
                continue
            candidates.append((assignment.created_at, subscription))
        if not candidates:
            return None
        return copy.deepcopy(max(candidates, key=lambda c: c[0])[1])


class FakeClassEnrollmentRepository(_FakeRepository):
    table = "class_enrollments"

    async def get_active_for_profile(self, profile_id: UUID) -> Optional[ClassEnrollment]:
        for class_enrollment in self.rows.values():
            if class_enrollment.program_profile_id == profile_id and class_enrollment.is_active:
                return copy.deepcopy(class_enrollment)
        return None


class FakeUnitOfWork:
    """
    Transactional in-memory unit of work.

    Entering a block snapshots the store; leaving it without ``commit()`` or
    with an exception restores the snapshot. ``fail_on`` maps
    ``"<table>.<operation>"`` to an exception raised by that write.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.fail_on: dict[str, Exception] = {}
        self.commits = 0
        self._snapshot: Optional[dict] = None
        self._committed = False
        self.students = FakeStudentProfileRepository(self)
        self.enrollments = FakeEnrollmentRecordRepository(self)
        self.billing_assignments = FakeBillingAssignmentRepository(self)
        self.subscriptions = FakeSubscriptionRepository(self)
        self.class_enrollments = FakeClassEnrollmentRepository(self)

    def check_failure(self, operation: str) -> None:
        error = self.fail_on.get(operation)
        if error is not None:
            raise error

    async def __aenter__(self) -> "FakeUnitOfWork":
        if self._snapshot is not None:
            raise RuntimeError("UnitOfWork blocks cannot be nested")
        self._snapshot = copy.deepcopy(self.store.tables())
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None or not self._committed:
            await self.rollback()
        self._snapshot = None

    async def commit(self) -> None:
        self.check_failure("commit")
        self._committed = True
        self.commits += 1

    async def rollback(self) -> None:
        if self._snapshot is None:
            return
        for name, rows in self._snapshot.items():
            table = self.store.tables()[name]
            table.clear()
            table.update(copy.deepcopy(rows))


# ─────────────────────────────── Fake gateway ───────────────────────────────

class RecordingGateway:
    """Subscription gateway that records every call and fails on request."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail_on: dict[str, str] = {}
        self.items: dict[str, tuple[str, ...]] = {}
        self.price_configured = True

    @property
    def is_price_configured(self) -> bool:
        return self.price_configured

    def _record(self, *call) -> None:
        message = self.fail_on.get(call[0])
        if message is not None:
            raise BillingProviderError(message)
        self.calls.append(call)

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    async def retrieve(self, external_subscription_id: str) -> ProviderSubscription:
        self._record("retrieve", external_subscription_id)
        return ProviderSubscription(
            id=external_subscription_id,
            status="active",
            item_ids=self.items.get(external_subscription_id, ("si_default",)),
        )

    async def replace_item_price(self, external_subscription_id: str, item_id: str, amount: int) -> None:
        self._record("replace_item_price", external_subscription_id, item_id, amount)

    async def set_collection_paused(self, external_subscription_id: str, paused: bool) -> None:
        self._record("set_collection_paused", external_subscription_id, paused)

    async def cancel(self, external_subscription_id: str) -> None:
        self._record("cancel", external_subscription_id)


# ─────────────────────────────── Fixtures ───────────────────────────────

@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow(store: InMemoryStore) -> FakeUnitOfWork:
    return FakeUnitOfWork(store)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def service(uow: FakeUnitOfWork, gateway: RecordingGateway) -> WithdrawalService:
    return WithdrawalService(uow=uow, gateway=gateway, program=PROGRAM, account_type=ACCOUNT_TYPE)
