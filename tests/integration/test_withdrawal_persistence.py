from uuid import uuid4

import pytest

from enrollment.application.commands import WithdrawChildCommand, WithdrawFamilyCommand
from enrollment.application.services.withdrawal_service import WithdrawalService
from enrollment.domain.entities import BillingAssignment, EnrollmentRecord, StudentProfile, Subscription
from enrollment.domain.types import EnrollmentStatus, SubscriptionStatus
from enrollment.domain.value_objects import BillingAdjustment, FamilyKey, WithdrawalReason
from enrollment.infrastructure.adapters import EnrollmentUnitOfWork
from enrollment.infrastructure.persistence import models  # noqa: F401  registers tables
from shared.infrastructure.database import Base, DatabaseSessionFactory

from conftest import ACCOUNT_TYPE, PROGRAM, RecordingGateway


@pytest.fixture
async def session_factory(database_url):
    factory = DatabaseSessionFactory(database_url, pool_size=2, max_overflow=0)
    async with factory.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield factory
    async with factory.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await factory.dispose()


async def _seed_family(uow, names, amount):
    reference = uuid4()
    subscription = Subscription(
        id=uuid4(),
        external_subscription_id=f"sub_{uuid4().hex[:12]}",
        account_type=ACCOUNT_TYPE,
        status=SubscriptionStatus.ACTIVE,
        amount=amount,
    )
    children = []
    async with uow:
        await uow.subscriptions.add(subscription)
        for name in names:
            child = await uow.students.add(
                StudentProfile(
                    id=uuid4(),
                    full_name=name,
                    program=PROGRAM,
                    family_reference_id=reference,
                    status=EnrollmentStatus.ENROLLED,
                )
            )
            await uow.enrollments.add(EnrollmentRecord.open(child.id))
            await uow.billing_assignments.add(
                BillingAssignment.create(subscription.id, child.id, amount // len(names))
            )
            children.append(child)
        await uow.commit()
    return reference, children, subscription


async def test_family_queries_and_subscription_lookup(session_factory):
    uow = EnrollmentUnitOfWork(session_factory)
    reference, children, subscription = await _seed_family(uow, ["Amina", "Bilal", "Sahra"], 23000)

    async with uow:
        key = FamilyKey.for_reference(PROGRAM, reference)
        assert await uow.students.exists_in_family(key)
        assert await uow.students.count_active_in_family(key) == 3
        members = await uow.students.list_active_in_family(key)
        assert [m.full_name for m in members] == ["Amina", "Bilal", "Sahra"]

        found = await uow.subscriptions.find_authoritative_for_family(reference, PROGRAM, ACCOUNT_TYPE)
        assert found.id == subscription.id
        assert await uow.subscriptions.find_authoritative_for_family(reference, PROGRAM, "MAHAD") is None

        solo_key = FamilyKey.of(
            StudentProfile(
                id=children[0].id,
                full_name="Amina",
                program=PROGRAM,
                family_reference_id=None,
                status=EnrollmentStatus.ENROLLED,
            )
        )
        assert await uow.students.count_active_in_family(solo_key) == 1


async def test_withdraw_child_persists_cascade_and_new_amount(session_factory):
    uow = EnrollmentUnitOfWork(session_factory)
    gateway = RecordingGateway()
    service = WithdrawalService(uow, gateway, PROGRAM, ACCOUNT_TYPE)
    _, (amina, bilal, _), subscription = await _seed_family(uow, ["Amina", "Bilal", "Sahra"], 23000)

    result = await service.withdraw_child(
        WithdrawChildCommand(
            student_id=amina.id,
            reason=WithdrawalReason.FAMILY_MOVED,
            reason_note="Relocated",
            billing_adjustment=BillingAdjustment.auto_recalculate(),
        )
    )

    assert result.billing_updated is True
    async with uow:
        assert (await uow.students.get_by_id(amina.id)).status is EnrollmentStatus.WITHDRAWN
        assert await uow.enrollments.get_open_for_profile(amina.id) is None
        assert await uow.billing_assignments.list_active_for_profile(amina.id) == []
        assert len(await uow.billing_assignments.list_active_for_profile(bilal.id)) == 1
        assert (await uow.subscriptions.get_by_id(subscription.id)).amount == 16000


async def test_family_cancel_deactivates_all_assignments(session_factory):
    uow = EnrollmentUnitOfWork(session_factory)
    gateway = RecordingGateway()
    service = WithdrawalService(uow, gateway, PROGRAM, ACCOUNT_TYPE)
    reference, children, subscription = await _seed_family(uow, ["Amina", "Bilal"], 16000)

    result = await service.withdraw_family(
        WithdrawFamilyCommand(
            family_reference_id=reference,
            reason=WithdrawalReason.FINANCIAL,
            billing_adjustment=BillingAdjustment.cancel_subscription(),
        )
    )

    assert result.withdrawn_count == 2
    assert gateway.names() == ["cancel"]
    async with uow:
        assert (await uow.subscriptions.get_by_id(subscription.id)).status is SubscriptionStatus.CANCELED
        for child in children:
            assert await uow.billing_assignments.list_active_for_profile(child.id) == []
