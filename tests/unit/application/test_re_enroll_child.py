import pytest

from enrollment.application.commands import ReEnrollChildCommand
from enrollment.domain.errors import BillingNotConfiguredError, NotWithdrawnError
from enrollment.domain.types import EnrollmentStatus


async def test_re_enroll_joins_family_subscription_and_recalculates(service, store, gateway):
    reference, (amina, bilal), subscription = store.seed_family(["Amina", "Bilal"], 16000)
    sahra = store.add_profile("Sahra", reference, status=EnrollmentStatus.WITHDRAWN)
    store.assign(subscription, sahra, 8000, is_active=False)

    result = await service.re_enroll_child(ReEnrollChildCommand(student_id=sahra.id))

    assert result.re_enrolled is True
    assert result.billing_updated is True
    assert result.billing_error is None
    assert gateway.calls[-1] == ("replace_item_price", subscription.external_subscription_id, "si_default", 23000)
    assert store.subscription(subscription.id).amount == 23000

    profile = store.profile(sahra.id)
    assert profile.status is EnrollmentStatus.ENROLLED
    open_record = store.records_for(sahra.id)[-1]
    assert open_record.status is EnrollmentStatus.ENROLLED
    assert open_record.end_date is None

    new_assignments = [a for a in store.assignments_for(sahra.id) if a.is_active]
    assert len(new_assignments) == 1
    assert new_assignments[0].amount == 23000
    # siblings keep their original assignment amounts
    assert [a.amount for a in store.assignments_for(amina.id)] == [8000]
    assert [a.amount for a in store.assignments_for(bilal.id)] == [8000]


async def test_re_enroll_without_family_subscription(service, store, gateway):
    solo = store.add_profile("Yusuf", status=EnrollmentStatus.WITHDRAWN)

    result = await service.re_enroll_child(ReEnrollChildCommand(student_id=solo.id))

    assert result.re_enrolled is True
    assert result.billing_updated is False
    assert result.billing_error == "No active subscription"
    assert store.profile(solo.id).status is EnrollmentStatus.ENROLLED
    assert store.assignments_for(solo.id) == []
    assert gateway.calls == []


async def test_re_enroll_rejects_active_student(service, store):
    profile = store.add_profile("Amina")

    with pytest.raises(NotWithdrawnError):
        await service.re_enroll_child(ReEnrollChildCommand(student_id=profile.id))


async def test_re_enroll_requires_price_configuration_when_subscribed(service, store, gateway):
    reference, _, _ = store.seed_family(["Amina"], 8000)
    bilal = store.add_profile("Bilal", reference, status=EnrollmentStatus.WITHDRAWN)
    gateway.price_configured = False

    with pytest.raises(BillingNotConfiguredError):
        await service.re_enroll_child(ReEnrollChildCommand(student_id=bilal.id))

    assert store.profile(bilal.id).status is EnrollmentStatus.WITHDRAWN


async def test_re_enroll_provider_failure_is_reported(service, store, gateway):
    reference, _, subscription = store.seed_family(["Amina"], 8000)
    bilal = store.add_profile("Bilal", reference, status=EnrollmentStatus.WITHDRAWN)
    gateway.fail_on["retrieve"] = "No such subscription"

    result = await service.re_enroll_child(ReEnrollChildCommand(student_id=bilal.id))

    assert result.re_enrolled is True
    assert result.billing_updated is False
    assert result.billing_error == "No such subscription"
    assert store.subscription(subscription.id).amount == 8000
