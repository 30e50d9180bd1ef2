from uuid import uuid4

import pytest
from structlog.testing import capture_logs

from enrollment.application.commands import WithdrawChildCommand
from enrollment.application.queries import GetWithdrawPreviewQuery
from enrollment.domain.errors import (
    AlreadyWithdrawnError,
    BillingNotConfiguredError,
    InvalidInputError,
    StudentNotFoundError,
)
from enrollment.domain.types import EnrollmentStatus, SubscriptionStatus
from enrollment.domain.value_objects import BillingAdjustment, WithdrawalReason


def _withdraw(student_id, adjustment, note=None):
    return WithdrawChildCommand(
        student_id=student_id,
        reason=WithdrawalReason.FAMILY_MOVED,
        billing_adjustment=adjustment,
        reason_note=note,
    )


async def test_withdrawing_one_of_three_children_recalculates_and_matches_preview(service, store, gateway):
    _, (amina, bilal, _), subscription = store.seed_family(["Amina", "Bilal", "Sahra"], 23000)

    preview = await service.get_withdraw_preview(GetWithdrawPreviewQuery(student_id=amina.id))
    assert preview.active_children_count == 3
    assert preview.current_amount == 23000
    assert preview.recalculated_amount == 16000
    assert preview.rate_description == "2 children at $80/month each"
    assert preview.is_last_active_child is False
    assert preview.has_active_subscription is True

    result = await service.withdraw_child(
        _withdraw(amina.id, BillingAdjustment.auto_recalculate(), "Relocated")
    )

    assert result.withdrawn is True
    assert result.billing_updated is True
    assert result.billing_error is None
    ext = subscription.external_subscription_id
    assert gateway.calls == [("retrieve", ext), ("replace_item_price", ext, "si_default", preview.recalculated_amount)]
    assert store.subscription(subscription.id).amount == 16000

    assert store.profile(amina.id).status is EnrollmentStatus.WITHDRAWN
    record = store.records_for(amina.id)[-1]
    assert record.status is EnrollmentStatus.WITHDRAWN
    assert record.end_date is not None
    assert record.reason == "Family moved: Relocated"
    assert all(not a.is_active for a in store.assignments_for(amina.id))
    assert all(a.is_active for a in store.assignments_for(bilal.id))


async def test_withdraw_deactivates_class_enrollment(service, store):
    _, (amina, _), _ = store.seed_family(["Amina", "Bilal"], 16000)
    class_enrollment = store.add_class_enrollment(amina)

    await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.auto_recalculate()))

    assert store.class_enrollments[class_enrollment.id].is_active is False


async def test_solo_student_without_subscription_needs_no_billing(service, store, gateway):
    solo = store.add_profile("Yusuf")

    result = await service.withdraw_child(_withdraw(solo.id, BillingAdjustment.auto_recalculate()))

    assert result.withdrawn is True
    assert result.billing_updated is True
    assert gateway.calls == []


async def test_solo_student_subscription_is_cancelled_through_fallback(service, store, gateway):
    solo = store.add_profile("Yusuf")
    subscription = store.add_subscription(8000)
    store.assign(subscription, solo, 8000)

    result = await service.withdraw_child(_withdraw(solo.id, BillingAdjustment.auto_recalculate()))

    assert result.billing_updated is True
    assert gateway.calls == [("cancel", subscription.external_subscription_id)]
    assert store.subscription(subscription.id).status is SubscriptionStatus.CANCELED


async def test_cancel_for_last_child_uses_pre_withdrawal_subscription(service, store, gateway):
    _, (amina,), subscription = store.seed_family(["Amina"], 8000)

    with capture_logs() as logs:
        result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.cancel_subscription()))

    assert result.billing_updated is True
    assert gateway.names() == ["cancel"]
    assert store.subscription(subscription.id).status is SubscriptionStatus.CANCELED
    assert any(e["event"] == "Using pre-transaction subscription fallback" for e in logs)


async def test_keep_current_is_rejected_for_last_active_child(service, store, gateway):
    _, (amina,), _ = store.seed_family(["Amina"], 8000)

    with pytest.raises(InvalidInputError, match="last active child"):
        await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.keep_current()))

    assert store.profile(amina.id).status is EnrollmentStatus.ENROLLED
    assert gateway.calls == []


async def test_custom_amount_is_rejected_for_last_active_child(service, store, gateway):
    _, (amina,), subscription = store.seed_family(["Amina"], 8000)

    with pytest.raises(InvalidInputError, match="last active child"):
        await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.custom(5000)))

    assert store.profile(amina.id).status is EnrollmentStatus.ENROLLED
    assert all(a.is_active for a in store.assignments_for(amina.id))
    assert store.subscription(subscription.id).amount == 8000
    assert gateway.calls == []


async def test_custom_amount_is_applied(service, store, gateway):
    _, (amina, _, _), subscription = store.seed_family(["Amina", "Bilal", "Sahra"], 23000)

    result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.custom(20000)))

    assert result.billing_updated is True
    assert gateway.calls[-1] == ("replace_item_price", subscription.external_subscription_id, "si_default", 20000)
    assert store.subscription(subscription.id).amount == 20000


async def test_non_positive_custom_amount_is_rejected_before_any_change(service, store):
    _, (amina, _), _ = store.seed_family(["Amina", "Bilal"], 16000)

    with pytest.raises(InvalidInputError):
        await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.custom(0)))

    assert store.profile(amina.id).status is EnrollmentStatus.ENROLLED


async def test_cancel_without_subscription_still_withdraws(service, store, gateway):
    reference = uuid4()
    amina = store.add_profile("Amina", reference)
    store.add_profile("Bilal", reference)

    result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.cancel_subscription()))

    assert result.withdrawn is True
    assert result.billing_updated is False
    assert result.billing_error == "No active subscription to cancel"
    assert gateway.calls == []


async def test_keep_current_makes_no_provider_call(service, store, gateway):
    _, (amina, _), subscription = store.seed_family(["Amina", "Bilal"], 16000)

    result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.keep_current()))

    assert result.billing_updated is True
    assert gateway.calls == []
    assert store.subscription(subscription.id).amount == 16000


async def test_provider_failure_keeps_withdrawal_and_reports_error(service, store, gateway):
    _, (amina, _, _), subscription = store.seed_family(["Amina", "Bilal", "Sahra"], 23000)
    gateway.fail_on["replace_item_price"] = "Your card was declined."

    result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.auto_recalculate()))

    assert result.withdrawn is True
    assert result.billing_updated is False
    assert result.billing_error == "Your card was declined."
    assert store.profile(amina.id).status is EnrollmentStatus.WITHDRAWN
    assert store.subscription(subscription.id).amount == 23000


async def test_local_failure_after_provider_success_is_reported_as_divergence(service, store, gateway, uow):
    _, (amina, _, _), subscription = store.seed_family(["Amina", "Bilal", "Sahra"], 23000)
    uow.fail_on["subscriptions.update"] = RuntimeError("connection reset")

    with capture_logs() as logs:
        result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.auto_recalculate()))

    assert result.withdrawn is True
    assert result.billing_updated is False
    assert "set amount to 16000" in result.billing_error
    assert "connection reset" in result.billing_error
    assert gateway.names() == ["retrieve", "replace_item_price"]
    assert store.subscription(subscription.id).amount == 23000

    critical = [e for e in logs if e["log_level"] == "critical"]
    assert len(critical) == 1
    assert critical[0]["operation"] == "amount_update"
    assert critical[0]["external_subscription_id"] == subscription.external_subscription_id
    assert critical[0]["new_amount"] == 16000


async def test_missing_price_configuration_is_rejected_before_any_change(service, store, gateway):
    _, (amina, _, _), _ = store.seed_family(["Amina", "Bilal", "Sahra"], 23000)
    gateway.price_configured = False

    with pytest.raises(BillingNotConfiguredError):
        await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.auto_recalculate()))

    assert store.profile(amina.id).status is EnrollmentStatus.ENROLLED
    assert gateway.calls == []


async def test_cancel_does_not_need_price_configuration(service, store, gateway):
    _, (amina, _), _ = store.seed_family(["Amina", "Bilal"], 16000)
    gateway.price_configured = False

    result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.cancel_subscription()))

    assert result.billing_updated is True
    assert gateway.names() == ["cancel"]


async def test_already_withdrawn(service, store):
    profile = store.add_profile("Amina", status=EnrollmentStatus.WITHDRAWN)

    with pytest.raises(AlreadyWithdrawnError):
        await service.withdraw_child(_withdraw(profile.id, BillingAdjustment.auto_recalculate()))


async def test_unknown_or_other_program_student_is_not_found(service, store):
    other = store.add_profile("Amina", program="MAHAD_PROGRAM")

    with pytest.raises(StudentNotFoundError):
        await service.withdraw_child(_withdraw(other.id, BillingAdjustment.auto_recalculate()))
    with pytest.raises(StudentNotFoundError):
        await service.withdraw_child(_withdraw(uuid4(), BillingAdjustment.auto_recalculate()))


async def test_local_failure_after_provider_cancel_is_reported_as_divergence(service, store, gateway, uow):
    _, (amina,), subscription = store.seed_family(["Amina"], 8000)
    uow.fail_on["billing_assignments.deactivate_all_for_subscription"] = RuntimeError("lock timeout")

    with capture_logs() as logs:
        result = await service.withdraw_child(_withdraw(amina.id, BillingAdjustment.cancel_subscription()))

    assert result.withdrawn is True
    assert result.billing_updated is False
    assert "cancel subscription" in result.billing_error
    assert "lock timeout" in result.billing_error
    assert gateway.names() == ["cancel"]

    assert store.profile(amina.id).status is EnrollmentStatus.WITHDRAWN
    assert all(not a.is_active for a in store.assignments_for(amina.id))
    # mirror write rolled back as a whole, status update included
    assert store.subscription(subscription.id).status is SubscriptionStatus.ACTIVE

    critical = [e for e in logs if e["log_level"] == "critical"]
    assert len(critical) == 1
    assert critical[0]["operation"] == "cancel_subscription"
    assert critical[0]["external_subscription_id"] == subscription.external_subscription_id
    assert critical[0]["intended_state"] == "cancel subscription"
    assert critical[0]["error"] == "lock timeout"


async def test_recalculation_to_zero_cancel_divergence_names_its_operation(service, store, gateway, uow):
    solo = store.add_profile("Yusuf")
    subscription = store.add_subscription(8000)
    store.assign(subscription, solo, 8000)
    uow.fail_on["subscriptions.update"] = RuntimeError("connection reset")

    with capture_logs() as logs:
        result = await service.withdraw_child(_withdraw(solo.id, BillingAdjustment.auto_recalculate()))

    assert result.withdrawn is True
    assert result.billing_updated is False
    assert gateway.names() == ["cancel"]
    assert store.subscription(subscription.id).status is SubscriptionStatus.ACTIVE

    critical = [e for e in logs if e["log_level"] == "critical"]
    assert [e["operation"] for e in critical] == ["auto_recalculate_cancel"]
