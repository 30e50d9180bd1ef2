from enrollment.domain.value_objects.billing_adjustment import AdjustmentKind, BillingAdjustment
from enrollment.domain.value_objects.family_key import FamilyKey
from enrollment.domain.value_objects.withdrawal_reason import (
    MAX_REASON_NOTE_LENGTH,
    WithdrawalReason,
    build_reason_label,
)

__all__ = [
    "AdjustmentKind",
    "BillingAdjustment",
    "FamilyKey",
    "WithdrawalReason",
    "MAX_REASON_NOTE_LENGTH",
    "build_reason_label",
]
