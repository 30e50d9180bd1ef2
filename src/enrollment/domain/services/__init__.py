from enrollment.domain.services.batch_policy import resolve_batch_adjustment
from enrollment.domain.services.enrollment_rules import EnrollmentRules
from enrollment.domain.services.rate_calculator import (
    calculate_rate,
    format_rate,
    rate_breakdown,
    validate_override_amount,
)

__all__ = [
    "EnrollmentRules",
    "calculate_rate",
    "format_rate",
    "rate_breakdown",
    "resolve_batch_adjustment",
    "validate_override_amount",
]
